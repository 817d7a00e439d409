"""Health check endpoint — reports service status and registry state."""

from fastapi import APIRouter, Depends

from puidv7.api.deps import get_registry
from puidv7.core.errors import PrefixRegistryError
from puidv7.core.prefix_registry import PrefixRegistry

router = APIRouter()


@router.get("/health")
async def health_check(registry: PrefixRegistry = Depends(get_registry)):
    """Check service status and whether the prefix registry is loadable."""
    if not registry.exists():
        return {"status": "ok", "registry": "missing", "prefixes": None}

    try:
        count = len(registry.get().prefixes)
    except PrefixRegistryError:
        return {"status": "degraded", "registry": "error", "prefixes": None}

    return {"status": "ok", "registry": "ok", "prefixes": count}
