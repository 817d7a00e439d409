"""Prefix endpoints: derivation and registry lookups."""

from fastapi import APIRouter, Depends, HTTPException

from puidv7.api.deps import get_prefix, get_registry
from puidv7.core.errors import Puidv7Error
from puidv7.core.models import DeriveRequest, DeriveResponse
from puidv7.core.prefix_registry import PrefixRegistry
from puidv7.core.prefixer import derive_prefixes

router = APIRouter()


@router.post("/prefixes/derive", response_model=DeriveResponse)
async def derive(body: DeriveRequest):
    """Derive a unique prefix for each model name, in the order given."""
    try:
        prefixes = derive_prefixes(body.models)
    except Puidv7Error as e:
        raise HTTPException(status_code=400, detail=str(e))
    return DeriveResponse(prefixes=prefixes)


@router.get("/prefixes")
async def list_prefixes(registry: PrefixRegistry = Depends(get_registry)):
    """List the stored prefix assignments."""
    try:
        assignments = registry.get()
    except FileNotFoundError:
        raise HTTPException(status_code=404, detail="No prefix registry configured")
    except Puidv7Error as e:
        raise HTTPException(status_code=500, detail=str(e))

    return assignments.model_dump()


@router.get("/prefixes/{prefix}")
async def get_prefix_model(
    prefix: str = Depends(get_prefix),
    registry: PrefixRegistry = Depends(get_registry),
):
    """Get the model a prefix is assigned to."""
    try:
        model = registry.model_for(prefix)
    except FileNotFoundError:
        raise HTTPException(status_code=404, detail="No prefix registry configured")
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Prefix '{prefix}' is not assigned")
    except Puidv7Error as e:
        raise HTTPException(status_code=500, detail=str(e))

    return {"prefix": prefix, "model": model}
