"""FastAPI dependencies for prefix extraction and validation."""

from fastapi import HTTPException, Path, Request

from puidv7.core.codec import validate_prefix
from puidv7.core.errors import InvalidPrefixError
from puidv7.core.prefix_registry import PrefixRegistry


async def get_prefix(
    prefix: str = Path(..., description="3 lowercase a-z characters", min_length=3, max_length=3)
) -> str:
    """Extract and validate the prefix from the URL path.

    Returns the validated prefix string.
    Raises 400 if format is invalid.
    """
    try:
        validate_prefix(prefix)
    except InvalidPrefixError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return prefix


def get_registry(request: Request) -> PrefixRegistry:
    """Return the prefix registry attached to the app at startup."""
    return request.app.state.prefix_registry
