"""puidv7 service — FastAPI application entry point.

Loads the prefix registry on startup and registers API routers.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from puidv7.api import health, ids, prefixes
from puidv7.core.config import settings
from puidv7.core.errors import PrefixRegistryError
from puidv7.core.prefix_registry import PrefixRegistry

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the prefix registry on startup."""
    logger.info("Starting puidv7 service...")

    app.state.prefix_registry = PrefixRegistry()
    if app.state.prefix_registry.exists():
        try:
            app.state.prefix_registry.load()
        except PrefixRegistryError as e:
            logger.error(f"Failed to load prefix registry: {e}")
    else:
        logger.info(f"No prefix registry at {app.state.prefix_registry.path}")

    logger.info("puidv7 service ready")
    yield

    logger.info("puidv7 service stopped")


app = FastAPI(
    title="puidv7",
    version="0.1.0",
    description="Prefixed, sortable UUIDv7 identifiers in Crockford base-32.",
    lifespan=lifespan,
)

app.include_router(health.router, prefix="/api", tags=["health"])
app.include_router(ids.router, prefix="/api", tags=["ids"])
app.include_router(prefixes.router, prefix="/api", tags=["prefixes"])


def run() -> None:
    """Run the service with uvicorn."""
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)
