"""UAA login FastAPI application — entry point for the web server."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from uaa_login import __version__
from uaa_login.core.logging import get_logger

log = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    log.info("api_starting")
    yield
    log.info("api_shutdown")


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    app = FastAPI(
        title="UAA Login",
        description="OAuth2 authorization code login against Cloud Foundry UAA",
        version=__version__,
        lifespan=lifespan,
    )

    # Register routers
    from uaa_login.api.routes.auth import root_router
    from uaa_login.api.routes.auth import router as auth_router
    from uaa_login.api.routes.health import router as health_router

    app.include_router(root_router)
    app.include_router(auth_router)
    app.include_router(health_router)

    return app
