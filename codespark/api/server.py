"""FastAPI application factory for the snippet manager."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from ..config import Settings
from ..logging_config import configure_logging
from ..services import Services, build_services
from .route import router


def create_app(services: Services | None = None) -> FastAPI:
    """Create the application; services are built from the environment when omitted."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if getattr(app.state, "services", None) is None:
            settings = Settings.from_env()
            configure_logging(settings.log_level)
            app.state.services = await build_services(settings)
        yield

    app = FastAPI(
        title="Codespark Snippet API",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.services = services
    app.include_router(router)
    return app


__all__ = ["create_app"]
