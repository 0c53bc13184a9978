"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from care_sync.config import Settings, get_settings
from care_sync.infrastructure.dependencies import SyncContainer, build_container
from care_sync.infrastructure.logging.log_config import setup_logging
from care_sync.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    container_factory: Callable[[Settings], SyncContainer] = build_container,
) -> FastAPI:
    """Factory function that builds and configures the FastAPI application.

    ``container_factory`` lets tests swap the HTTP gateways for in-memory fakes.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Application lifespan — configure logging, wire the sync core."""
        setup_logging(settings)
        app.state.container = container_factory(settings)
        logger.info("%s %s started (%s)", settings.app_title, settings.app_version, settings.app_env)

        yield

        # Shutdown
        await app.state.container.aclose()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Mount API routes
    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "care_sync.main:app",
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
