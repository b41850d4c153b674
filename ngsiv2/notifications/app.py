"""FastAPI application receiving subscription notifications."""

import logging
from collections.abc import AsyncGenerator, Sequence
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from ngsiv2.core.logging import configure_logging
from ngsiv2.core.settings import Settings, get_settings

from .receiver import NotificationReceiver
from .router import create_notification_router

logger = logging.getLogger(__name__)


def create_app(
    receivers: Sequence[NotificationReceiver],
    settings: Settings | None = None,
) -> FastAPI:
    """Create and configure the notification receiver application."""
    settings = settings or get_settings()
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
        """Log startup and shutdown."""
        logger.info(
            "Starting %s v%s, notifications on %s",
            settings.app_name,
            settings.app_version,
            settings.notification_path,
        )

        yield

        logger.info("Shutting down %s", settings.app_name)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Receiver for NGSIv2 subscription notifications",
        lifespan=lifespan,
    )

    app.include_router(create_notification_router(receivers, settings))

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


def run(
    receivers: Sequence[NotificationReceiver],
    settings: Settings | None = None,
) -> None:
    """Serve the notification receiver with uvicorn until interrupted."""
    settings = settings or get_settings()
    uvicorn.run(
        create_app(receivers, settings),
        host=settings.host,
        port=settings.port,
        log_level="info" if not settings.debug else "debug",
    )
