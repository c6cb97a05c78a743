"""Application lifespan event handlers.

This module defines the lifespan context manager that handles:
- Application startup: logging, database engine, storage directories
- Application shutdown: engine disposal, span flush
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from foodies.core.config import Settings, get_settings
from foodies.database import close_database, init_database
from foodies.observability.logging import get_logger, setup_logging
from foodies.observability.tracing import shutdown_tracing


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from fastapi import FastAPI

    from foodies.storage import FileStorage

logger = get_logger(__name__)


class StartupError(RuntimeError):
    """Raised when the application cannot start with its configuration."""


def _check_secrets(settings: Settings) -> None:
    if not settings.JWT_SECRET_KEY:
        if settings.is_production:
            msg = "JWT_SECRET_KEY must be set in production"
            raise StartupError(msg)
        logger.warning("JWT_SECRET_KEY is empty; tokens are signed with an empty key")


async def _ensure_directories(settings: Settings, storage: FileStorage) -> None:
    for directory in (
        settings.tmp_dir,
        settings.public_dir,
        settings.avatar_dir,
        settings.recipes_dir,
    ):
        await storage.ensure_dir(directory)


async def _startup(app: FastAPI, settings: Settings) -> None:
    """Initialize application resources during startup.

    Args:
        app: The FastAPI application instance.
        settings: Application settings.
    """
    setup_logging(
        log_level=settings.logging.level,
        log_format=settings.logging.format,
        is_development=settings.is_development,
        log_file=settings.logging.file,
    )
    logger.info(
        "Starting application",
        app_name=settings.app.name,
        environment=settings.APP_ENV,
        debug=settings.app.debug,
    )

    _check_secrets(settings)
    await _ensure_directories(settings, app.state.file_storage)
    await init_database(settings)

    logger.info("Application startup complete")


async def _shutdown() -> None:
    logger.info("Shutting down application")
    await close_database()
    shutdown_tracing()
    logger.info("Application shutdown complete")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan context manager.

    Args:
        app: The FastAPI application instance.

    Yields:
        None after startup, before shutdown.
    """
    settings = getattr(app.state, "settings", None) or get_settings()

    await _startup(app, settings)
    try:
        yield
    finally:
        await _shutdown()
