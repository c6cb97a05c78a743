"""Async SQLAlchemy engine and session management.

This module provides:
- Engine and session factory lifecycle driven by the application lifespan
- A per-request ``AsyncSession`` dependency
- Optional schema creation from the ORM metadata
- Health check utilities
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from foodies.core.config import get_settings
from foodies.database.models import BaseDatabaseModel, configure_models
from foodies.observability.logging import get_logger


if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from foodies.core.config import Settings

logger = get_logger(__name__)

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def build_engine(url: str, *, echo: bool = False, **kwargs: Any) -> AsyncEngine:
    """Create an async engine suited to the backend in ``url``.

    SQLite in-memory databases get a single shared connection so that every
    session sees the same data.
    """
    if url.startswith("sqlite"):
        return create_async_engine(
            url,
            echo=echo,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    return create_async_engine(url, echo=echo, pool_pre_ping=True, **kwargs)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory used by requests and tests alike.

    Objects stay usable after commit so services can map them to DTOs.
    """
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)


async def create_schema(engine: AsyncEngine) -> None:
    """Create all tables from the ORM metadata if they do not exist."""
    async with engine.begin() as conn:
        await conn.run_sync(BaseDatabaseModel.metadata.create_all)


async def init_database(
    settings: Settings | None = None,
    *,
    engine: AsyncEngine | None = None,
) -> None:
    """Initialize the engine and session factory.

    Should be called during application startup (lifespan).

    Args:
        settings: Settings to read the connection from. Defaults to get_settings().
        engine: Pre-built engine to adopt instead of creating one.
    """
    global _engine, _session_factory  # noqa: PLW0603

    settings = settings or get_settings()
    configure_models()

    if engine is None:
        logger.info(
            "Initializing database engine",
            host=settings.database.host,
            database=settings.database.name,
            driver=settings.database.driver,
        )
        engine = build_engine(
            settings.database_url,
            echo=settings.database.echo,
            pool_size=settings.database.pool_size,
            max_overflow=settings.database.max_overflow,
        )

    _engine = engine
    _session_factory = build_session_factory(engine)

    if settings.database.create_schema:
        await create_schema(engine)
        logger.info("Database schema ensured")


async def close_database() -> None:
    """Dispose of the engine. Should be called during application shutdown."""
    global _engine, _session_factory  # noqa: PLW0603

    if _engine is not None:
        logger.info("Closing database engine")
        await _engine.dispose()
    _engine = None
    _session_factory = None


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get the session factory.

    Raises:
        RuntimeError: If the database has not been initialized.
    """
    if _session_factory is None:
        msg = "Database not initialized. Call init_database() first."
        raise RuntimeError(msg)
    return _session_factory


async def get_db_session() -> AsyncIterator[AsyncSession]:
    """FastAPI dependency yielding one session per request.

    Uncommitted work is rolled back when the session closes.
    """
    async with get_session_factory()() as session:
        yield session


async def check_database_health() -> dict[str, str]:
    """Check health of the database connection."""
    if _engine is None:
        return {"database": "not_initialized"}
    try:
        async with _engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError):
        logger.opt(exception=True).warning("Database health check failed")
        return {"database": "unhealthy"}
    return {"database": "healthy"}
