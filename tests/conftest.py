"""Shared test fixtures and configuration for the Foodies API tests.

Tests run with ``APP_ENV=test``: an in-memory SQLite database through
aiosqlite, cheap bcrypt rounds and quiet logging. Every test gets its own
database and its own storage directory under ``tmp_path``.
"""

from __future__ import annotations

import os


os.environ["APP_ENV"] = "test"
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-minimum-32-characters-long")

from typing import TYPE_CHECKING  # noqa: E402

import pytest  # noqa: E402
from helpers import PNG_BYTES, ReferenceData, seed_reference_data  # noqa: E402

from foodies.core.config import Settings, get_settings  # noqa: E402
from foodies.core.config.settings import StorageSettings  # noqa: E402
from foodies.database.connection import (  # noqa: E402
    build_engine,
    build_session_factory,
    create_schema,
)
from foodies.database.models import configure_models  # noqa: E402
from foodies.storage import FileStorage  # noqa: E402


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Callable
    from pathlib import Path

    from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession


# =============================================================================
# Settings and storage
# =============================================================================


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Test settings with storage rooted in a temporary directory."""
    return get_settings().model_copy(
        update={
            "storage": StorageSettings(
                data_dir=tmp_path / "data",
                public_url_prefix="/public",
            ),
        }
    )


@pytest.fixture
def storage(settings: Settings) -> FileStorage:
    """File storage over the temporary public directory."""
    return FileStorage(settings.public_dir, settings.storage.public_url_prefix)


@pytest.fixture
def make_image(settings: Settings) -> Callable[..., Path]:
    """Factory writing an image into the temporary upload directory."""

    def _make(name: str = "dish.png", content: bytes = PNG_BYTES) -> Path:
        settings.tmp_dir.mkdir(parents=True, exist_ok=True)
        path = settings.tmp_dir / name
        path.write_bytes(content)
        return path

    return _make


# =============================================================================
# Database
# =============================================================================


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine]:
    """A fresh in-memory database with the full schema."""
    configure_models()
    engine = build_engine("sqlite+aiosqlite:///:memory:")
    await create_schema(engine)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """A session on the test database."""
    async with build_session_factory(engine)() as session:
        yield session


@pytest.fixture
async def reference_data(db_session: AsyncSession) -> ReferenceData:
    """Reference data in the unit test database."""
    return await seed_reference_data(db_session)
