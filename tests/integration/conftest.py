"""Integration test fixtures.

Each test gets a full application with its lifespan running: a fresh
in-memory database, storage under ``tmp_path`` and an httpx client talking
to the app over ASGI.
"""

from __future__ import annotations

import contextlib
from typing import TYPE_CHECKING, Any

import pytest
from helpers import TEST_PASSWORD, ReferenceData, bearer, seed_reference_data
from httpx import ASGITransport, AsyncClient
from prometheus_client import REGISTRY

from foodies.core.rate_limit import limiter
from foodies.database import get_session_factory
from foodies.factory import create_app


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Awaitable, Callable, Generator

    from fastapi import FastAPI

    from foodies.core.config import Settings


pytestmark = pytest.mark.integration


@pytest.fixture(autouse=True)
def reset_prometheus_registry() -> Generator[None]:
    """Unregister collectors created by the test's application.

    Every app instance registers its own request metrics, so leftovers
    would collide with the next test's app.
    """
    collectors_before = set(REGISTRY._names_to_collectors.keys())

    yield

    collectors_to_remove = [
        collector
        for name, collector in list(REGISTRY._names_to_collectors.items())
        if name not in collectors_before
    ]
    for collector in collectors_to_remove:
        with contextlib.suppress(Exception):
            REGISTRY.unregister(collector)


@pytest.fixture
async def app(settings: Settings) -> AsyncGenerator[FastAPI]:
    """Application with startup and shutdown run around the test."""
    application = create_app(settings)
    async with application.router.lifespan_context(application):
        yield application


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for testing."""
    limiter.reset()
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
async def seeded(app: FastAPI) -> ReferenceData:
    """Reference data in the application's database."""
    async with get_session_factory()() as session:
        return await seed_reference_data(session)


@pytest.fixture
def register(client: AsyncClient) -> Callable[..., Awaitable[dict[str, Any]]]:
    """Factory registering a user through the API and returning the body."""

    async def _register(
        name: str = "Alice",
        email: str = "alice@example.com",
        password: str = TEST_PASSWORD,
    ) -> dict[str, Any]:
        response = await client.post(
            "/api/auth/register",
            json={"name": name, "email": email, "password": password},
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _register


@pytest.fixture
async def alice(register: Callable[..., Awaitable[dict[str, Any]]]) -> dict[str, Any]:
    """A registered user: the register response body."""
    return await register()


@pytest.fixture
def alice_headers(alice: dict[str, Any]) -> dict[str, str]:
    return bearer(alice["token"])
