"""Unit tests for exception handling.

Tests cover:
- Status mapping for every service error code
- Error body shape for service, HTTP, validation and unexpected errors
- WWW-Authenticate on 401 responses
"""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from pydantic import BaseModel

from foodies.core.exceptions import SERVICE_ERROR_STATUS, setup_exception_handlers, status_for
from foodies.services import errors


class _Body(BaseModel):
    name: str


@pytest.fixture
def app() -> FastAPI:
    app = FastAPI()
    setup_exception_handlers(app)

    @app.get("/email-taken")
    async def email_taken() -> None:
        raise errors.EmailTakenError

    @app.get("/unauthorized")
    async def unauthorized() -> None:
        raise errors.UnauthorizedError

    @app.get("/ingredient")
    async def ingredient() -> None:
        raise errors.InvalidIngredientError("abc")

    @app.post("/validate")
    async def validate(body: _Body) -> None:
        return None

    @app.get("/boom")
    async def boom() -> None:
        msg = "database password is hunter2"
        raise RuntimeError(msg)

    return app


@pytest.fixture
async def client(app: FastAPI):
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


class TestStatusMapping:
    """Tests for status_for and SERVICE_ERROR_STATUS."""

    def test_every_code_is_mapped(self):
        """Should map every error code to a status."""
        assert set(SERVICE_ERROR_STATUS) == set(errors.ErrorCode)

    @pytest.mark.parametrize(
        ("error", "status_code"),
        [
            (errors.EmailTakenError(), 409),
            (errors.InvalidCredentialsError(), 401),
            (errors.UnauthorizedError(), 401),
            (errors.ForbiddenError(), 403),
            (errors.InvalidTimeError(), 400),
            (errors.FileTooLargeError(), 413),
            (errors.RecipeNotFoundError(), 404),
            (errors.CannotFollowSelfError(), 400),
            (errors.NotFollowingError(), 404),
        ],
    )
    def test_status_for(self, error, status_code):
        """Should return the mapped status."""
        assert status_for(error) == status_code


class TestHandlers:
    """Tests for the registered handlers."""

    async def test_service_error_body(self, client):
        """Should render code and message."""
        response = await client.get("/email-taken")

        assert response.status_code == 409
        assert response.json() == {
            "error": "EMAIL_TAKEN",
            "message": "Email is already registered",
        }

    async def test_unauthorized_sets_challenge(self, client):
        """Should add a Bearer challenge to 401 responses."""
        response = await client.get("/unauthorized")

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    async def test_message_with_argument(self, client):
        """Should carry the offending id in the message."""
        response = await client.get("/ingredient")

        assert response.json()["message"] == 'Ingredient with id "abc" not found'

    async def test_validation_error(self, client):
        """Should render request validation failures as 400 with details."""
        response = await client.post("/validate", json={})

        body = response.json()
        assert response.status_code == 400
        assert body["error"] == "VALIDATION_ERROR"
        assert body["details"][0]["field"] == "body.name"

    async def test_unknown_route(self, client):
        """Should render 404 for unknown routes."""
        response = await client.get("/nowhere")

        assert response.status_code == 404
        assert response.json()["error"] == "NOT_FOUND"

    async def test_unexpected_error_hides_internals(self, client):
        """Should render a generic 500 without the exception text."""
        response = await client.get("/boom")

        assert response.status_code == 500
        assert response.json()["error"] == "INTERNAL_SERVER_ERROR"
        assert "hunter2" not in response.text
