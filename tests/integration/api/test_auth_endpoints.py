"""Integration tests for the authentication endpoints.

Tests cover:
- Registration and duplicate emails
- Login with good and bad credentials
- Logout invalidating the token immediately
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from helpers import TEST_PASSWORD, bearer


if TYPE_CHECKING:
    from httpx import AsyncClient


pytestmark = pytest.mark.integration


class TestRegister:
    """Tests for POST /api/auth/register."""

    async def test_creates_user_and_session(self, client: AsyncClient) -> None:
        """Should return the user, a token and the session id."""
        response = await client.post(
            "/api/auth/register",
            json={"name": "Alice", "email": "alice@example.com", "password": TEST_PASSWORD},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["user"]["email"] == "alice@example.com"
        assert "password" not in data["user"]
        assert data["token"]
        assert data["sessionId"]

    async def test_duplicate_email(self, client: AsyncClient, alice) -> None:
        """Should reject a second account with the same email."""
        response = await client.post(
            "/api/auth/register",
            json={"name": "Other", "email": "alice@example.com", "password": "x"},
        )

        assert response.status_code == 409
        assert response.json()["error"] == "EMAIL_TAKEN"

    async def test_invalid_body(self, client: AsyncClient) -> None:
        """Should report validation failures as 400 with details."""
        response = await client.post(
            "/api/auth/register",
            json={"name": "Alice", "email": "not-an-email", "password": TEST_PASSWORD},
        )

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "VALIDATION_ERROR"
        assert any("email" in detail["field"] for detail in data["details"])


class TestLogin:
    """Tests for POST /api/auth/login."""

    async def test_valid_credentials(self, client: AsyncClient, alice) -> None:
        """Should open a new session distinct from the registration one."""
        response = await client.post(
            "/api/auth/login",
            json={"email": "alice@example.com", "password": TEST_PASSWORD},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["user"]["id"] == alice["user"]["id"]
        assert data["sessionId"] != alice["sessionId"]

    @pytest.mark.parametrize(
        ("email", "password"),
        [
            ("alice@example.com", "wrong-password"),
            ("nobody@example.com", TEST_PASSWORD),
        ],
    )
    async def test_invalid_credentials(
        self,
        client: AsyncClient,
        alice,
        email: str,
        password: str,
    ) -> None:
        """Should not reveal whether the email exists."""
        response = await client.post(
            "/api/auth/login",
            json={"email": email, "password": password},
        )

        assert response.status_code == 401
        assert response.json()["error"] == "INVALID_CREDENTIALS"


class TestLogout:
    """Tests for POST /api/auth/logout."""

    async def test_token_stops_working(self, client: AsyncClient, alice) -> None:
        """Should reject the token right after logout."""
        headers = bearer(alice["token"])

        response = await client.post("/api/auth/logout", headers=headers)
        assert response.status_code == 204

        response = await client.get("/api/users/me", headers=headers)
        assert response.status_code == 401
        assert response.json()["error"] == "UNAUTHORIZED"

    async def test_requires_token(self, client: AsyncClient) -> None:
        """Should reject anonymous callers with a bearer challenge."""
        response = await client.post("/api/auth/logout")

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"
