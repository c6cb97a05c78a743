"""Registration, login and token schemas."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from foodies.schemas.base import APIRequest, APIResponse
from foodies.schemas.users import UserResponse


EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class RegisterRequest(APIRequest):
    """Request body for POST /auth/register."""

    name: str = Field(..., min_length=1, max_length=255, description="Display name")
    email: str = Field(..., pattern=EMAIL_PATTERN, max_length=255)
    password: str = Field(..., min_length=1, max_length=72)
    avatar: str | None = Field(
        default=None,
        pattern=r"^https?://",
        description="Optional absolute URL of an existing avatar",
    )
    session_data: dict[str, Any] | None = Field(
        default=None,
        description="Client metadata to store on the new session",
    )


class LoginRequest(APIRequest):
    """Request body for POST /auth/login."""

    email: str = Field(..., pattern=EMAIL_PATTERN, max_length=255)
    password: str = Field(..., min_length=1, max_length=72)
    session_data: dict[str, Any] | None = None


class AuthResponse(APIResponse):
    """Successful registration or login."""

    user: UserResponse = Field(..., description="The authenticated user")
    token: str = Field(..., description="Bearer token for the new session")
    session_id: str = Field(..., description="Id of the session the token is bound to")
