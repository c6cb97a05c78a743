"""User, session and follow schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field

from foodies.schemas.base import APIResponse


class UserResponse(APIResponse):
    """Public view of a user. Never carries the password hash."""

    id: str = Field(..., description="User id")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Email address")
    avatar: str | None = Field(default=None, description="Avatar URL or public path")
    created_at: datetime = Field(..., description="Registration time")
    updated_at: datetime = Field(..., description="Last profile change")


class UserSummary(APIResponse):
    """Compact user reference embedded in recipes and testimonials."""

    id: str
    name: str
    avatar: str | None = None


class CurrentUserResponse(APIResponse):
    """The authenticated user's profile with activity counters."""

    id: str = Field(..., description="User id")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Email address")
    avatar: str | None = Field(default=None, description="Avatar URL or public path")
    recipes_amount: int = Field(..., ge=0, description="Recipes authored")
    favorite_recipes_amount: int = Field(..., ge=0, description="Recipes favorited")
    followers_amount: int = Field(..., ge=0, description="Users following this user")
    followings_amount: int = Field(..., ge=0, description="Users this user follows")


class AvatarResponse(APIResponse):
    """Result of an avatar upload."""

    avatar: str = Field(..., description="Public path of the new avatar")


class SessionResponse(APIResponse):
    """A login session as shown to its owner."""

    id: str = Field(..., description="Session id")
    data: dict[str, Any] = Field(
        default_factory=dict,
        description="Client metadata captured at login (ip, user agent, extras)",
    )
    closed: bool = Field(..., description="Whether the session has been closed")
    created_at: datetime
    updated_at: datetime
