"""Testimonial schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from foodies.schemas.base import APIRequest, APIResponse
from foodies.schemas.users import UserSummary


class TestimonialRequest(APIRequest):
    """Body for creating or editing a testimonial."""

    testimonial: str = Field(..., min_length=1, max_length=2000)


class TestimonialResponse(APIResponse):
    """A testimonial with its author."""

    id: str
    testimonial: str
    owner_id: str
    owner: UserSummary | None = None
    created_at: datetime
    updated_at: datetime
