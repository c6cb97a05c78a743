"""User, session and testimonial mappers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from foodies.schemas.testimonials import TestimonialResponse
from foodies.schemas.users import (
    CurrentUserResponse,
    SessionResponse,
    UserResponse,
    UserSummary,
)


if TYPE_CHECKING:
    from foodies.database.models import Session, Testimonial, User
    from foodies.database.repositories import UserStats


def to_user_response(user: User) -> UserResponse:
    """Public user view. The password hash is deliberately not mapped."""
    return UserResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        avatar=user.avatar,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


def to_user_summary(user: User | None) -> UserSummary | None:
    if user is None:
        return None
    return UserSummary(id=user.id, name=user.name, avatar=user.avatar)


def to_current_user(user: User, stats: UserStats) -> CurrentUserResponse:
    return CurrentUserResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        avatar=user.avatar,
        recipes_amount=stats.recipes,
        favorite_recipes_amount=stats.favorite_recipes,
        followers_amount=stats.followers,
        followings_amount=stats.followings,
    )


def to_session_response(session: Session) -> SessionResponse:
    return SessionResponse(
        id=session.id,
        data=dict(session.data or {}),
        closed=session.closed,
        created_at=session.created_at,
        updated_at=session.updated_at,
    )


def to_testimonial_response(testimonial: Testimonial) -> TestimonialResponse:
    return TestimonialResponse(
        id=testimonial.id,
        testimonial=testimonial.testimonial,
        owner_id=testimonial.owner_id,
        owner=to_user_summary(testimonial.owner),
        created_at=testimonial.created_at,
        updated_at=testimonial.updated_at,
    )
