"""Follow edge model definition."""

from __future__ import annotations

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from foodies.database.models.base import BaseDatabaseModel, TimestampMixin
from foodies.utils.ids import ID_LENGTH


class UserFollower(TimestampMixin, BaseDatabaseModel):
    """``follower_id`` follows ``user_id``. One row per ordered pair."""

    __tablename__ = "user_followers"

    user_id: Mapped[str] = mapped_column(
        String(ID_LENGTH),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    follower_id: Mapped[str] = mapped_column(
        String(ID_LENGTH),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )
