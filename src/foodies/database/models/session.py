"""Auth session model definition."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import JSON, Boolean, ForeignKey, String, false
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from foodies.database.models.base import BaseDatabaseModel, TimestampMixin, id_column
from foodies.utils.ids import ID_LENGTH


if TYPE_CHECKING:
    from foodies.database.models.user import User


class Session(TimestampMixin, BaseDatabaseModel):
    """SQLAlchemy ORM model for the 'sessions' table.

    One row per login. The row id is the ``sid`` token claim. ``closed`` only
    ever moves from false to true; ``data`` is written once at creation.
    """

    __tablename__ = "sessions"

    id: Mapped[str] = id_column()
    user_id: Mapped[str] = mapped_column(
        String(ID_LENGTH),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    data: Mapped[dict[str, Any]] = mapped_column(
        JSON().with_variant(JSONB(), "postgresql"),
        nullable=False,
        default=dict,
    )
    closed: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
    )

    user: Mapped[User] = relationship("User", lazy="joined")
