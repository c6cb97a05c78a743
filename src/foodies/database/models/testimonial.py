"""Testimonial model definition."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from foodies.database.models.base import BaseDatabaseModel, TimestampMixin, id_column
from foodies.utils.ids import ID_LENGTH


if TYPE_CHECKING:
    from foodies.database.models.user import User


class Testimonial(TimestampMixin, BaseDatabaseModel):
    """A user's testimonial about the platform."""

    __tablename__ = "testimonials"

    id: Mapped[str] = id_column()
    testimonial: Mapped[str] = mapped_column(Text, nullable=False)
    owner_id: Mapped[str] = mapped_column(
        String(ID_LENGTH),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    owner: Mapped[User] = relationship("User", lazy="joined")
