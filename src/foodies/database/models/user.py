"""User model definition."""

from __future__ import annotations

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from foodies.database.models.base import BaseDatabaseModel, TimestampMixin, id_column


class User(TimestampMixin, BaseDatabaseModel):
    """SQLAlchemy ORM model for the 'users' table.

    ``password`` holds the bcrypt hash and never leaves the service layer;
    response mappers enumerate the exposed fields explicitly.
    """

    __tablename__ = "users"

    id: Mapped[str] = id_column()
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    avatar: Mapped[str | None] = mapped_column(String(1024), nullable=True)
