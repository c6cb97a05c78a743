"""Declarative base and shared column helpers for all ORM models."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, MetaData, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from foodies.utils.clock import utcnow
from foodies.utils.ids import ID_LENGTH, new_id


NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class BaseDatabaseModel(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models.

    Tables share one ``MetaData`` with a deterministic constraint naming
    convention so the schema is identical across PostgreSQL and SQLite.
    """

    metadata = MetaData(naming_convention=NAMING_CONVENTION)

    def __repr__(self) -> str:
        pk = ", ".join(
            f"{col.key}={getattr(self, col.key, None)!r}"
            for col in self.__table__.primary_key.columns
        )
        return f"<{type(self).__name__} {pk}>"


def id_column(**kwargs: object) -> Mapped[str]:
    """Primary key column holding an opaque string id generated in Python."""
    return mapped_column(
        String(ID_LENGTH),
        primary_key=True,
        default=new_id,
        **kwargs,
    )


class TimestampMixin:
    """``created_at`` / ``updated_at`` maintained on the Python side.

    Python-side defaults keep microsecond precision on every backend, which
    keeps "newest first" ordering stable in tests against SQLite.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )
