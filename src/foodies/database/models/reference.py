"""Read-only reference data: categories, areas and ingredients."""

from __future__ import annotations

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from foodies.database.models.base import BaseDatabaseModel, TimestampMixin, id_column


class Category(TimestampMixin, BaseDatabaseModel):
    """Recipe category, e.g. "Dessert"."""

    __tablename__ = "categories"

    id: Mapped[str] = id_column()
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)


class Area(TimestampMixin, BaseDatabaseModel):
    """Cuisine region, e.g. "Italian"."""

    __tablename__ = "areas"

    id: Mapped[str] = id_column()
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)


class Ingredient(TimestampMixin, BaseDatabaseModel):
    """Ingredient that recipes link to."""

    __tablename__ = "ingredients"

    id: Mapped[str] = id_column()
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    img: Mapped[str | None] = mapped_column(String(1024), nullable=True)
