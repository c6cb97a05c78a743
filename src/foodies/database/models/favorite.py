"""Favorite recipe model definition."""

from __future__ import annotations

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from foodies.database.models.base import BaseDatabaseModel, TimestampMixin
from foodies.utils.ids import ID_LENGTH


class FavoriteRecipe(TimestampMixin, BaseDatabaseModel):
    """A user's favorite recipe. The composite key makes each pair unique."""

    __tablename__ = "favorite_recipes"

    user_id: Mapped[str] = mapped_column(
        String(ID_LENGTH),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    recipe_id: Mapped[str] = mapped_column(
        String(ID_LENGTH),
        ForeignKey("recipes.id"),
        primary_key=True,
        index=True,
    )
