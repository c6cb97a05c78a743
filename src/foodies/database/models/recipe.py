"""Recipe aggregate: the recipe row and its ingredient links."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from foodies.database.models.base import BaseDatabaseModel, TimestampMixin, id_column
from foodies.utils.ids import ID_LENGTH


if TYPE_CHECKING:
    from foodies.database.models.reference import Area, Category, Ingredient
    from foodies.database.models.user import User


class Recipe(TimestampMixin, BaseDatabaseModel):
    """SQLAlchemy ORM model for the 'recipes' table.

    ``img`` is the public path of the relocated image. Recipes are never
    updated; ingredient links and favorites are removed explicitly on delete.
    """

    __tablename__ = "recipes"
    __table_args__ = (CheckConstraint('"time" > 0', name="time_positive"),)

    id: Mapped[str] = id_column()
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    instructions: Mapped[str] = mapped_column(Text, nullable=False, default="")
    time: Mapped[int] = mapped_column(Integer, nullable=False)
    img: Mapped[str] = mapped_column(String(1024), nullable=False)
    category_id: Mapped[str] = mapped_column(
        String(ID_LENGTH),
        ForeignKey("categories.id"),
        nullable=False,
        index=True,
    )
    area_id: Mapped[str] = mapped_column(
        String(ID_LENGTH),
        ForeignKey("areas.id"),
        nullable=False,
        index=True,
    )
    owner_id: Mapped[str] = mapped_column(
        String(ID_LENGTH),
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )

    owner: Mapped[User] = relationship("User", lazy="joined")
    category: Mapped[Category] = relationship("Category", lazy="joined")
    area: Mapped[Area] = relationship("Area", lazy="joined")
    ingredient_links: Mapped[list[RecipeIngredient]] = relationship(
        "RecipeIngredient",
        lazy="selectin",
        viewonly=True,
        order_by="RecipeIngredient.position",
    )


class RecipeIngredient(TimestampMixin, BaseDatabaseModel):
    """Link between a recipe and an ingredient, with an optional measure.

    ``position`` keeps the order in which the author listed the ingredients.
    """

    __tablename__ = "recipe_ingredients"

    recipe_id: Mapped[str] = mapped_column(
        String(ID_LENGTH),
        ForeignKey("recipes.id"),
        primary_key=True,
    )
    ingredient_id: Mapped[str] = mapped_column(
        String(ID_LENGTH),
        ForeignKey("ingredients.id"),
        primary_key=True,
        index=True,
    )
    measure: Mapped[str | None] = mapped_column(String(255), nullable=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    ingredient: Mapped[Ingredient] = relationship("Ingredient", lazy="joined")
