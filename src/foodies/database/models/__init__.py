"""ORM models for the Foodies relational store.

Models are imported here in dependency order and composed explicitly by
:func:`configure_models`, which the application calls once during startup.
"""

from sqlalchemy.orm import configure_mappers

from foodies.database.models.base import BaseDatabaseModel, TimestampMixin
from foodies.database.models.user import User
from foodies.database.models.session import Session
from foodies.database.models.reference import Area, Category, Ingredient
from foodies.database.models.recipe import Recipe, RecipeIngredient
from foodies.database.models.favorite import FavoriteRecipe
from foodies.database.models.follower import UserFollower
from foodies.database.models.testimonial import Testimonial


def configure_models() -> None:
    """Resolve every relationship between the registered models.

    Raises:
        sqlalchemy.exc.InvalidRequestError: If a relationship cannot be resolved.
    """
    configure_mappers()


__all__ = [
    "Area",
    "BaseDatabaseModel",
    "Category",
    "FavoriteRecipe",
    "Ingredient",
    "Recipe",
    "RecipeIngredient",
    "Session",
    "Testimonial",
    "TimestampMixin",
    "User",
    "UserFollower",
    "configure_models",
]
