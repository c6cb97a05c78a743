"""Repositories: per-aggregate data access over an ``AsyncSession``."""

from foodies.database.repositories.base import SqlRepository
from foodies.database.repositories.favorites import FavoriteRepository
from foodies.database.repositories.recipes import RecipeFilters, RecipeRepository
from foodies.database.repositories.reference import ReferenceDataRepository
from foodies.database.repositories.sessions import SessionRepository
from foodies.database.repositories.testimonials import TestimonialRepository
from foodies.database.repositories.users import UserRepository, UserStats


__all__ = [
    "FavoriteRepository",
    "RecipeFilters",
    "RecipeRepository",
    "ReferenceDataRepository",
    "SessionRepository",
    "SqlRepository",
    "TestimonialRepository",
    "UserRepository",
    "UserStats",
]
