"""Favorite recipe data access."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import delete, func, select

from foodies.database.models import FavoriteRecipe
from foodies.database.repositories.base import SqlRepository


if TYPE_CHECKING:
    from collections.abc import Iterable


class FavoriteRepository(SqlRepository):
    """Repository for (user, recipe) favorite pairs."""

    async def add(self, user_id: str, recipe_id: str) -> bool:
        """Insert the pair unless it exists. Returns True if inserted."""
        return await self.insert_ignore(
            FavoriteRecipe,
            {"user_id": user_id, "recipe_id": recipe_id},
        )

    async def remove(self, user_id: str, recipe_id: str) -> bool:
        result = await self.session.execute(
            delete(FavoriteRecipe).where(
                FavoriteRecipe.user_id == user_id,
                FavoriteRecipe.recipe_id == recipe_id,
            )
        )
        return bool(result.rowcount)

    async def count_for_user(self, user_id: str) -> int:
        result = await self.session.execute(
            select(func.count())
            .select_from(FavoriteRecipe)
            .where(FavoriteRecipe.user_id == user_id)
        )
        return int(result.scalar_one())

    async def count_for_recipe(self, recipe_id: str) -> int:
        result = await self.session.execute(
            select(func.count())
            .select_from(FavoriteRecipe)
            .where(FavoriteRecipe.recipe_id == recipe_id)
        )
        return int(result.scalar_one())

    async def recipe_ids_for_user(
        self,
        user_id: str,
        *,
        limit: int,
        offset: int,
    ) -> list[str]:
        """One page of the user's favorite recipe ids, most recently favorited first."""
        result = await self.session.execute(
            select(FavoriteRecipe.recipe_id)
            .where(FavoriteRecipe.user_id == user_id)
            .order_by(FavoriteRecipe.created_at.desc(), FavoriteRecipe.recipe_id)
            .limit(limit)
            .offset(offset)
        )
        return list(result.scalars().all())

    async def favorited_among(self, user_id: str, recipe_ids: Iterable[str]) -> set[str]:
        """Return which of ``recipe_ids`` the user has favorited."""
        wanted = set(recipe_ids)
        if not wanted:
            return set()
        result = await self.session.execute(
            select(FavoriteRecipe.recipe_id).where(
                FavoriteRecipe.user_id == user_id,
                FavoriteRecipe.recipe_id.in_(wanted),
            )
        )
        return set(result.scalars().all())
