"""Recipe aggregate data access."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from sqlalchemy import delete, func, select

from foodies.database.models import FavoriteRecipe, Recipe, RecipeIngredient
from foodies.database.repositories.base import SqlRepository


if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from sqlalchemy import Label, Select


@dataclass(frozen=True, slots=True)
class RecipeFilters:
    """Optional equality filters, combined with AND."""

    category_id: str | None = None
    area_id: str | None = None
    ingredient_id: str | None = None
    owner_id: str | None = None


def _favorites_count() -> Label[int]:
    return (
        select(func.count())
        .select_from(FavoriteRecipe)
        .where(FavoriteRecipe.recipe_id == Recipe.id)
        .correlate(Recipe)
        .scalar_subquery()
        .label("favorites_count")
    )


def _apply_filters(stmt: Select, filters: RecipeFilters) -> Select:
    if filters.category_id:
        stmt = stmt.where(Recipe.category_id == filters.category_id)
    if filters.area_id:
        stmt = stmt.where(Recipe.area_id == filters.area_id)
    if filters.owner_id:
        stmt = stmt.where(Recipe.owner_id == filters.owner_id)
    if filters.ingredient_id:
        stmt = stmt.where(
            Recipe.id.in_(
                select(RecipeIngredient.recipe_id).where(
                    RecipeIngredient.ingredient_id == filters.ingredient_id
                )
            )
        )
    return stmt


class RecipeRepository(SqlRepository):
    """Repository for recipes and their ingredient links.

    Loading a ``Recipe`` always brings its owner, category, area and
    ingredient links along (see the relationship loader options on the model).
    """

    async def add(
        self,
        recipe: Recipe,
        links: Iterable[tuple[str, str | None]],
    ) -> Recipe:
        """Stage a recipe with ``(ingredient_id, measure)`` links and flush."""
        self.session.add(recipe)
        await self.session.flush()
        self.session.add_all(
            RecipeIngredient(
                recipe_id=recipe.id,
                ingredient_id=ingredient_id,
                measure=measure,
                position=position,
            )
            for position, (ingredient_id, measure) in enumerate(links)
        )
        await self.session.flush()
        return recipe

    async def get(self, recipe_id: str) -> Recipe | None:
        """Load a recipe with everything it joins, refreshing any cached copy."""
        result = await self.session.execute(
            select(Recipe)
            .where(Recipe.id == recipe_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_owned(self, recipe_id: str, owner_id: str) -> Recipe | None:
        result = await self.session.execute(
            select(Recipe).where(Recipe.id == recipe_id, Recipe.owner_id == owner_id)
        )
        return result.scalar_one_or_none()

    async def exists(self, recipe_id: str) -> bool:
        result = await self.session.execute(
            select(Recipe.id).where(Recipe.id == recipe_id)
        )
        return result.scalar_one_or_none() is not None

    async def list_by_owner(self, owner_id: str) -> Sequence[Recipe]:
        result = await self.session.execute(
            select(Recipe)
            .where(Recipe.owner_id == owner_id)
            .order_by(Recipe.created_at.desc(), Recipe.id)
        )
        return result.scalars().all()

    async def search(
        self,
        filters: RecipeFilters,
        *,
        limit: int,
        offset: int,
    ) -> tuple[int, Sequence[Recipe]]:
        """Filter, count and paginate recipes, newest first.

        Returns:
            Tuple of (total matches before pagination, page of recipes).
        """
        count_stmt = _apply_filters(select(func.count()).select_from(Recipe), filters)
        total = int((await self.session.execute(count_stmt)).scalar_one())

        rows_stmt = (
            _apply_filters(select(Recipe), filters)
            .order_by(Recipe.created_at.desc(), Recipe.id)
            .limit(limit)
            .offset(offset)
        )
        rows = (await self.session.execute(rows_stmt)).scalars().all()
        return total, rows

    async def most_favorited(self, limit: int) -> list[tuple[Recipe, int]]:
        """Recipes ranked by favorite count, then recency."""
        favorites_count = _favorites_count()
        result = await self.session.execute(
            select(Recipe, favorites_count)
            .order_by(
                favorites_count.desc(),
                Recipe.created_at.desc(),
                Recipe.id,
            )
            .limit(limit)
        )
        return [(recipe, int(count)) for recipe, count in result.all()]

    async def with_favorite_counts(
        self,
        recipe_ids: Iterable[str],
    ) -> dict[str, tuple[Recipe, int]]:
        """Load recipes by id together with their global favorite counts."""
        wanted = list(recipe_ids)
        if not wanted:
            return {}
        result = await self.session.execute(
            select(Recipe, _favorites_count()).where(Recipe.id.in_(wanted))
        )
        return {recipe.id: (recipe, int(count)) for recipe, count in result.all()}

    async def delete_with_links(self, recipe_id: str) -> None:
        """Delete a recipe after its ingredient links and favorites."""
        await self.session.execute(
            delete(RecipeIngredient).where(RecipeIngredient.recipe_id == recipe_id)
        )
        await self.session.execute(
            delete(FavoriteRecipe).where(FavoriteRecipe.recipe_id == recipe_id)
        )
        await self.session.execute(delete(Recipe).where(Recipe.id == recipe_id))
