"""Reference data access: categories, areas and ingredients."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select

from foodies.database.models import Area, Category, Ingredient
from foodies.database.repositories.base import SqlRepository


if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence


class ReferenceDataRepository(SqlRepository):
    """Read-only lookups for recipe classification data."""

    async def categories(self) -> Sequence[Category]:
        result = await self.session.execute(select(Category).order_by(Category.name))
        return result.scalars().all()

    async def areas(self) -> Sequence[Area]:
        result = await self.session.execute(
            select(Area).order_by(Area.created_at.desc(), Area.id)
        )
        return result.scalars().all()

    async def ingredients(self) -> Sequence[Ingredient]:
        result = await self.session.execute(
            select(Ingredient).order_by(Ingredient.created_at.desc(), Ingredient.id)
        )
        return result.scalars().all()

    async def category_exists(self, category_id: str) -> bool:
        result = await self.session.execute(
            select(Category.id).where(Category.id == category_id)
        )
        return result.scalar_one_or_none() is not None

    async def area_exists(self, area_id: str) -> bool:
        result = await self.session.execute(select(Area.id).where(Area.id == area_id))
        return result.scalar_one_or_none() is not None

    async def existing_ingredient_ids(self, ingredient_ids: Iterable[str]) -> set[str]:
        """Return the subset of ``ingredient_ids`` that exist."""
        wanted = set(ingredient_ids)
        if not wanted:
            return set()
        result = await self.session.execute(
            select(Ingredient.id).where(Ingredient.id.in_(wanted))
        )
        return set(result.scalars().all())
