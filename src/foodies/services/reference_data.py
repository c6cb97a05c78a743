"""Categories, areas and ingredients lookups."""

from __future__ import annotations

from typing import TYPE_CHECKING

from foodies.database.repositories import ReferenceDataRepository
from foodies.mappers import to_area, to_category, to_ingredient


if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from foodies.schemas.reference import (
        AreaResponse,
        CategoryResponse,
        IngredientResponse,
    )


class ReferenceDataService:
    """Read-only access to recipe classification data."""

    def __init__(self, session: AsyncSession) -> None:
        self._repository = ReferenceDataRepository(session)

    async def get_categories(self) -> list[CategoryResponse]:
        """Categories sorted by name."""
        return [to_category(c) for c in await self._repository.categories()]

    async def get_areas(self) -> list[AreaResponse]:
        """Areas, newest first."""
        return [to_area(a) for a in await self._repository.areas()]

    async def get_ingredients(self) -> list[IngredientResponse]:
        """Ingredients, newest first."""
        return [to_ingredient(i) for i in await self._repository.ingredients()]
