"""Recipe aggregate lifecycle.

This service owns:
- Recipe creation with validation, ingredient linkage and image relocation
- Filtered and paginated retrieval with favorite counts
- Favorite toggling
- Owner-only deletion, including links, favorites and the image file

Every write runs in a single transaction on the injected session.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Final

from foodies.database.models import Recipe
from foodies.database.repositories import (
    FavoriteRepository,
    RecipeFilters,
    RecipeRepository,
    ReferenceDataRepository,
)
from foodies.mappers import to_recipe_card, to_recipe_detail, to_recipe_response
from foodies.observability.logging import get_logger
from foodies.schemas.recipes import FavoriteStatusResponse
from foodies.services.errors import (
    ImageNotFoundError,
    ImageRequiredError,
    InvalidAreaError,
    InvalidCategoryError,
    InvalidIngredientError,
    InvalidNameError,
    InvalidTimeError,
    RecipeNotFoundError,
    TooManyIngredientsError,
)
from foodies.services.pagination import Page, Pagination
from foodies.utils.ids import new_id


if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy.ext.asyncio import AsyncSession

    from foodies.schemas.recipes import (
        RecipeCardResponse,
        RecipeDetailResponse,
        RecipeResponse,
    )
    from foodies.storage import FileStorage

logger = get_logger(__name__)

MAX_INGREDIENTS: Final[int] = 50
MAX_POPULAR_LIMIT: Final[int] = 50
RECIPES_SUBDIR: Final[str] = "recipes"


@dataclass(frozen=True, slots=True)
class IngredientLine:
    """Ingredient reference on a new recipe."""

    ingredient_id: str
    measure: str | None = None


@dataclass(frozen=True, slots=True)
class CreateRecipeData:
    """Validated-by-the-service input for :meth:`RecipeService.create_recipe`."""

    owner_id: str
    name: str
    description: str
    instructions: str
    time: int
    category_id: str
    area_id: str
    ingredients: Sequence[IngredientLine] = field(default_factory=tuple)
    img_temp_path: Path | None = None


class RecipeService:
    """Service for creating, listing, favoriting and deleting recipes."""

    def __init__(self, session: AsyncSession, storage: FileStorage) -> None:
        """Initialize the service.

        Args:
            session: Request-scoped database session.
            storage: File storage rooted at the public directory.
        """
        self._session = session
        self._storage = storage
        self._recipes = RecipeRepository(session)
        self._favorites = FavoriteRepository(session)
        self._reference = ReferenceDataRepository(session)

    # =========================================================================
    # Creation
    # =========================================================================

    async def create_recipe(self, data: CreateRecipeData) -> RecipeResponse:
        """Validate input, persist the recipe and claim its uploaded image.

        The image is moved inside the transaction: a failed move rolls the
        recipe back, and a failed commit removes the moved file again.

        Raises:
            ImageRequiredError, ImageNotFoundError, InvalidNameError,
            InvalidTimeError, TooManyIngredientsError, InvalidCategoryError,
            InvalidAreaError, InvalidIngredientError: On the first failed check,
                in that order. Nothing is written.
        """
        await self._validate(data)
        assert data.img_temp_path is not None

        filename = Path(data.img_temp_path).name
        destination = self._storage.public_dir / RECIPES_SUBDIR / filename
        recipe = Recipe(
            id=new_id(),
            owner_id=data.owner_id,
            name=data.name.strip(),
            description=data.description,
            instructions=data.instructions,
            time=data.time,
            img=self._storage.public_path(RECIPES_SUBDIR, filename),
            category_id=data.category_id,
            area_id=data.area_id,
        )

        links: dict[str, str | None] = {}
        for line in data.ingredients:
            links.setdefault(line.ingredient_id, line.measure)

        try:
            await self._recipes.add(recipe, links.items())
            await self._storage.move(data.img_temp_path, destination)
        except Exception:
            await self._session.rollback()
            raise

        try:
            await self._session.commit()
        except Exception:
            await self._session.rollback()
            await self._storage.delete(destination)
            raise

        logger.info(
            "Recipe created",
            recipe_id=recipe.id,
            owner_id=data.owner_id,
            ingredients=len(links),
        )
        created = await self._recipes.get(recipe.id)
        assert created is not None
        return to_recipe_response(created)

    async def _validate(self, data: CreateRecipeData) -> None:
        if data.img_temp_path is None:
            raise ImageRequiredError
        if not await self._storage.exists(data.img_temp_path):
            raise ImageNotFoundError
        if not data.name or not data.name.strip():
            raise InvalidNameError
        if isinstance(data.time, bool) or not isinstance(data.time, int) or data.time <= 0:
            raise InvalidTimeError
        if len(data.ingredients) > MAX_INGREDIENTS:
            raise TooManyIngredientsError
        if not await self._reference.category_exists(data.category_id):
            raise InvalidCategoryError
        if not await self._reference.area_exists(data.area_id):
            raise InvalidAreaError

        wanted = [line.ingredient_id for line in data.ingredients]
        found = await self._reference.existing_ingredient_ids(wanted)
        for ingredient_id in wanted:
            if ingredient_id not in found:
                raise InvalidIngredientError(ingredient_id)

    # =========================================================================
    # Retrieval
    # =========================================================================

    async def get_own_recipes(self, owner_id: str) -> list[RecipeResponse]:
        """All recipes of ``owner_id``, newest first."""
        recipes = await self._recipes.list_by_owner(owner_id)
        return [to_recipe_response(recipe) for recipe in recipes]

    async def get_all_recipes(
        self,
        filters: RecipeFilters,
        pagination: Pagination,
    ) -> Page[RecipeResponse]:
        """Filter recipes, newest first, with the total before pagination.

        The ingredient filter selects recipes; each returned recipe still
        lists all of its ingredients.
        """
        total, recipes = await self._recipes.search(
            filters,
            limit=pagination.limit,
            offset=pagination.offset,
        )
        return Page(count=total, rows=[to_recipe_response(r) for r in recipes])

    async def get_popular_recipes(
        self,
        limit: int,
        caller_id: str | None = None,
    ) -> list[RecipeCardResponse]:
        """Recipes ranked by favorite count, then recency.

        Args:
            limit: Requested size, clamped into ``[1, 50]``.
            caller_id: Optional caller; drives ``is_favorite``.
        """
        limit = max(1, min(limit, MAX_POPULAR_LIMIT))
        ranked = await self._recipes.most_favorited(limit)

        favorited: set[str] = set()
        if caller_id:
            favorited = await self._favorites.favorited_among(
                caller_id, (recipe.id for recipe, _ in ranked)
            )

        return [
            to_recipe_card(
                recipe,
                favorites_count=count,
                is_favorite=recipe.id in favorited,
            )
            for recipe, count in ranked
        ]

    async def get_favorite_recipes(
        self,
        user_id: str,
        pagination: Pagination,
    ) -> Page[RecipeCardResponse]:
        """The user's favorites, most recently favorited first."""
        total = await self._favorites.count_for_user(user_id)
        recipe_ids = await self._favorites.recipe_ids_for_user(
            user_id,
            limit=pagination.limit,
            offset=pagination.offset,
        )
        loaded = await self._recipes.with_favorite_counts(recipe_ids)

        rows = [
            to_recipe_card(
                loaded[recipe_id][0],
                favorites_count=loaded[recipe_id][1],
                is_favorite=True,
            )
            for recipe_id in recipe_ids
            if recipe_id in loaded
        ]
        return Page(count=total, rows=rows)

    async def get_recipe(
        self,
        recipe_id: str,
        caller_id: str | None = None,
    ) -> RecipeDetailResponse:
        """One recipe with its favorite count and the caller's favorite status.

        Raises:
            RecipeNotFoundError: If the recipe does not exist.
        """
        recipe = await self._recipes.get(recipe_id)
        if recipe is None:
            raise RecipeNotFoundError("Recipe not found")

        favorites_count = await self._favorites.count_for_recipe(recipe_id)
        is_favorite = False
        if caller_id:
            favorited = await self._favorites.favorited_among(caller_id, [recipe_id])
            is_favorite = recipe_id in favorited
        return to_recipe_detail(
            recipe,
            favorites_count=favorites_count,
            is_favorite=is_favorite,
        )

    # =========================================================================
    # Favorites
    # =========================================================================

    async def add_favorite(self, user_id: str, recipe_id: str) -> FavoriteStatusResponse:
        """Favorite a recipe. Repeating the call is harmless.

        Raises:
            RecipeNotFoundError: If the recipe does not exist.
        """
        if not await self._recipes.exists(recipe_id):
            raise RecipeNotFoundError("Recipe not found")

        inserted = await self._favorites.add(user_id, recipe_id)
        await self._session.commit()
        if inserted:
            logger.info("Recipe favorited", recipe_id=recipe_id)
        return FavoriteStatusResponse(is_favorite=True)

    async def remove_favorite(self, user_id: str, recipe_id: str) -> None:
        """Remove a recipe from the user's favorites if it is there.

        Raises:
            RecipeNotFoundError: If the recipe does not exist.
        """
        if not await self._recipes.exists(recipe_id):
            raise RecipeNotFoundError("Recipe not found")

        if await self._favorites.remove(user_id, recipe_id):
            await self._session.commit()
            logger.info("Recipe unfavorited", recipe_id=recipe_id)

    # =========================================================================
    # Deletion
    # =========================================================================

    async def delete_own_recipe(self, recipe_id: str, owner_id: str) -> None:
        """Delete a recipe owned by ``owner_id``.

        Links and favorites go in the same transaction as the recipe. The
        image file is removed after commit, best effort.

        Raises:
            RecipeNotFoundError: If no recipe matches both id and owner.
        """
        recipe = await self._recipes.get_owned(recipe_id, owner_id)
        if recipe is None:
            raise RecipeNotFoundError

        image = recipe.img
        try:
            await self._recipes.delete_with_links(recipe_id)
            await self._session.commit()
        except Exception:
            await self._session.rollback()
            raise

        logger.info("Recipe deleted", recipe_id=recipe_id)
        await self._storage.delete_public(image)
