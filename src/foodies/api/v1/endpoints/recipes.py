"""Recipe endpoints.

Provides:
- GET /recipes for filtered, paginated browsing
- GET /recipes/popular for the most favorited recipes
- GET /recipes/own and GET /recipes/favorites for the caller's recipes
- POST /recipes for multipart recipe creation with an image
- GET and DELETE /recipes/{recipe_id}
- POST and DELETE /recipes/{recipe_id}/favorite
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from fastapi.exceptions import RequestValidationError
from pydantic import TypeAdapter, ValidationError

from foodies.api.dependencies import (
    AppSettings,
    PageParams,
    Storage,
    get_recipe_service,
)
from foodies.auth.dependencies import CurrentSession, OptionalIdentity
from foodies.database.repositories import RecipeFilters
from foodies.schemas import (
    FavoriteStatusResponse,
    PageResponse,
    PopularRecipesResponse,
    RecipeCardResponse,
    RecipeDetailResponse,
    RecipeIngredientInput,
    RecipeResponse,
)
from foodies.services import CreateRecipeData, IngredientLine, RecipeService
from foodies.storage import save_upload


if TYPE_CHECKING:
    from pathlib import Path


router = APIRouter(prefix="/recipes", tags=["Recipes"])

_ingredient_lines = TypeAdapter(list[RecipeIngredientInput])

RecipeServiceDep = Annotated[RecipeService, Depends(get_recipe_service)]


def _parse_ingredients(raw: str | None) -> list[IngredientLine]:
    """Parse the ``ingredients`` form field, a JSON array of ``{id, measure}``.

    Raises:
        RequestValidationError: If the field is not such an array.
    """
    if not raw or not raw.strip():
        return []
    try:
        lines = _ingredient_lines.validate_json(raw)
    except ValidationError as e:
        raise RequestValidationError(
            [{**error, "loc": ("body", "ingredients", *error["loc"])} for error in e.errors()]
        ) from e
    return [IngredientLine(ingredient_id=line.id, measure=line.measure) for line in lines]


# =============================================================================
# Collections
# =============================================================================


@router.get(
    "",
    response_model=PageResponse[RecipeResponse],
    summary="Browse recipes",
)
async def list_recipes(
    service: RecipeServiceDep,
    pagination: PageParams,
    category: Annotated[str | None, Query(description="Category id")] = None,
    area: Annotated[str | None, Query(description="Area id")] = None,
    ingredient: Annotated[str | None, Query(description="Ingredient id")] = None,
    owner: Annotated[str | None, Query(description="Owner user id")] = None,
) -> PageResponse[RecipeResponse]:
    """Recipes matching every given filter, newest first."""
    filters = RecipeFilters(
        category_id=category,
        area_id=area,
        ingredient_id=ingredient,
        owner_id=owner,
    )
    page = await service.get_all_recipes(filters, pagination)
    return PageResponse[RecipeResponse].build(
        page.rows,
        total=page.count,
        page=pagination.page,
        limit=pagination.limit,
    )


@router.get(
    "/popular",
    response_model=PopularRecipesResponse,
    summary="Most favorited recipes",
)
async def popular_recipes(
    service: RecipeServiceDep,
    settings: AppSettings,
    identity: OptionalIdentity,
    limit: Annotated[int | None, Query(description="Number of recipes, at most 50")] = None,
) -> PopularRecipesResponse:
    """Recipes ranked by favorite count, then recency.

    When the caller is authenticated, ``isFavorite`` reflects their favorites.
    """
    if limit is None:
        limit = settings.pagination.popular_default_limit
    items = await service.get_popular_recipes(
        limit,
        caller_id=identity.user_id if identity else None,
    )
    return PopularRecipesResponse(items=items)


@router.get(
    "/own",
    response_model=list[RecipeResponse],
    summary="The caller's recipes",
)
async def own_recipes(
    auth: CurrentSession,
    service: RecipeServiceDep,
) -> list[RecipeResponse]:
    return await service.get_own_recipes(auth.user_id)


@router.get(
    "/favorites",
    response_model=PageResponse[RecipeCardResponse],
    summary="The caller's favorite recipes",
)
async def favorite_recipes(
    auth: CurrentSession,
    service: RecipeServiceDep,
    pagination: PageParams,
) -> PageResponse[RecipeCardResponse]:
    """Favorites, most recently favorited first."""
    page = await service.get_favorite_recipes(auth.user_id, pagination)
    return PageResponse[RecipeCardResponse].build(
        page.rows,
        total=page.count,
        page=pagination.page,
        limit=pagination.limit,
    )


# =============================================================================
# Single recipe
# =============================================================================


@router.post(
    "",
    response_model=RecipeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a recipe",
    responses={
        400: {"description": "Invalid recipe data or missing image"},
        401: {"description": "Authentication required"},
        413: {"description": "Image too large"},
    },
)
async def create_recipe(
    auth: CurrentSession,
    service: RecipeServiceDep,
    storage: Storage,
    settings: AppSettings,
    name: Annotated[str, Form()] = "",
    description: Annotated[str, Form()] = "",
    instructions: Annotated[str, Form()] = "",
    time: Annotated[int, Form(description="Preparation time in minutes")] = 0,
    category_id: Annotated[str, Form(alias="categoryId")] = "",
    area_id: Annotated[str, Form(alias="areaId")] = "",
    ingredients: Annotated[
        str | None,
        Form(description='JSON array of {"id": ..., "measure": ...}'),
    ] = None,
    img: Annotated[UploadFile | None, File(description="Recipe image")] = None,
) -> RecipeResponse:
    """Create a recipe owned by the caller from multipart form data.

    The uploaded image is kept only if the recipe is created.
    """
    lines = _parse_ingredients(ingredients)

    temp_path: Path | None = None
    if img is not None:
        temp_path = await save_upload(img, settings.tmp_dir, settings.uploads)

    data = CreateRecipeData(
        owner_id=auth.user_id,
        name=name,
        description=description,
        instructions=instructions,
        time=time,
        category_id=category_id,
        area_id=area_id,
        ingredients=lines,
        img_temp_path=temp_path,
    )
    try:
        return await service.create_recipe(data)
    except Exception:
        if temp_path is not None:
            await storage.delete(temp_path)
        raise


@router.get(
    "/{recipe_id}",
    response_model=RecipeDetailResponse,
    summary="Recipe details",
    responses={404: {"description": "Recipe not found"}},
)
async def get_recipe(
    recipe_id: str,
    service: RecipeServiceDep,
    identity: OptionalIdentity,
) -> RecipeDetailResponse:
    return await service.get_recipe(
        recipe_id,
        caller_id=identity.user_id if identity else None,
    )


@router.delete(
    "/{recipe_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete one of the caller's recipes",
    responses={404: {"description": "Recipe not found or access denied"}},
)
async def delete_recipe(
    recipe_id: str,
    auth: CurrentSession,
    service: RecipeServiceDep,
) -> None:
    await service.delete_own_recipe(recipe_id, auth.user_id)


# =============================================================================
# Favorites
# =============================================================================


@router.post(
    "/{recipe_id}/favorite",
    response_model=FavoriteStatusResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a recipe to favorites",
    responses={404: {"description": "Recipe not found"}},
)
async def add_favorite(
    recipe_id: str,
    auth: CurrentSession,
    service: RecipeServiceDep,
) -> FavoriteStatusResponse:
    return await service.add_favorite(auth.user_id, recipe_id)


@router.delete(
    "/{recipe_id}/favorite",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove a recipe from favorites",
    responses={404: {"description": "Recipe not found"}},
)
async def remove_favorite(
    recipe_id: str,
    auth: CurrentSession,
    service: RecipeServiceDep,
) -> None:
    await service.remove_favorite(auth.user_id, recipe_id)
