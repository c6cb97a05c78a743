"""Recipe mappers.

Three views of one recipe:
- ``RecipeResponse``: the stored recipe with owner, classification and ingredients
- ``RecipeCardResponse``: listing card with favorite count and caller status
- ``RecipeDetailResponse``: recipe page combining both
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from foodies.mappers.reference import to_area, to_category
from foodies.mappers.user import to_user_summary
from foodies.schemas.recipes import (
    RecipeAuthor,
    RecipeCardResponse,
    RecipeDetailResponse,
    RecipeIngredientResponse,
    RecipeResponse,
)


if TYPE_CHECKING:
    from foodies.database.models import Recipe, User


def _ingredients(recipe: Recipe) -> list[RecipeIngredientResponse]:
    return [
        RecipeIngredientResponse(
            id=link.ingredient.id,
            name=link.ingredient.name,
            img=link.ingredient.img,
            measure=link.measure,
        )
        for link in recipe.ingredient_links
    ]


def _author(owner: User | None) -> RecipeAuthor | None:
    if owner is None:
        return None
    return RecipeAuthor(id=owner.id, name=owner.name, avatar_url=owner.avatar)


def to_recipe_response(recipe: Recipe) -> RecipeResponse:
    """Map a fully loaded recipe (owner, category, area, ingredient links)."""
    return RecipeResponse(
        id=recipe.id,
        name=recipe.name,
        description=recipe.description,
        instructions=recipe.instructions,
        time=recipe.time,
        img=recipe.img,
        category_id=recipe.category_id,
        area_id=recipe.area_id,
        owner_id=recipe.owner_id,
        owner=to_user_summary(recipe.owner),
        category=to_category(recipe.category) if recipe.category else None,
        area=to_area(recipe.area) if recipe.area else None,
        ingredients=_ingredients(recipe),
        created_at=recipe.created_at,
        updated_at=recipe.updated_at,
    )


def to_recipe_card(
    recipe: Recipe,
    *,
    favorites_count: int,
    is_favorite: bool,
) -> RecipeCardResponse:
    return RecipeCardResponse(
        id=recipe.id,
        title=recipe.name,
        description=recipe.description,
        time=recipe.time,
        image_url=recipe.img,
        author=_author(recipe.owner),
        favorites_count=favorites_count,
        is_favorite=is_favorite,
    )


def to_recipe_detail(
    recipe: Recipe,
    *,
    favorites_count: int,
    is_favorite: bool,
) -> RecipeDetailResponse:
    return RecipeDetailResponse(
        id=recipe.id,
        title=recipe.name,
        description=recipe.description,
        instructions=recipe.instructions,
        time=recipe.time,
        image_url=recipe.img,
        category=to_category(recipe.category) if recipe.category else None,
        area=to_area(recipe.area) if recipe.area else None,
        author=_author(recipe.owner),
        ingredients=_ingredients(recipe),
        favorites_count=favorites_count,
        is_favorite=is_favorite,
        created_at=recipe.created_at,
    )
