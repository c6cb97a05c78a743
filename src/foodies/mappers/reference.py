"""Reference data mappers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from foodies.schemas.reference import AreaResponse, CategoryResponse, IngredientResponse


if TYPE_CHECKING:
    from foodies.database.models import Area, Category, Ingredient


def to_category(category: Category) -> CategoryResponse:
    return CategoryResponse(id=category.id, name=category.name)


def to_area(area: Area) -> AreaResponse:
    return AreaResponse(id=area.id, name=area.name)


def to_ingredient(ingredient: Ingredient) -> IngredientResponse:
    return IngredientResponse(
        id=ingredient.id,
        name=ingredient.name,
        description=ingredient.description,
        img=ingredient.img,
    )
