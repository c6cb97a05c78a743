"""Reference data schemas."""

from __future__ import annotations

from foodies.schemas.base import APIResponse


class CategoryResponse(APIResponse):
    id: str
    name: str


class AreaResponse(APIResponse):
    id: str
    name: str


class IngredientResponse(APIResponse):
    id: str
    name: str
    description: str | None = None
    img: str | None = None
