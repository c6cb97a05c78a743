"""Recipe schemas: full recipes, cards, details and favorite status."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from foodies.schemas.base import APIRequest, APIResponse
from foodies.schemas.reference import AreaResponse, CategoryResponse
from foodies.schemas.users import UserSummary


# =============================================================================
# Requests
# =============================================================================


class RecipeIngredientInput(APIRequest):
    """One ingredient line of a new recipe."""

    id: str = Field(..., min_length=1, description="Ingredient id")
    measure: str | None = Field(default=None, max_length=255, examples=["200 g"])


# =============================================================================
# Responses
# =============================================================================


class RecipeIngredientResponse(APIResponse):
    """Ingredient as listed on a recipe."""

    id: str
    name: str
    img: str | None = None
    measure: str | None = None


class RecipeResponse(APIResponse):
    """A recipe with its owner, classification and ingredients."""

    id: str
    name: str
    description: str
    instructions: str
    time: int = Field(..., gt=0, description="Preparation time in minutes")
    img: str = Field(..., description="Public path of the recipe image")
    category_id: str
    area_id: str
    owner_id: str
    owner: UserSummary | None = None
    category: CategoryResponse | None = None
    area: AreaResponse | None = None
    ingredients: list[RecipeIngredientResponse] = []
    created_at: datetime
    updated_at: datetime


class RecipeAuthor(APIResponse):
    id: str
    name: str
    avatar_url: str | None = None


class RecipeCardResponse(APIResponse):
    """Compact recipe used in popular and favorite listings."""

    id: str
    title: str
    description: str
    time: int
    image_url: str | None = None
    author: RecipeAuthor | None = None
    favorites_count: int = Field(..., ge=0)
    is_favorite: bool = Field(..., description="Whether the caller favorited it")


class RecipeDetailResponse(APIResponse):
    """Everything shown on a recipe page."""

    id: str
    title: str
    description: str
    instructions: str
    time: int
    image_url: str | None = None
    category: CategoryResponse | None = None
    area: AreaResponse | None = None
    author: RecipeAuthor | None = None
    ingredients: list[RecipeIngredientResponse] = []
    favorites_count: int = Field(..., ge=0)
    is_favorite: bool
    created_at: datetime


class PopularRecipesResponse(APIResponse):
    items: list[RecipeCardResponse]


class FavoriteStatusResponse(APIResponse):
    is_favorite: bool
