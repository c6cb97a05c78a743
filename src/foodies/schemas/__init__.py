"""Pydantic schemas for request/response validation."""

from foodies.schemas.auth import AuthResponse, LoginRequest, RegisterRequest
from foodies.schemas.base import APIRequest, APIResponse
from foodies.schemas.pagination import PageResponse
from foodies.schemas.recipes import (
    FavoriteStatusResponse,
    PopularRecipesResponse,
    RecipeAuthor,
    RecipeCardResponse,
    RecipeDetailResponse,
    RecipeIngredientInput,
    RecipeIngredientResponse,
    RecipeResponse,
)
from foodies.schemas.reference import AreaResponse, CategoryResponse, IngredientResponse
from foodies.schemas.root import HealthResponse, RootResponse
from foodies.schemas.testimonials import TestimonialRequest, TestimonialResponse
from foodies.schemas.users import (
    AvatarResponse,
    CurrentUserResponse,
    SessionResponse,
    UserResponse,
    UserSummary,
)


__all__ = [
    "APIRequest",
    "APIResponse",
    "AreaResponse",
    "AuthResponse",
    "AvatarResponse",
    "CategoryResponse",
    "CurrentUserResponse",
    "FavoriteStatusResponse",
    "HealthResponse",
    "IngredientResponse",
    "LoginRequest",
    "PageResponse",
    "PopularRecipesResponse",
    "RecipeAuthor",
    "RecipeCardResponse",
    "RecipeDetailResponse",
    "RecipeIngredientInput",
    "RecipeIngredientResponse",
    "RecipeResponse",
    "RegisterRequest",
    "RootResponse",
    "SessionResponse",
    "TestimonialRequest",
    "TestimonialResponse",
    "UserResponse",
    "UserSummary",
]
