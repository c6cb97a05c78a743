"""Application services: business rules over the repositories."""

from foodies.services.auth import AuthService
from foodies.services.errors import ErrorCode, ServiceError
from foodies.services.pagination import Page, Pagination
from foodies.services.recipes import CreateRecipeData, IngredientLine, RecipeService
from foodies.services.reference_data import ReferenceDataService
from foodies.services.testimonials import TestimonialsService
from foodies.services.users import UsersService


__all__ = [
    "AuthService",
    "CreateRecipeData",
    "ErrorCode",
    "IngredientLine",
    "Page",
    "Pagination",
    "RecipeService",
    "ReferenceDataService",
    "ServiceError",
    "TestimonialsService",
    "UsersService",
]
