"""Typed failures raised by the service layer.

Every failure carries a stable :class:`ErrorCode` and a human-readable message.
The HTTP layer maps codes onto status codes; services never know about HTTP.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    """Stable machine-readable failure codes."""

    EMAIL_TAKEN = "EMAIL_TAKEN"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    INVALID_NAME = "INVALID_NAME"
    INVALID_TIME = "INVALID_TIME"
    TOO_MANY_INGREDIENTS = "TOO_MANY_INGREDIENTS"
    INVALID_CATEGORY = "INVALID_CATEGORY"
    INVALID_AREA = "INVALID_AREA"
    INVALID_INGREDIENT = "INVALID_INGREDIENT"
    IMAGE_REQUIRED = "IMAGE_REQUIRED"
    IMAGE_NOT_FOUND = "IMAGE_NOT_FOUND"
    INVALID_FILE_TYPE = "INVALID_FILE_TYPE"
    FILE_TOO_LARGE = "FILE_TOO_LARGE"
    RECIPE_NOT_FOUND = "RECIPE_NOT_FOUND"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    TESTIMONIAL_NOT_FOUND = "TESTIMONIAL_NOT_FOUND"
    CANNOT_FOLLOW_SELF = "CANNOT_FOLLOW_SELF"
    NOT_FOLLOWING = "NOT_FOLLOWING"


class ServiceError(Exception):
    """Base class for expected, caller-visible failures."""

    code: ErrorCode
    default_message: str = "Service error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!s}, message={self.message!r})"


# =============================================================================
# Authentication
# =============================================================================


class EmailTakenError(ServiceError):
    code = ErrorCode.EMAIL_TAKEN
    default_message = "Email is already registered"


class InvalidCredentialsError(ServiceError):
    code = ErrorCode.INVALID_CREDENTIALS
    default_message = "Invalid email or password"


class UnauthorizedError(ServiceError):
    code = ErrorCode.UNAUTHORIZED
    default_message = "Authorization token is required"


class ForbiddenError(ServiceError):
    code = ErrorCode.FORBIDDEN
    default_message = "You are not allowed to perform this action"


class SessionNotFoundError(ServiceError):
    code = ErrorCode.SESSION_NOT_FOUND
    default_message = "Session not found"


# =============================================================================
# Recipes
# =============================================================================


class InvalidNameError(ServiceError):
    code = ErrorCode.INVALID_NAME
    default_message = "Recipe name is required"


class InvalidTimeError(ServiceError):
    code = ErrorCode.INVALID_TIME
    default_message = "Time must be a positive number"


class TooManyIngredientsError(ServiceError):
    code = ErrorCode.TOO_MANY_INGREDIENTS
    default_message = "Maximum 50 ingredients allowed"


class InvalidCategoryError(ServiceError):
    code = ErrorCode.INVALID_CATEGORY
    default_message = "Invalid categoryId"


class InvalidAreaError(ServiceError):
    code = ErrorCode.INVALID_AREA
    default_message = "Invalid areaId"


class InvalidIngredientError(ServiceError):
    code = ErrorCode.INVALID_INGREDIENT
    default_message = "Ingredient not found"

    def __init__(self, ingredient_id: str | None = None) -> None:
        self.ingredient_id = ingredient_id
        message = (
            f'Ingredient with id "{ingredient_id}" not found'
            if ingredient_id is not None
            else None
        )
        super().__init__(message)


class ImageRequiredError(ServiceError):
    code = ErrorCode.IMAGE_REQUIRED
    default_message = "Recipe image is required"


class ImageNotFoundError(ServiceError):
    code = ErrorCode.IMAGE_NOT_FOUND
    default_message = "Uploaded image not found"


class RecipeNotFoundError(ServiceError):
    code = ErrorCode.RECIPE_NOT_FOUND
    default_message = "Recipe not found or access denied"


# =============================================================================
# Uploads
# =============================================================================


class InvalidFileTypeError(ServiceError):
    code = ErrorCode.INVALID_FILE_TYPE
    default_message = "Only JPEG, PNG and WEBP images are allowed"


class FileTooLargeError(ServiceError):
    code = ErrorCode.FILE_TOO_LARGE
    default_message = "File is too large"


# =============================================================================
# Users, follows and testimonials
# =============================================================================


class UserNotFoundError(ServiceError):
    code = ErrorCode.USER_NOT_FOUND
    default_message = "User not found"


class CannotFollowSelfError(ServiceError):
    code = ErrorCode.CANNOT_FOLLOW_SELF
    default_message = "You cannot follow yourself"


class NotFollowingError(ServiceError):
    code = ErrorCode.NOT_FOLLOWING
    default_message = "You are not following this user"


class TestimonialNotFoundError(ServiceError):
    code = ErrorCode.TESTIMONIAL_NOT_FOUND
    default_message = "Testimonial not found"


__all__ = [
    "CannotFollowSelfError",
    "EmailTakenError",
    "ErrorCode",
    "FileTooLargeError",
    "ForbiddenError",
    "ImageNotFoundError",
    "ImageRequiredError",
    "InvalidAreaError",
    "InvalidCategoryError",
    "InvalidCredentialsError",
    "InvalidFileTypeError",
    "InvalidIngredientError",
    "InvalidNameError",
    "InvalidTimeError",
    "NotFollowingError",
    "RecipeNotFoundError",
    "ServiceError",
    "SessionNotFoundError",
    "TestimonialNotFoundError",
    "TooManyIngredientsError",
    "UnauthorizedError",
    "UserNotFoundError",
]
