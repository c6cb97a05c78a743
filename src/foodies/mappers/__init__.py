"""Explicit ORM-to-schema mappers.

Each mapper enumerates the fields it exposes, so columns such as the password
hash cannot leak into a response by accident.
"""

from foodies.mappers.recipe import (
    to_recipe_card,
    to_recipe_detail,
    to_recipe_response,
)
from foodies.mappers.reference import to_area, to_category, to_ingredient
from foodies.mappers.user import (
    to_current_user,
    to_session_response,
    to_testimonial_response,
    to_user_response,
    to_user_summary,
)


__all__ = [
    "to_area",
    "to_category",
    "to_current_user",
    "to_ingredient",
    "to_recipe_card",
    "to_recipe_detail",
    "to_recipe_response",
    "to_session_response",
    "to_testimonial_response",
    "to_user_response",
    "to_user_summary",
]
