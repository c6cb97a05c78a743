"""Base schema configuration for all Pydantic models.

Every request and response body speaks camelCase on the wire and snake_case
in Python.

Usage:
    - APIRequest: For incoming API request bodies and multipart forms
    - APIResponse: For outgoing API response bodies
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _BaseSchema(BaseModel):
    """Private base schema with common configuration.

    Do not use directly - inherit from one of the public subclasses.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        validate_default=True,
        serialize_by_alias=True,
    )


class APIRequest(_BaseSchema):
    """Base class for incoming API request schemas.

    Unknown properties are ignored so older clients keep working.
    """

    model_config = ConfigDict(
        extra="ignore",
    )


class APIResponse(_BaseSchema):
    """Base class for outgoing API response schemas.

    Configured to forbid extra fields - we only return properties that are
    explicitly declared, which keeps password hashes and other internals out.
    """

    model_config = ConfigDict(
        extra="forbid",
    )
