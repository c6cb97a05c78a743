"""Authentication: token codec, password hashing and request dependencies."""

from foodies.auth.jwt import (
    TokenError,
    TokenExpiredError,
    TokenInvalidError,
    TokenPayload,
    TokenPayloadError,
    create_access_token,
    decode_token,
)
from foodies.auth.passwords import hash_password, verify_password


__all__ = [
    "TokenError",
    "TokenExpiredError",
    "TokenInvalidError",
    "TokenPayload",
    "TokenPayloadError",
    "create_access_token",
    "decode_token",
    "hash_password",
    "verify_password",
]
