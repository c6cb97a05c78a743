"""Session token codec.

Access tokens are HS256-signed JWTs whose subject is the user id and whose
``sid`` claim names the server-side session. Signature and expiry are checked
here; whether the session is still open is the auth dependency's concern.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any

from jose import jwt
from jose.exceptions import ExpiredSignatureError, JWTError
from pydantic import BaseModel, ValidationError

from foodies.core.config import get_settings
from foodies.observability.logging import get_logger
from foodies.utils.clock import utcnow


logger = get_logger(__name__)


class TokenPayload(BaseModel):
    """Decoded access token claims."""

    sub: str  # User id
    sid: str  # Session id
    exp: datetime
    iat: datetime
    type: str = "access"
    email: str | None = None


class TokenError(Exception):
    """Base exception for token-related errors."""


class TokenExpiredError(TokenError):
    """Raised when a token has expired."""


class TokenInvalidError(TokenError):
    """Raised when a token is malformed or its signature does not verify."""


class TokenPayloadError(TokenInvalidError):
    """Raised when a verified token lacks required claims."""


def create_access_token(
    subject: str,
    session_id: str,
    *,
    expires_delta: timedelta | None = None,
    extra_claims: dict[str, Any] | None = None,
) -> str:
    """Create a signed access token bound to a session.

    Args:
        subject: The user id.
        session_id: Id of the session the token authenticates.
        expires_delta: Custom lifetime. Defaults to the configured lifetime.
        extra_claims: Additional claims, e.g. the user's email.

    Returns:
        Encoded JWT string.
    """
    settings = get_settings()

    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.auth.jwt.access_token_expire_minutes)

    now = utcnow()
    payload: dict[str, Any] = {
        **(extra_claims or {}),
        "sub": subject,
        "sid": session_id,
        "iat": now,
        "exp": now + expires_delta,
        "type": "access",
    }

    return jwt.encode(
        payload,
        settings.JWT_SECRET_KEY,
        algorithm=settings.auth.jwt.algorithm,
    )


def decode_token(token: str) -> TokenPayload:
    """Decode and validate an access token.

    Args:
        token: The JWT string.

    Returns:
        The validated claims.

    Raises:
        TokenExpiredError: If the token has expired.
        TokenInvalidError: If the signature, structure or claims are invalid.
    """
    settings = get_settings()

    try:
        claims = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.auth.jwt.algorithm],
        )
    except ExpiredSignatureError as e:
        logger.debug("Token expired")
        msg = "Token has expired"
        raise TokenExpiredError(msg) from e
    except JWTError as e:
        logger.debug("Token rejected", error=str(e))
        msg = "Invalid token"
        raise TokenInvalidError(msg) from e

    if claims.get("type", "access") != "access":
        msg = "Invalid token type"
        raise TokenInvalidError(msg)

    try:
        return TokenPayload.model_validate(claims)
    except ValidationError as e:
        msg = "Invalid token payload"
        raise TokenPayloadError(msg) from e

