"""FastAPI security dependencies.

A request is authenticated when it carries a bearer token that decodes, and
whose ``sid`` names a session that is still open and belongs to the token's
subject. Closing the session (logout or revocation) invalidates the token
immediately, before it expires.

Dependencies:
- ``get_current_session``: required identity, fails with 401
- ``get_optional_identity``: best-effort identity, None for anonymous callers
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from foodies.auth.jwt import TokenError, TokenPayloadError, decode_token
from foodies.database.connection import get_db_session
from foodies.database.repositories import SessionRepository
from foodies.observability.logging import bind_context, get_logger
from foodies.observability.tracing import add_span_attributes
from foodies.services.errors import UnauthorizedError


if TYPE_CHECKING:
    from foodies.database.models import Session, User

logger = get_logger(__name__)

# Token extraction only; validation happens below.
bearer_scheme = HTTPBearer(
    scheme_name="BearerAuth",
    description="Session bearer token returned by /auth/register or /auth/login",
    auto_error=False,
)


@dataclass(frozen=True, slots=True)
class AuthContext:
    """The authenticated session and its owner for the current request."""

    session: Session
    user: User
    token: str

    @property
    def user_id(self) -> str:
        return self.user.id

    @property
    def session_id(self) -> str:
        return self.session.id


def _bearer_token(credentials: HTTPAuthorizationCredentials | None) -> str | None:
    if credentials is None or credentials.scheme.lower() != "bearer":
        return None
    token = credentials.credentials.strip()
    return token or None


async def resolve_token(db: AsyncSession, token: str) -> AuthContext:
    """Turn a bearer token into an :class:`AuthContext`.

    Raises:
        UnauthorizedError: If the token is invalid or expired, lacks a session
            id, or names a session that is closed, missing or not the subject's.
    """
    try:
        payload = decode_token(token)
    except TokenPayloadError:
        raise UnauthorizedError("Invalid token payload") from None
    except TokenError:
        raise UnauthorizedError("Invalid or expired token") from None

    record = await SessionRepository(db).get_active(payload.sid)
    if record is None or record.user_id != payload.sub:
        logger.info("Token for inactive session rejected", session_id=payload.sid)
        raise UnauthorizedError("Session is not active")

    return AuthContext(session=record, user=record.user, token=token)


def _attach(request: Request, context: AuthContext) -> None:
    request.state.auth = context
    bind_context(user_id=context.user_id, session_id=context.session_id)
    add_span_attributes(user_id=context.user_id)


async def get_current_session(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> AuthContext:
    """Require an authenticated caller.

    Raises:
        UnauthorizedError: If the token is missing or does not authenticate.
    """
    token = _bearer_token(credentials)
    if token is None:
        raise UnauthorizedError("Authorization token is required")

    context = await resolve_token(db, token)
    _attach(request, context)
    return context


async def get_optional_identity(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> AuthContext | None:
    """Identify the caller if possible.

    Missing, malformed, expired or revoked tokens yield None. Database errors
    still propagate.
    """
    token = _bearer_token(credentials)
    if token is None:
        return None

    try:
        context = await resolve_token(db, token)
    except UnauthorizedError:
        return None

    _attach(request, context)
    return context


CurrentSession = Annotated[AuthContext, Depends(get_current_session)]
OptionalIdentity = Annotated[AuthContext | None, Depends(get_optional_identity)]
