"""Registration, login and logout.

A successful registration or login opens a new server-side session and
returns a token bound to it. Logging out closes the session, which
invalidates the token even though it has not expired.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy.exc import IntegrityError

from foodies.auth.jwt import create_access_token
from foodies.auth.passwords import hash_password, verify_password
from foodies.database.repositories import SessionRepository, UserRepository
from foodies.mappers import to_user_response
from foodies.observability.logging import get_logger
from foodies.schemas.auth import AuthResponse
from foodies.services.errors import EmailTakenError, InvalidCredentialsError


if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from foodies.database.models import User

logger = get_logger(__name__)


class AuthService:
    """Credential checks and session lifecycle."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._users = UserRepository(session)
        self._sessions = SessionRepository(session)

    async def register(
        self,
        *,
        name: str,
        email: str,
        password: str,
        avatar: str | None = None,
        session_data: dict[str, Any] | None = None,
    ) -> AuthResponse:
        """Create a user and open their first session.

        Raises:
            EmailTakenError: If a user with ``email`` already exists.
        """
        if await self._users.get_by_email(email) is not None:
            raise EmailTakenError

        password_hash = await hash_password(password)
        try:
            user = await self._users.create(
                name=name,
                email=email,
                password_hash=password_hash,
                avatar=avatar,
            )
            result = await self._open_session(user, session_data)
            await self._session.commit()
        except IntegrityError as e:
            # Lost a race with a concurrent registration for the same email.
            await self._session.rollback()
            raise EmailTakenError from e

        logger.info("User registered", user_id=user.id)
        return result

    async def login(
        self,
        *,
        email: str,
        password: str,
        session_data: dict[str, Any] | None = None,
    ) -> AuthResponse:
        """Verify credentials and open a new session.

        Raises:
            InvalidCredentialsError: For an unknown email or a wrong password.
        """
        user = await self._users.get_by_email(email)
        if user is None or not await verify_password(password, user.password):
            logger.info("Login rejected")
            raise InvalidCredentialsError

        result = await self._open_session(user, session_data)
        await self._session.commit()

        logger.info("User logged in", user_id=user.id, session_id=result.session_id)
        return result

    async def logout(self, session_id: str) -> None:
        """Close a session. Unknown or already closed sessions are a no-op."""
        record = await self._sessions.get(session_id)
        if record is None or record.closed:
            return
        await self._sessions.close(record)
        await self._session.commit()
        logger.info("Session closed", session_id=session_id)

    async def _open_session(
        self,
        user: User,
        session_data: dict[str, Any] | None,
    ) -> AuthResponse:
        record = await self._sessions.create(user.id, session_data or {})
        token = create_access_token(
            user.id,
            record.id,
            extra_claims={"email": user.email},
        )
        return AuthResponse(
            user=to_user_response(user),
            token=token,
            session_id=record.id,
        )
