"""User profiles, the follow graph, avatars and session management."""

from __future__ import annotations

import time
from pathlib import Path
from typing import TYPE_CHECKING, Final

from foodies.database.repositories import SessionRepository, UserRepository
from foodies.mappers import (
    to_current_user,
    to_session_response,
    to_user_response,
)
from foodies.observability.logging import get_logger
from foodies.schemas.users import AvatarResponse
from foodies.services.errors import (
    CannotFollowSelfError,
    ImageNotFoundError,
    NotFollowingError,
    SessionNotFoundError,
    UserNotFoundError,
)


if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from foodies.database.models import User
    from foodies.schemas.users import CurrentUserResponse, SessionResponse, UserResponse
    from foodies.storage import FileStorage

logger = get_logger(__name__)

AVATAR_SUBDIR: Final[str] = "avatar"


class UsersService:
    """Service for user-facing profile operations."""

    def __init__(self, session: AsyncSession, storage: FileStorage) -> None:
        self._session = session
        self._storage = storage
        self._users = UserRepository(session)
        self._sessions = SessionRepository(session)

    async def _require_user(self, user_id: str) -> User:
        user = await self._users.get(user_id)
        if user is None:
            raise UserNotFoundError
        return user

    # =========================================================================
    # Profiles
    # =========================================================================

    async def get_users(self) -> list[UserResponse]:
        """All users, newest first."""
        return [to_user_response(user) for user in await self._users.list_all()]

    async def get_user(self, user_id: str) -> UserResponse:
        """Raises UserNotFoundError if the user does not exist."""
        return to_user_response(await self._require_user(user_id))

    async def get_current_user(self, user_id: str) -> CurrentUserResponse:
        """Profile of ``user_id`` with recipe, favorite and follow counters.

        Raises:
            UserNotFoundError: If the user does not exist.
        """
        user = await self._require_user(user_id)
        stats = await self._users.stats(user_id)
        return to_current_user(user, stats)

    async def update_avatar(self, user_id: str, temp_path: Path) -> AvatarResponse:
        """Claim an uploaded image as the user's avatar.

        The previous avatar file is removed, best effort, when it is one of
        ours; external avatar URLs are left alone.

        Raises:
            UserNotFoundError: If the user does not exist.
            ImageNotFoundError: If the uploaded file is missing.
        """
        user = await self._require_user(user_id)
        if not await self._storage.exists(temp_path):
            raise ImageNotFoundError

        filename = f"{user_id}-{time.time_ns()}{Path(temp_path).suffix.lower()}"
        destination = self._storage.public_dir / AVATAR_SUBDIR / filename
        previous = user.avatar

        await self._storage.move(temp_path, destination)
        try:
            await self._users.set_avatar(
                user, self._storage.public_path(AVATAR_SUBDIR, filename)
            )
            await self._session.commit()
        except Exception:
            await self._session.rollback()
            await self._storage.delete(destination)
            raise

        if previous and previous.startswith(self._storage.public_path(AVATAR_SUBDIR) + "/"):
            await self._storage.delete_public(previous)

        logger.info("Avatar updated", user_id=user_id)
        return AvatarResponse(avatar=self._storage.public_path(AVATAR_SUBDIR, filename))

    # =========================================================================
    # Follow graph
    # =========================================================================

    async def follow_user(self, follower_id: str, target_id: str) -> None:
        """Follow ``target_id``. Following twice is harmless.

        Raises:
            CannotFollowSelfError: If both ids are the same.
            UserNotFoundError: If the target does not exist.
        """
        if follower_id == target_id:
            raise CannotFollowSelfError
        if not await self._users.exists(target_id):
            raise UserNotFoundError

        if await self._users.follow(follower_id, target_id):
            await self._session.commit()
            logger.info("User followed", target_id=target_id)

    async def unfollow_user(self, follower_id: str, target_id: str) -> None:
        """Raises NotFollowingError if no follow edge existed."""
        if not await self._users.unfollow(follower_id, target_id):
            raise NotFollowingError
        await self._session.commit()
        logger.info("User unfollowed", target_id=target_id)

    async def get_followers(self, user_id: str) -> list[UserResponse]:
        return [to_user_response(u) for u in await self._users.followers_of(user_id)]

    async def get_following(self, user_id: str) -> list[UserResponse]:
        return [to_user_response(u) for u in await self._users.followed_by(user_id)]

    # =========================================================================
    # Sessions
    # =========================================================================

    async def get_user_sessions(self, user_id: str) -> list[SessionResponse]:
        """All of the user's sessions, open and closed, newest first."""
        records = await self._sessions.list_for_user(user_id)
        return [to_session_response(record) for record in records]

    async def close_user_session(self, user_id: str, session_id: str) -> None:
        """Close one of the user's own sessions.

        Raises:
            SessionNotFoundError: If the session does not belong to the user.
        """
        record = await self._sessions.get_for_user(session_id, user_id)
        if record is None:
            raise SessionNotFoundError
        if await self._sessions.close(record):
            await self._session.commit()
            logger.info("Session revoked", session_id=session_id)
