"""Auth session data access."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import select

from foodies.database.models import Session
from foodies.database.repositories.base import SqlRepository


if TYPE_CHECKING:
    from collections.abc import Sequence


class SessionRepository(SqlRepository):
    """Repository for login sessions."""

    async def create(self, user_id: str, data: dict[str, Any]) -> Session:
        """Stage an open session for ``user_id`` and flush it."""
        record = Session(user_id=user_id, data=dict(data), closed=False)
        self.session.add(record)
        await self.session.flush()
        return record

    async def get(self, session_id: str) -> Session | None:
        return await self.session.get(Session, session_id)

    async def get_active(self, session_id: str) -> Session | None:
        """Return the open session with its owning user, or None."""
        result = await self.session.execute(
            select(Session).where(Session.id == session_id, Session.closed.is_(False))
        )
        return result.scalar_one_or_none()

    async def get_for_user(self, session_id: str, user_id: str) -> Session | None:
        result = await self.session.execute(
            select(Session).where(Session.id == session_id, Session.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def list_for_user(self, user_id: str) -> Sequence[Session]:
        """All sessions of a user, newest first."""
        result = await self.session.execute(
            select(Session)
            .where(Session.user_id == user_id)
            .order_by(Session.created_at.desc(), Session.id)
        )
        return result.scalars().all()

    async def close(self, record: Session) -> bool:
        """Close the session. Returns False if it was already closed."""
        if record.closed:
            return False
        record.closed = True
        await self.session.flush()
        return True
