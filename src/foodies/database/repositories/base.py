"""Shared repository plumbing."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy.dialects import postgresql, sqlite


if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from foodies.database.models import BaseDatabaseModel


class SqlRepository:
    """Base class for repositories bound to one ``AsyncSession``.

    Repositories flush but never commit; the calling service owns the
    transaction boundary.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @property
    def session(self) -> AsyncSession:
        """The session this repository reads and writes through."""
        return self._session

    async def insert_ignore(
        self,
        model: type[BaseDatabaseModel],
        values: dict[str, Any],
    ) -> bool:
        """Insert a row unless its primary key already exists.

        Uses ``INSERT ... ON CONFLICT DO NOTHING`` so concurrent inserts of
        the same pair cannot fail or duplicate.

        Returns:
            True if a row was inserted, False if it already existed.

        Raises:
            NotImplementedError: For a dialect without ON CONFLICT support.
        """
        dialect = self._session.get_bind().dialect.name
        if dialect == "postgresql":
            stmt: Any = postgresql.insert(model).values(**values)
        elif dialect == "sqlite":
            stmt = sqlite.insert(model).values(**values)
        else:
            msg = f"insert_ignore is not supported for dialect {dialect!r}"
            raise NotImplementedError(msg)

        result = await self._session.execute(stmt.on_conflict_do_nothing())
        return bool(result.rowcount)
