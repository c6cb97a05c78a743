"""Testimonial data access."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select

from foodies.database.models import Testimonial
from foodies.database.repositories.base import SqlRepository


if TYPE_CHECKING:
    from collections.abc import Sequence


class TestimonialRepository(SqlRepository):
    """Repository for testimonials, always loaded with their owner."""

    async def list_all(self, owner_id: str | None = None) -> Sequence[Testimonial]:
        stmt = select(Testimonial).order_by(Testimonial.created_at.desc(), Testimonial.id)
        if owner_id is not None:
            stmt = stmt.where(Testimonial.owner_id == owner_id)
        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def get(self, testimonial_id: str) -> Testimonial | None:
        result = await self.session.execute(
            select(Testimonial)
            .where(Testimonial.id == testimonial_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def create(self, owner_id: str, text: str) -> Testimonial:
        record = Testimonial(owner_id=owner_id, testimonial=text)
        self.session.add(record)
        await self.session.flush()
        return record

    async def delete(self, record: Testimonial) -> None:
        await self.session.delete(record)
        await self.session.flush()
