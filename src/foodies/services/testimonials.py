"""Testimonials about the platform."""

from __future__ import annotations

from typing import TYPE_CHECKING

from foodies.database.repositories import TestimonialRepository, UserRepository
from foodies.mappers import to_testimonial_response
from foodies.observability.logging import get_logger
from foodies.services.errors import (
    ForbiddenError,
    TestimonialNotFoundError,
    UserNotFoundError,
)


if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from foodies.database.models import Testimonial
    from foodies.schemas.testimonials import TestimonialResponse

logger = get_logger(__name__)


class TestimonialsService:
    """CRUD for testimonials. Only the author may edit or delete one."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._testimonials = TestimonialRepository(session)
        self._users = UserRepository(session)

    async def get_testimonials(self) -> list[TestimonialResponse]:
        """All testimonials, newest first."""
        return [to_testimonial_response(t) for t in await self._testimonials.list_all()]

    async def get_user_testimonials(self, user_id: str) -> list[TestimonialResponse]:
        records = await self._testimonials.list_all(owner_id=user_id)
        return [to_testimonial_response(t) for t in records]

    async def get_testimonial(self, testimonial_id: str) -> TestimonialResponse:
        return to_testimonial_response(await self._require(testimonial_id))

    async def create_testimonial(self, user_id: str, text: str) -> TestimonialResponse:
        """Raises UserNotFoundError if the author does not exist."""
        if not await self._users.exists(user_id):
            raise UserNotFoundError

        record = await self._testimonials.create(user_id, text)
        await self._session.commit()
        logger.info("Testimonial created", testimonial_id=record.id)
        return await self.get_testimonial(record.id)

    async def update_testimonial(
        self,
        testimonial_id: str,
        user_id: str,
        text: str,
    ) -> TestimonialResponse:
        """Replace the text of the caller's own testimonial.

        Raises:
            TestimonialNotFoundError: If the testimonial does not exist.
            ForbiddenError: If the caller is not the author.
        """
        record = await self._require_owned(testimonial_id, user_id)
        record.testimonial = text
        await self._session.commit()
        return await self.get_testimonial(testimonial_id)

    async def delete_testimonial(self, testimonial_id: str, user_id: str) -> None:
        """Same failure modes as :meth:`update_testimonial`."""
        record = await self._require_owned(testimonial_id, user_id)
        await self._testimonials.delete(record)
        await self._session.commit()
        logger.info("Testimonial deleted", testimonial_id=testimonial_id)

    async def _require(self, testimonial_id: str) -> Testimonial:
        record = await self._testimonials.get(testimonial_id)
        if record is None:
            raise TestimonialNotFoundError
        return record

    async def _require_owned(self, testimonial_id: str, user_id: str) -> Testimonial:
        record = await self._require(testimonial_id)
        if record.owner_id != user_id:
            raise ForbiddenError("You can only modify your own testimonials")
        return record
