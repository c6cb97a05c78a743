"""Testimonial endpoints.

Reading is public; writing requires authentication, and only the author may
edit or delete a testimonial.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status

from foodies.api.dependencies import get_testimonials_service
from foodies.auth.dependencies import CurrentSession
from foodies.schemas import testimonials as schemas
from foodies.services import TestimonialsService


router = APIRouter(tags=["Testimonials"])

TestimonialsServiceDep = Annotated[TestimonialsService, Depends(get_testimonials_service)]


@router.get(
    "/testimonials",
    response_model=list[schemas.TestimonialResponse],
    summary="List testimonials",
)
async def list_testimonials(
    service: TestimonialsServiceDep,
) -> list[schemas.TestimonialResponse]:
    return await service.get_testimonials()


@router.get(
    "/testimonials/{testimonial_id}",
    response_model=schemas.TestimonialResponse,
    summary="Get a testimonial",
    responses={404: {"description": "Testimonial not found"}},
)
async def get_testimonial(
    testimonial_id: str,
    service: TestimonialsServiceDep,
) -> schemas.TestimonialResponse:
    return await service.get_testimonial(testimonial_id)


@router.get(
    "/users/{user_id}/testimonials",
    response_model=list[schemas.TestimonialResponse],
    summary="A user's testimonials",
)
async def list_user_testimonials(
    user_id: str,
    service: TestimonialsServiceDep,
) -> list[schemas.TestimonialResponse]:
    return await service.get_user_testimonials(user_id)


@router.post(
    "/testimonials",
    response_model=schemas.TestimonialResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Write a testimonial",
)
async def create_testimonial(
    body: schemas.TestimonialRequest,
    auth: CurrentSession,
    service: TestimonialsServiceDep,
) -> schemas.TestimonialResponse:
    return await service.create_testimonial(auth.user_id, body.testimonial)


@router.patch(
    "/testimonials/{testimonial_id}",
    response_model=schemas.TestimonialResponse,
    summary="Edit one of the caller's testimonials",
    responses={
        403: {"description": "Not the author"},
        404: {"description": "Testimonial not found"},
    },
)
async def update_testimonial(
    testimonial_id: str,
    body: schemas.TestimonialRequest,
    auth: CurrentSession,
    service: TestimonialsServiceDep,
) -> schemas.TestimonialResponse:
    return await service.update_testimonial(testimonial_id, auth.user_id, body.testimonial)


@router.delete(
    "/testimonials/{testimonial_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete one of the caller's testimonials",
    responses={
        403: {"description": "Not the author"},
        404: {"description": "Testimonial not found"},
    },
)
async def delete_testimonial(
    testimonial_id: str,
    auth: CurrentSession,
    service: TestimonialsServiceDep,
) -> None:
    await service.delete_testimonial(testimonial_id, auth.user_id)
