"""API v1 router aggregating all endpoint routers.

All endpoints are mounted under the configured API prefix (``/api`` by
default). The root endpoint is mounted separately, without a prefix.
"""

from __future__ import annotations

from fastapi import APIRouter

from foodies.api.v1.endpoints import (
    auth,
    health,
    recipes,
    reference,
    testimonials,
    users,
)


router = APIRouter()

router.include_router(health.router)
router.include_router(auth.router)
router.include_router(users.router)
router.include_router(reference.router)
router.include_router(recipes.router)
router.include_router(testimonials.router)
