"""Health check endpoint.

Reports liveness plus the status of the database connection.
"""

from __future__ import annotations

from fastapi import APIRouter, Response, status

from foodies.api.dependencies import AppSettings
from foodies.database import check_database_health
from foodies.schemas import HealthResponse


router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    responses={503: {"description": "A dependency is unhealthy"}},
)
async def health_check(
    response: Response,
    settings: AppSettings,
) -> HealthResponse:
    """Check that the service is up and the database answers.

    Responds 503 with status ``degraded`` when the database does not.
    """
    checks = await check_database_health()
    healthy = all(value == "healthy" for value in checks.values())
    if not healthy:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return HealthResponse(
        status="healthy" if healthy else "degraded",
        version=settings.app.version,
        checks=checks,
    )
