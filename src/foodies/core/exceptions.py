"""Error response model and exception handlers.

Service failures carry an :class:`~foodies.services.errors.ErrorCode`; this
module owns the mapping from codes to HTTP status codes and renders every
failure with the same :class:`ErrorResponse` body.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from foodies.observability.logging import get_logger
from foodies.schemas.base import APIResponse
from foodies.services.errors import ErrorCode, ServiceError


if TYPE_CHECKING:
    from fastapi import Request


logger = get_logger(__name__)


SERVICE_ERROR_STATUS: Final[dict[ErrorCode, int]] = {
    ErrorCode.EMAIL_TAKEN: status.HTTP_409_CONFLICT,
    ErrorCode.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorCode.INVALID_NAME: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_TIME: status.HTTP_400_BAD_REQUEST,
    ErrorCode.TOO_MANY_INGREDIENTS: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_CATEGORY: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_AREA: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_INGREDIENT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.IMAGE_REQUIRED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.IMAGE_NOT_FOUND: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_FILE_TYPE: status.HTTP_400_BAD_REQUEST,
    ErrorCode.FILE_TOO_LARGE: status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
    ErrorCode.RECIPE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.USER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.SESSION_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.TESTIMONIAL_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.CANNOT_FOLLOW_SELF: status.HTTP_400_BAD_REQUEST,
    ErrorCode.NOT_FOLLOWING: status.HTTP_404_NOT_FOUND,
}

_HTTP_ERROR_NAMES: Final[dict[int, str]] = {
    status.HTTP_400_BAD_REQUEST: "BAD_REQUEST",
    status.HTTP_401_UNAUTHORIZED: "UNAUTHORIZED",
    status.HTTP_403_FORBIDDEN: "FORBIDDEN",
    status.HTTP_404_NOT_FOUND: "NOT_FOUND",
    status.HTTP_405_METHOD_NOT_ALLOWED: "METHOD_NOT_ALLOWED",
    status.HTTP_413_REQUEST_ENTITY_TOO_LARGE: "PAYLOAD_TOO_LARGE",
}


class ErrorDetail(APIResponse):
    """Structured error detail for validation errors."""

    code: str
    message: str
    field: str | None = None


class ErrorResponse(APIResponse):
    """Structured error response."""

    error: str
    message: str
    details: list[ErrorDetail] | None = None
    request_id: str | None = None


def status_for(error: ServiceError) -> int:
    """Return the HTTP status code for a service failure."""
    return SERVICE_ERROR_STATUS.get(error.code, status.HTTP_400_BAD_REQUEST)


def _get_request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)


def _render(
    request: Request,
    status_code: int,
    error: str,
    message: str,
    details: list[ErrorDetail] | None = None,
    headers: dict[str, str] | None = None,
) -> ORJSONResponse:
    body = ErrorResponse(
        error=error,
        message=message,
        details=details,
        request_id=_get_request_id(request),
    )
    return ORJSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
        headers=headers,
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers with the FastAPI application."""

    @app.exception_handler(ServiceError)
    async def service_error_handler(
        request: Request,
        exc: ServiceError,
    ) -> ORJSONResponse:
        """Render a typed service failure."""
        status_code = status_for(exc)
        headers = (
            {"WWW-Authenticate": "Bearer"}
            if status_code == status.HTTP_401_UNAUTHORIZED
            else None
        )
        logger.info(
            "Request rejected",
            error_code=str(exc.code),
            status_code=status_code,
        )
        return _render(request, status_code, str(exc.code), exc.message, headers=headers)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> ORJSONResponse:
        """Handle Starlette HTTP exceptions (unknown routes, bad methods)."""
        return _render(
            request,
            exc.status_code,
            _HTTP_ERROR_NAMES.get(exc.status_code, "HTTP_ERROR"),
            str(exc.detail),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> ORJSONResponse:
        """Handle request body, query and path validation errors."""
        details = [
            ErrorDetail(
                code="VALIDATION_ERROR",
                message=error["msg"],
                field=".".join(str(loc) for loc in error["loc"]),
            )
            for error in exc.errors()
        ]
        return _render(
            request,
            status.HTTP_400_BAD_REQUEST,
            "VALIDATION_ERROR",
            "Request validation failed",
            details=details,
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> ORJSONResponse:
        """Handle unexpected exceptions without leaking internals."""
        logger.opt(exception=exc).error("Unhandled exception")
        return _render(
            request,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "INTERNAL_SERVER_ERROR",
            "An unexpected error occurred",
        )
