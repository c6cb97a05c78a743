"""Request logging and timing middleware.

Binds method, path and client address to the logging context, logs one line
per completed request with its status and duration, adds an
``X-Process-Time`` header and warns about slow requests.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from foodies.observability.logging import bind_context, get_logger


if TYPE_CHECKING:
    from starlette.requests import Request
    from starlette.responses import Response

logger = get_logger(__name__)

SLOW_REQUEST_THRESHOLD = 1.0  # seconds


class LoggingMiddleware(BaseHTTPMiddleware):
    """Structured access log with timing."""

    def __init__(
        self,
        app: ASGIApp,
        *,
        exclude_prefixes: tuple[str, ...] = ("/health", "/public", "/favicon.ico"),
        slow_threshold: float = SLOW_REQUEST_THRESHOLD,
        header_name: str = "X-Process-Time",
    ) -> None:
        super().__init__(app)
        self.exclude_prefixes = exclude_prefixes
        self.slow_threshold = slow_threshold
        self.header_name = header_name

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        start = time.perf_counter()
        quiet = request.url.path.startswith(self.exclude_prefixes)

        if not quiet:
            bind_context(
                method=request.method,
                path=request.url.path,
                client_ip=self._get_client_ip(request),
            )

        response = await call_next(request)

        elapsed = time.perf_counter() - start
        elapsed_ms = round(elapsed * 1000, 2)
        response.headers[self.header_name] = f"{elapsed_ms}ms"

        if quiet:
            return response

        if response.status_code >= 500:
            logger.error("Request failed", status_code=response.status_code, duration_ms=elapsed_ms)
        else:
            logger.info("Request completed", status_code=response.status_code, duration_ms=elapsed_ms)

        if elapsed > self.slow_threshold:
            logger.warning(
                "Slow request detected",
                duration_ms=elapsed_ms,
                threshold_ms=self.slow_threshold * 1000,
            )
        return response

    @staticmethod
    def _get_client_ip(request: Request) -> str:
        """Client address, honoring the first hop of X-Forwarded-For."""
        forwarded_for = request.headers.get("x-forwarded-for")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()
        if request.client:
            return request.client.host
        return "unknown"
