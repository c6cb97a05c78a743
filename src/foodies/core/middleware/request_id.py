"""Request ID middleware for request correlation.

Propagates a well-formed incoming ``X-Request-ID`` or generates a new one,
stores it on ``request.state``, echoes it on the response and binds it to
the logging context.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from foodies.observability.logging import bind_context, clear_context
from foodies.utils.ids import new_id


if TYPE_CHECKING:
    from starlette.requests import Request
    from starlette.responses import Response


_VALID_REQUEST_ID = re.compile(r"^[A-Za-z0-9._-]{1,128}$")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Attach a request id to every request and response."""

    def __init__(self, app: ASGIApp, header_name: str = "X-Request-ID") -> None:
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        clear_context()

        incoming = request.headers.get(self.header_name, "")
        request_id = incoming if _VALID_REQUEST_ID.match(incoming) else new_id()

        request.state.request_id = request_id
        bind_context(request_id=request_id)

        response = await call_next(request)
        response.headers[self.header_name] = request_id
        return response
