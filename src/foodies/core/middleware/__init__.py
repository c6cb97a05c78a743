"""Custom middleware components."""

from foodies.core.middleware.logging import LoggingMiddleware
from foodies.core.middleware.request_id import RequestIDMiddleware
from foodies.core.middleware.security_headers import SecurityHeadersMiddleware


__all__ = [
    "LoggingMiddleware",
    "RequestIDMiddleware",
    "SecurityHeadersMiddleware",
]
