"""
Middleware for injecting contextual fields into structured logs.

This middleware adds request-specific information to the log context
that will be included in all log messages during request processing.
"""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from worldcup_api.logging import clear_log_context, set_log_context


class LoggingContextMiddleware(BaseHTTPMiddleware):  # type: ignore[misc]
    """
    Middleware to inject contextual fields into structured logs.

    Adds endpoint, method and query string to the log context and clears
    it once the request completes.
    """

    async def dispatch(self, request: Request, call_next: ASGIApp) -> Response:
        set_log_context(
            endpoint=request.url.path,
            method=request.method,
        )
        if request.url.query:
            set_log_context(query=request.url.query)

        try:
            response = await call_next(request)
            set_log_context(status_code=response.status_code)
            return response
        finally:
            clear_log_context()
