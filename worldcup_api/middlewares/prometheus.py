"""
Prometheus metrics middleware for HTTP requests.

Every request is counted, timed and tracked as in-progress. Counters and
timings are labelled with the route template the router resolved. Requests
that raise are recorded with status code 500.
"""

import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from worldcup_api.utils.metrics import (
    http_request_duration_seconds,
    http_requests_in_progress,
    http_requests_total,
)

UNMATCHED_ENDPOINT = "unmatched"


def endpoint_label(request: Request) -> str:
    """
    Route template of the request, e.g. ``/players/{player_id}``.

    Only meaningful once the router has handled the request and stored the
    matched route in the scope. Paths that matched no route share the
    ``unmatched`` label so arbitrary URLs cannot create new series.
    """
    route = request.scope.get("route")
    return getattr(route, "path", None) or UNMATCHED_ENDPOINT


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Records http_requests_total, http_request_duration_seconds and
    http_requests_in_progress for every request."""

    async def dispatch(self, request: Request, call_next) -> Response:
        in_progress = http_requests_in_progress.labels(method=request.method)

        in_progress.inc()
        started = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            labels = {
                "method": request.method,
                "endpoint": endpoint_label(request),
            }
            http_request_duration_seconds.labels(**labels).observe(
                time.perf_counter() - started
            )
            http_requests_total.labels(**labels, status_code=status_code).inc()
            in_progress.dec()
