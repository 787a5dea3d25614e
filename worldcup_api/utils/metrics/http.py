"""
Prometheus metrics for the HTTP surface.

The ``endpoint`` label holds the route template (``/players/{player_id}``)
so one series exists per route, not per identifier.
"""

from worldcup_api.utils.metrics._helpers import (
    _get_or_create_counter,
    _get_or_create_gauge,
    _get_or_create_histogram,
)

# Listing requests run two queries, so latency buckets extend past 1s
REQUEST_DURATION_BUCKETS = (0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0)

http_requests_total = _get_or_create_counter(
    "http_requests_total",
    "HTTP requests served, by route template and status code",
    ["method", "endpoint", "status_code"],
)

http_request_duration_seconds = _get_or_create_histogram(
    "http_request_duration_seconds",
    "Time spent serving an HTTP request, in seconds",
    ["method", "endpoint"],
    buckets=REQUEST_DURATION_BUCKETS,
)

http_requests_in_progress = _get_or_create_gauge(
    "http_requests_in_progress",
    "HTTP requests currently being served",
    ["method"],
)

__all__ = [
    "http_requests_total",
    "http_request_duration_seconds",
    "http_requests_in_progress",
]
