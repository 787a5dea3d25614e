"""
Prometheus metrics definitions.

Metrics are organized into submodules by subsystem (HTTP, database) and
re-exported here:

    from worldcup_api.utils.metrics import http_requests_total
    from worldcup_api.utils.metrics import db_query_duration_seconds
"""

from worldcup_api.utils.metrics.database import (
    db_query_duration_seconds,
    db_query_errors_total,
    db_slow_queries_total,
    paginated_queries_total,
)
from worldcup_api.utils.metrics.http import (
    http_request_duration_seconds,
    http_requests_in_progress,
    http_requests_total,
)

__all__ = [
    # HTTP
    "http_requests_total",
    "http_request_duration_seconds",
    "http_requests_in_progress",
    # Database
    "db_query_duration_seconds",
    "db_query_errors_total",
    "db_slow_queries_total",
    "paginated_queries_total",
]
