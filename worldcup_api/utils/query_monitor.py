"""
Database query timing.

Cursor-level SQLAlchemy listeners time every statement, feed
``db_query_duration_seconds`` and log statements slower than
SLOW_QUERY_THRESHOLD_SECONDS. The listeners are registered on the Engine
class, so the async engine's sync core is covered as well.
"""

import time

from sqlalchemy import event
from sqlalchemy.engine import Engine

from worldcup_api.constants import SLOW_QUERY_THRESHOLD_SECONDS
from worldcup_api.logging import logger
from worldcup_api.utils.metrics import (
    db_query_duration_seconds,
    db_slow_queries_total,
)

STATEMENT_PREVIEW_CHARS = 500
_OPERATIONS = frozenset({"select", "insert", "update", "delete"})


def get_query_operation(statement: str) -> str:
    """
    Metric label for a statement: its leading keyword, or "other".

    Example:
        >>> get_query_operation("  SELECT COUNT(*) FROM (SELECT ...)")
        'select'
    """
    keyword = statement.lstrip().split(None, 1)[:1]
    operation = keyword[0].lower() if keyword else ""
    return operation if operation in _OPERATIONS else "other"


def _preview(statement: str) -> str:
    if len(statement) <= STATEMENT_PREVIEW_CHARS:
        return statement
    return f"{statement[:STATEMENT_PREVIEW_CHARS]}..."


@event.listens_for(Engine, "before_cursor_execute")
def before_cursor_execute(  # type: ignore[no-untyped-def]
    conn, cursor, statement, parameters, context, executemany
):
    context._query_start_time = time.perf_counter()


@event.listens_for(Engine, "after_cursor_execute")
def after_cursor_execute(  # type: ignore[no-untyped-def]
    conn, cursor, statement, parameters, context, executemany
):
    started = getattr(context, "_query_start_time", None)
    if started is None:
        return

    elapsed = time.perf_counter() - started
    operation = get_query_operation(statement)
    db_query_duration_seconds.labels(operation=operation).observe(elapsed)

    if elapsed <= SLOW_QUERY_THRESHOLD_SECONDS:
        return
    db_slow_queries_total.labels(operation=operation).inc()
    logger.warning(
        f"Slow {operation.upper()} took {elapsed:.3f}s: {_preview(statement)}",
        extra={"duration_seconds": round(elapsed, 3)},
    )


def enable_query_monitoring() -> None:
    """
    Log that query monitoring is active.

    Importing this module registers the listeners; calling this from the
    database module makes that import explicit.
    """
    logger.info(
        f"Database query monitoring enabled (slow query threshold: "
        f"{SLOW_QUERY_THRESHOLD_SECONDS * 1000:.0f}ms)"
    )
