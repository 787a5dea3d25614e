"""
Execution of parameterised SQL text on an async session.

Named parameters are checked against the placeholders of the statement
before anything reaches the database, then bound with explicit types:
integers as Integer (so LIMIT/OFFSET are never quoted), dates as Date,
everything else as an untyped scalar.
"""

import re
from datetime import date, datetime
from typing import Any

from sqlalchemy import Date, DateTime, Integer, bindparam, text
from sqlalchemy.engine import Result
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.sql.elements import BindParameter, TextClause
from sqlmodel.ext.asyncio.session import AsyncSession

from worldcup_api.exceptions import BindingError, DataAccessError
from worldcup_api.logging import logger
from worldcup_api.utils.metrics import db_query_errors_total
from worldcup_api.utils.query_monitor import get_query_operation

# Same placeholder grammar as sqlalchemy.text(); "::" casts are not
# placeholders.
PLACEHOLDER_PATTERN = re.compile(r"(?<![:\w\\]):(\w+)(?!:)")


def find_placeholders(sql: str) -> set[str]:
    """Return the names of every ``:name`` placeholder in the SQL text."""
    return set(PLACEHOLDER_PATTERN.findall(sql))


def typed_bindparam(name: str, value: Any) -> BindParameter[Any]:
    """
    Build a bind parameter with an explicit type where one matters.

    Args:
        name: Placeholder name.
        value: Value to bind.

    Returns:
        BindParameter for the value.
    """
    if isinstance(value, bool):
        return bindparam(name, value)
    if isinstance(value, int):
        return bindparam(name, value, type_=Integer)
    if isinstance(value, datetime):
        return bindparam(name, value, type_=DateTime)
    if isinstance(value, date):
        return bindparam(name, value, type_=Date)
    return bindparam(name, value)


def prepare_statement(
    sql: str, params: dict[str, Any] | None = None
) -> TextClause:
    """
    Build a bound ``text()`` statement.

    Args:
        sql: SQL text with ``:name`` placeholders.
        params: Named parameters, one per placeholder.

    Returns:
        TextClause with every parameter bound.

    Raises:
        BindingError: If placeholders and parameters do not correspond
            one-to-one.
    """
    placeholders = find_placeholders(sql)
    params = params or {}

    missing = placeholders - params.keys()
    unused = params.keys() - placeholders
    if missing or unused:
        message = (
            f"Placeholder/parameter mismatch: missing={sorted(missing)}, "
            f"unused={sorted(unused)}"
        )
        logger.error(f"{message} in statement: {sql}")
        raise BindingError(message)

    statement = text(sql)
    if not params:
        return statement

    return statement.bindparams(
        *[typed_bindparam(name, value) for name, value in params.items()]
    )


async def execute(
    session: AsyncSession, sql: str, params: dict[str, Any] | None = None
) -> Result[Any]:
    """
    Execute SQL text on the session.

    Args:
        session: Async session borrowed for the current request.
        sql: SQL text with ``:name`` placeholders.
        params: Named parameters.

    Returns:
        Buffered SQLAlchemy Result.

    Raises:
        BindingError: If placeholders and parameters do not correspond.
        DataAccessError: If the database rejects or fails the statement.
    """
    statement = prepare_statement(sql, params)
    try:
        return await session.exec(statement)
    except SQLAlchemyError as ex:
        logger.error(f"Database error while executing query: {ex}", exc_info=True)
        db_query_errors_total.labels(
            operation=get_query_operation(sql),
            error_type=type(ex).__name__,
        ).inc()
        raise DataAccessError() from ex


async def fetch_all(
    session: AsyncSession, sql: str, params: dict[str, Any] | None = None
) -> list[dict[str, Any]]:
    """Execute the statement and return every row as a dict."""
    result = await execute(session, sql, params)
    return [dict(row) for row in result.mappings().all()]


async def fetch_single(
    session: AsyncSession, sql: str, params: dict[str, Any] | None = None
) -> dict[str, Any] | None:
    """Execute the statement and return the first row, or None."""
    result = await execute(session, sql, params)
    row = result.mappings().first()
    return dict(row) if row is not None else None


async def count(
    session: AsyncSession, sql: str, params: dict[str, Any] | None = None
) -> int:
    """Execute a COUNT statement and return its single value."""
    result = await execute(session, sql, params)
    return int(result.scalar_one())
