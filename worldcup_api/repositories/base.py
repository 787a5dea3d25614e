"""
Base repository for parameterised SQL access.

The Repository pattern separates data access logic from request handling.
BaseRepository wraps one borrowed AsyncSession and exposes the read
helpers used by every resource plus plain write helpers.

Example:
    ```python
    from worldcup_api.repositories.base import BaseRepository


    class TeamRepository(BaseRepository):
        async def get_by_code(self, code: str) -> dict | None:
            return await self.fetch_single(
                "SELECT * FROM teams WHERE team_code = :code", {"code": code}
            )
    ```
"""

import re
from typing import Any

from sqlmodel.ext.asyncio.session import AsyncSession

from worldcup_api.exceptions import BindingError, DataAccessError
from worldcup_api.logging import logger
from worldcup_api.schemas.pagination import PageRequest, PageResult
from worldcup_api.storage import executor
from worldcup_api.storage.pagination import (
    OffsetPaginationStrategy,
    QueryFragment,
)

# Table and column names concatenated into write statements
_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*", re.ASCII)


def validate_identifiers(*names: str) -> None:
    """
    Reject table or column names that are not plain SQL identifiers.

    Raises:
        BindingError: If any name is not a plain identifier.
    """
    for name in names:
        if not _IDENTIFIER.fullmatch(name):
            raise BindingError(f"Invalid SQL identifier: {name!r}")


class BaseRepository:
    """
    Base repository providing SQL text helpers.

    Attributes:
        session: The database session for executing queries.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize repository with a session.

        Args:
            session: Database session borrowed for the current request.
        """
        self.session = session

    async def fetch_all(
        self, sql: str, params: dict[str, Any] | None = None
    ) -> list[dict[str, Any]]:
        """Return every row of the statement as a dict."""
        return await executor.fetch_all(self.session, sql, params)

    async def fetch_single(
        self, sql: str, params: dict[str, Any] | None = None
    ) -> dict[str, Any] | None:
        """Return the first row of the statement, or None."""
        return await executor.fetch_single(self.session, sql, params)

    async def count(
        self, sql: str, params: dict[str, Any] | None = None
    ) -> int:
        """
        Count the rows a statement returns.

        Args:
            sql: Any SELECT statement; it is wrapped in a COUNT subquery.
            params: Named parameters of the statement.

        Returns:
            Number of rows.
        """
        counted = QueryFragment(sql, params).counted()
        return await executor.count(self.session, counted.statement, counted.params)

    async def paginate(
        self, fragment: QueryFragment, page_request: PageRequest
    ) -> PageResult:
        """
        Return one page of the fragment's rows with pagination metadata.

        Args:
            fragment: Filtered and ordered statement with its parameters.
            page_request: Validated page number and size.

        Returns:
            PageResult envelope.
        """
        strategy = OffsetPaginationStrategy(self.session)
        return await strategy.paginate(fragment, page_request)

    async def _write(self, sql: str, params: dict[str, Any], action: str) -> int:
        try:
            result = await executor.execute(self.session, sql, params)
        except DataAccessError:
            await self.session.rollback()
            logger.error(f"Error during {action}")
            raise
        return result.rowcount

    async def insert(self, table: str, data: dict[str, Any]) -> int:
        """
        Insert one row.

        Args:
            table: Target table name.
            data: Column name -> value.

        Returns:
            Number of rows inserted.

        Raises:
            BindingError: If a name is not a plain identifier or data is empty.
            DataAccessError: If the database rejects the insert.
        """
        if not data:
            raise BindingError(f"Nothing to insert into {table}")
        validate_identifiers(table, *data)

        columns = ", ".join(data)
        placeholders = ", ".join(f":{column}" for column in data)
        sql = f"INSERT INTO {table} ({columns}) VALUES ({placeholders})"
        return await self._write(sql, dict(data), f"insert into {table}")

    async def update(
        self,
        table: str,
        data: dict[str, Any],
        where: dict[str, Any],
    ) -> int:
        """
        Update rows matching every ``where`` condition.

        Condition parameters are prefixed with ``where_`` so a column may
        appear both in ``data`` and in ``where``.

        Returns:
            Number of rows updated.
        """
        if not data or not where:
            raise BindingError(f"Update of {table} needs data and conditions")
        validate_identifiers(table, *data, *where)

        assignments = ", ".join(f"{column} = :{column}" for column in data)
        conditions = " AND ".join(
            f"{column} = :where_{column}" for column in where
        )
        params = dict(data)
        params.update({f"where_{column}": value for column, value in where.items()})

        sql = f"UPDATE {table} SET {assignments} WHERE {conditions}"
        return await self._write(sql, params, f"update of {table}")

    async def delete(self, table: str, where: dict[str, Any]) -> int:
        """
        Delete rows matching every ``where`` condition.

        Returns:
            Number of rows deleted.
        """
        if not where:
            raise BindingError(f"Delete from {table} needs conditions")
        validate_identifiers(table, *where)

        conditions = " AND ".join(f"{column} = :{column}" for column in where)
        sql = f"DELETE FROM {table} WHERE {conditions}"
        return await self._write(sql, dict(where), f"delete from {table}")
