"""
Offset-based pagination strategy (traditional page numbers).

Implements offset/limit pagination of a QueryFragment using page numbers.
Best for user-facing listings where clients expect "Page 1, 2, 3..."
navigation and a total page count.
"""

import math

from sqlmodel.ext.asyncio.session import AsyncSession

from worldcup_api.exceptions import DataAccessError
from worldcup_api.logging import logger
from worldcup_api.schemas.pagination import PageRequest, PageResult
from worldcup_api.storage import executor
from worldcup_api.storage.pagination.query_builder import QueryFragment
from worldcup_api.utils.metrics import paginated_queries_total


class OffsetPaginationStrategy:
    """
    Traditional offset-based pagination (page 1, 2, 3...).

    Pros:
    - User-friendly (page numbers)
    - Shows total pages
    - Allows jumping to any page

    Cons:
    - Two queries per page (count, then window)
    - O(n) performance for large offsets (database must scan all rows)
    - Count and window may disagree under concurrent writes

    Example:
        ```python
        from worldcup_api.storage.pagination import OffsetPaginationStrategy

        async with async_session() as session:
            strategy = OffsetPaginationStrategy(session)
            result = await strategy.paginate(
                fragment, PageRequest(page_number=2, page_size=20)
            )

            print(f"Page {result.current_page} of {result.total_pages}")
            print(f"Total records: {result.total_records}")
        ```
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize offset pagination strategy.

        Args:
            session: Async session borrowed for the current request.
        """
        self.session = session

    async def paginate(
        self, fragment: QueryFragment, page_request: PageRequest
    ) -> PageResult:
        """
        Execute offset-based pagination on the fragment.

        An out-of-range page is not an error: it yields empty data with the
        correct totals.

        Args:
            fragment: Filtered and ordered statement with its parameters.
            page_request: Validated page number and size.

        Returns:
            PageResult with:
            - current_page / page_size: as requested
            - total_records: rows matching the full statement
            - total_pages: ceil(total_records / page_size), 0 when empty
            - data: rows of the requested page

        Raises:
            BindingError: If the fragment's parameters are inconsistent.
            DataAccessError: If either query fails.
        """
        page_size = page_request.page_size
        offset = page_request.offset

        try:
            counted = fragment.counted()
            total = await executor.count(
                self.session, counted.statement, counted.params
            )

            # A window starting past the last row is empty
            if offset >= total:
                data = []
            else:
                windowed = fragment.windowed(page_size, offset)
                data = await executor.fetch_all(
                    self.session, windowed.statement, windowed.params
                )
        except DataAccessError:
            paginated_queries_total.labels(outcome="error").inc()
            raise

        pages = math.ceil(total / page_size) if total > 0 else 0

        if total == 0:
            outcome = "empty"
        elif not data:
            outcome = "out_of_range"
        else:
            outcome = "page"
        paginated_queries_total.labels(outcome=outcome).inc()

        logger.debug(
            f"Paginated query: page={page_request.page_number} "
            f"size={page_size} offset={offset} total={total} pages={pages}"
        )

        return PageResult(
            current_page=page_request.page_number,
            page_size=page_size,
            total_pages=pages,
            total_records=total,
            data=data,
        )
