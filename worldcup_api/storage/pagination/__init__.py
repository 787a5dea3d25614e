"""
Pagination of dynamically built SQL statements.

Example:
    ```python
    from worldcup_api.storage.pagination import (
        OffsetPaginationStrategy,
        QueryBuilder,
    )

    fragment = QueryBuilder(resource).build(values, sort_by="team_name")
    strategy = OffsetPaginationStrategy(session)
    result = await strategy.paginate(fragment, page_request)
    ```
"""

from worldcup_api.storage.pagination.offset import OffsetPaginationStrategy
from worldcup_api.storage.pagination.query_builder import (
    QueryBuilder,
    QueryFragment,
)

__all__ = [
    "OffsetPaginationStrategy",
    "QueryBuilder",
    "QueryFragment",
]
