"""
Generic accessor for every declared resource.

Example:
    ```python
    from worldcup_api.repositories.resource_repository import (
        ResourceRepository,
    )
    from worldcup_api.repositories.resources import TEAMS, TEAM_LOOKUP

    async with async_session() as session:
        repo = ResourceRepository(session)
        page = await repo.list_resource(TEAMS, {"region": "Europe"})
        team = await repo.get_resource(TEAM_LOOKUP, "T-01")
    ```
"""

from typing import Any, Mapping

from worldcup_api.exceptions import NotFoundError
from worldcup_api.logging import logger
from worldcup_api.repositories.base import BaseRepository
from worldcup_api.schemas.pagination import PageResult
from worldcup_api.schemas.resources import LookupConfig, ResourceConfig
from worldcup_api.storage.pagination import QueryBuilder
from worldcup_api.utils.validators import (
    parse_page_request,
    validate_filters,
    validate_identifier,
)


class ResourceRepository(BaseRepository):
    """
    Lists and looks up resources described by ResourceConfig/LookupConfig.

    Validation of the scope identifier, the page parameters and the filters
    always completes before any statement is executed.
    """

    async def list_resource(
        self,
        resource: ResourceConfig,
        query: Mapping[str, str],
        scope_id: str | None = None,
    ) -> PageResult:
        """
        Return one page of a resource listing.

        Args:
            resource: Resource description.
            query: Raw query-string map; unknown keys are ignored.
            scope_id: Raw parent identifier for scoped resources.

        Returns:
            PageResult for the requested page. An out-of-range page yields
            empty data with the correct totals.

        Raises:
            ValidationError: If the scope id, page or a filter is invalid.
            NotFoundError: If no rows match at all.
            DataAccessError: If the database fails.
        """
        if resource.scope is not None:
            scope_id = validate_identifier(
                resource.scope.param, scope_id or "", resource.scope.identifier
            )
        page_request = parse_page_request(query)
        values = validate_filters(resource.filters, query)

        fragment = QueryBuilder(resource).build(
            values,
            scope_id=scope_id,
            sort_by=query.get("sort_by"),
            sort_order=query.get("sort_order"),
        )
        result = await self.paginate(fragment, page_request)

        if result.total_records == 0:
            logger.info(f"No rows for {resource.name} with filters {values}")
            raise NotFoundError(
                resource.not_found_message.format(scope_id=scope_id),
                details=(
                    {resource.scope.param: scope_id} if resource.scope else None
                ),
            )
        return result

    async def get_resource(
        self, lookup: LookupConfig, raw_id: str
    ) -> dict[str, Any]:
        """
        Return the single row identified by ``raw_id``.

        Raises:
            InvalidFormatError: If the identifier is malformed.
            NotFoundError: If no row has that identifier.
        """
        identifier = validate_identifier(lookup.param, raw_id, lookup.identifier)
        row = await self.fetch_single(lookup.sql, {lookup.param: identifier})
        if row is None:
            raise NotFoundError(
                f"No {lookup.label} found with ID {identifier}.",
                details={lookup.param: identifier},
            )
        return row
