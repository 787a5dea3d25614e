"""
Dynamic filter-query construction for listing resources.

Only whitelisted identifiers (columns and sort directions) are ever
concatenated into SQL text. Every client supplied value travels through
the named parameter map of a QueryFragment.
"""

from typing import Any

from worldcup_api.constants import SORT_ASC, SORT_DIRECTIONS
from worldcup_api.exceptions import BindingError
from worldcup_api.logging import logger
from worldcup_api.schemas.resources import FilterRule, MatchKind, ResourceConfig

PAGE_LIMIT_PARAM = "page_limit"
PAGE_OFFSET_PARAM = "page_offset"

_COMPARISONS = {
    MatchKind.EXACT: "=",
    MatchKind.MIN: ">=",
    MatchKind.MAX: "<=",
    MatchKind.AFTER: ">",
}


class QueryFragment:
    """
    SQL text plus the named parameters it references.

    A fragment is owned by a single request. ``where`` and ``order_by``
    mutate it in place; ``counted`` and ``windowed`` derive new fragments
    and leave the original untouched.

    Example:
        ```python
        fragment = QueryFragment("SELECT * FROM teams WHERE 1 = 1")
        fragment.where("region_name LIKE :region", region="%Europe%")
        fragment.order_by("team_id", "ASC")
        page = fragment.windowed(limit=5, offset=10)
        ```
    """

    def __init__(
        self,
        sql: str,
        params: dict[str, Any] | None = None,
        order_clause: str = "",
    ):
        self.sql = sql
        self.params: dict[str, Any] = dict(params or {})
        self.order_clause = order_clause

    @property
    def statement(self) -> str:
        """Full SQL text including the ORDER BY clause."""
        return f"{self.sql}{self.order_clause}"

    def _bind(self, params: dict[str, Any]) -> None:
        for name, value in params.items():
            if name in self.params:
                raise BindingError(f"Parameter '{name}' is already bound")
            self.params[name] = value

    def where(self, clause: str, **params: Any) -> "QueryFragment":
        """
        AND-compose a predicate.

        Args:
            clause: Predicate text referencing its placeholders by name.
            **params: Values for the placeholders the predicate introduces.

        Raises:
            BindingError: If a parameter name is already bound.
        """
        self._bind(params)
        self.sql = f"{self.sql} AND {clause}"
        return self

    def order_by(
        self, column: str, direction: str, tie_breaker: str | None = None
    ) -> "QueryFragment":
        """
        Set the ORDER BY clause.

        Rows that tie on ``column`` are ordered by ``tie_breaker`` in the
        same direction. It is skipped when it is the sort column itself.
        """
        keys = [f"{column} {direction}"]
        if tie_breaker is not None and tie_breaker != column:
            keys.append(f"{tie_breaker} {direction}")
        self.order_clause = f" ORDER BY {', '.join(keys)}"
        return self

    def counted(self) -> "QueryFragment":
        """Fragment counting every row the current statement matches."""
        return QueryFragment(
            f"SELECT COUNT(*) FROM ({self.sql}) AS filtered_rows",
            self.params,
        )

    def windowed(self, limit: int, offset: int) -> "QueryFragment":
        """Fragment restricted to ``limit`` rows starting at ``offset``."""
        fragment = QueryFragment(
            f"{self.statement} LIMIT :{PAGE_LIMIT_PARAM} OFFSET :{PAGE_OFFSET_PARAM}",
            self.params,
        )
        fragment._bind({PAGE_LIMIT_PARAM: limit, PAGE_OFFSET_PARAM: offset})
        return fragment

    def __repr__(self) -> str:
        return f"QueryFragment(sql={self.statement!r}, params={self.params!r})"


def build_predicate(rule: FilterRule, value: Any) -> tuple[str, Any]:
    """
    Translate one validated filter into a predicate and its bound value.

    LIKE wildcards are added to the bound value, never to the SQL text.

    Args:
        rule: Declarative rule of the filter.
        value: Validated value of the filter.

    Returns:
        Tuple of (predicate text, value to bind under ``rule.param``).
    """
    placeholder = f":{rule.param}"

    if rule.match == MatchKind.FLAG:
        column = rule.flag_columns[value]
        return f"{column} = {placeholder}", 1
    if rule.match == MatchKind.PREFIX:
        return f"{rule.column} LIKE {placeholder}", f"{value}%"
    if rule.match == MatchKind.SUBSTRING:
        return f"{rule.column} LIKE {placeholder}", f"%{value}%"

    return f"{rule.column} {_COMPARISONS[rule.match]} {placeholder}", value


class QueryBuilder:
    """
    Builds the listing statement of one resource.

    Predicates are appended in the order the resource declares its filters,
    after the scope predicate, so identical inputs always produce identical
    SQL regardless of query-string order.
    """

    def __init__(self, resource: ResourceConfig):
        self.resource = resource

    def resolve_sort(
        self, sort_by: str | None = None, sort_order: str | None = None
    ) -> tuple[str, str]:
        """
        Translate public sort parameters into a whitelisted column/direction.

        Unknown sort keys fall back to the default column and anything other
        than ASC or DESC falls back to ASC, silently.
        """
        column = self.resource.default_sort
        if sort_by is not None:
            column = self.resource.sort_columns.get(sort_by.strip(), column)

        direction = (sort_order or "").strip().upper()
        if direction not in SORT_DIRECTIONS:
            direction = SORT_ASC

        return column, direction

    def build(
        self,
        values: dict[str, Any],
        scope_id: str | None = None,
        sort_by: str | None = None,
        sort_order: str | None = None,
    ) -> QueryFragment:
        """
        Build the filtered and ordered statement.

        Args:
            values: Validated filter values keyed by filter name.
            scope_id: Validated parent identifier for scoped resources.
            sort_by: Raw public sort key.
            sort_order: Raw sort direction.

        Returns:
            QueryFragment ready for pagination.

        Raises:
            BindingError: If a scoped resource is built without a scope id.
        """
        fragment = QueryFragment(self.resource.base_sql)

        scope = self.resource.scope
        if scope is not None:
            if scope_id is None:
                raise BindingError(
                    f"Resource '{self.resource.name}' requires '{scope.param}'"
                )
            fragment.where(
                f"{scope.column} = :{scope.param}", **{scope.param: scope_id}
            )

        for rule in self.resource.filters:
            if rule.param not in values:
                continue
            clause, value = build_predicate(rule, values[rule.param])
            fragment.where(clause, **{rule.param: value})

        column, direction = self.resolve_sort(sort_by, sort_order)
        fragment.order_by(column, direction, self.resource.tie_breaker)

        logger.debug(
            f"Built query for {self.resource.name}: {fragment.statement}"
        )
        return fragment
