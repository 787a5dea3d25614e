"""
Declarative descriptions of the resources exposed by the API.

A resource is described once, as data: the base statement, the optional
parent scope, the filters it accepts and the columns it may be sorted by.
Validation, query construction, the about document and the CLI listing
are all driven by these descriptions.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class MatchKind(str, Enum):
    """How a validated filter value is compared to its column."""

    EXACT = "exact"
    PREFIX = "prefix"
    SUBSTRING = "substring"
    MIN = "min"
    MAX = "max"
    AFTER = "after"
    FLAG = "flag"


class ValueKind(str, Enum):
    """How a raw query-string value is validated."""

    TEXT = "text"
    REQUIRED_TEXT = "required_text"
    DATE = "date"
    IDENTIFIER = "identifier"
    CHOICE = "choice"
    NON_NEGATIVE_INT = "non_negative_int"


class IdentifierKind(str, Enum):
    TEAM = "team"
    PLAYER = "player"
    TOURNAMENT = "tournament"
    MATCH = "match"
    STADIUM = "stadium"


class FilterRule(BaseModel):  # type: ignore[misc]
    """
    One recognised query-string filter.

    Attributes:
        param: Query-string key, also used as the bind parameter name.
        column: Column compared against the value. Unused for FLAG rules.
        match: Comparison applied between column and value.
        value_kind: Validation applied to the raw value.
        identifier: Identifier format for IDENTIFIER values.
        choices: Accepted values for CHOICE values, lower case.
        flag_columns: CHOICE value -> boolean column, for FLAG rules.
        value_map: CHOICE value -> bound value, when the stored value
            differs from the accepted text (e.g. gender -> 0/1).
        description: Human-readable description for the about document.
    """

    model_config = ConfigDict(frozen=True)

    param: str
    column: str | None = None
    match: MatchKind = MatchKind.EXACT
    value_kind: ValueKind = ValueKind.TEXT
    identifier: IdentifierKind | None = None
    choices: tuple[str, ...] = ()
    flag_columns: dict[str, str] = Field(default_factory=dict)
    value_map: dict[str, int | str] = Field(default_factory=dict)
    description: str = ""


class ScopeRule(BaseModel):  # type: ignore[misc]
    """Parent identifier restricting a sub-resource listing."""

    model_config = ConfigDict(frozen=True)

    param: str
    column: str
    identifier: IdentifierKind


class ResourceConfig(BaseModel):  # type: ignore[misc]
    """
    Listing resource description.

    Attributes:
        name: Short unique name of the resource.
        uri: Route template the resource is served on.
        description: Human-readable description for the about document.
        base_sql: Base statement, always ending in ``WHERE 1 = 1``.
        scope: Optional parent identifier predicate.
        filters: Recognised filters, in the order their predicates are
            appended.
        sort_columns: Public sort key -> whitelisted column.
        default_sort: Column used when sort_by is absent or unknown.
        tie_breaker: Unique column ordering rows the sort column ties on,
            so consecutive pages never overlap.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    uri: str
    description: str
    base_sql: str
    scope: ScopeRule | None = None
    filters: tuple[FilterRule, ...] = ()
    sort_columns: dict[str, str] = Field(default_factory=dict)
    default_sort: str
    tie_breaker: str
    not_found_message: str = "No records found matching the given criteria."


class LookupConfig(BaseModel):  # type: ignore[misc]
    """Single-row lookup by identifier."""

    model_config = ConfigDict(frozen=True)

    name: str
    uri: str
    description: str
    sql: str
    param: str
    identifier: IdentifierKind
    label: str
