"""
Validation of raw query-string and path values.

Every function here is pure: it either returns the normalised value or
raises a subclass of ValidationError naming the offending parameter. All
validation runs before any SQL is built.
"""

import re
from datetime import date, datetime
from typing import Any, Mapping

from worldcup_api.constants import (
    DATE_FORMAT,
    DATE_FORMAT_DISPLAY,
    FIRST_PAGE,
    MATCH_ID_PATTERN,
    MAX_PAGE_SIZE,
    MIN_PAGE_SIZE,
    PLAYER_ID_PATTERN,
    STADIUM_ID_PATTERN,
    TEAM_ID_PATTERN,
    TOURNAMENT_ID_PATTERN,
)
from worldcup_api.exceptions import (
    InvalidFormatError,
    InvalidValueError,
    OutOfRangeError,
)
from worldcup_api.schemas.pagination import PageRequest
from worldcup_api.schemas.resources import FilterRule, IdentifierKind, ValueKind
from worldcup_api.settings import app_settings

PAGE_NUMBER_MESSAGE = "Page number must be a positive integer."
PAGE_SIZE_MESSAGE = "Page size must be a positive integer between 1 and 100."

# Identifier kind -> (pattern, format shown to clients)
IDENTIFIER_FORMATS: dict[IdentifierKind, tuple[re.Pattern[str], str]] = {
    IdentifierKind.TEAM: (TEAM_ID_PATTERN, "T-XX"),
    IdentifierKind.PLAYER: (PLAYER_ID_PATTERN, "P-XXXXX"),
    IdentifierKind.TOURNAMENT: (TOURNAMENT_ID_PATTERN, "WC-YYYY"),
    IdentifierKind.MATCH: (MATCH_ID_PATTERN, "M-YYYY-MM"),
    IdentifierKind.STADIUM: (STADIUM_ID_PATTERN, "S-XXX"),
}

_SIGNED_INT = re.compile(r"[+-]?[0-9]+")
_UNSIGNED_INT = re.compile(r"[0-9]+")


def validate_identifier(field: str, raw: str, kind: IdentifierKind) -> str:
    """
    Validate a resource identifier against its fixed-width format.

    Args:
        field: Parameter name used in the error.
        raw: Raw value from the path or query string.
        kind: Which identifier format applies.

    Returns:
        The identifier, unchanged.

    Raises:
        InvalidFormatError: If the value does not match the whole pattern.

    Example:
        >>> validate_identifier("team_id", "T-01", IdentifierKind.TEAM)
        'T-01'
    """
    pattern, display = IDENTIFIER_FORMATS[kind]
    if not pattern.fullmatch(raw):
        raise InvalidFormatError(
            field,
            f"The provided {field} is invalid! Expected format: {display}.",
        )
    return raw


def validate_date(field: str, raw: str) -> date:
    """
    Validate a calendar date in YYYY-MM-DD form.

    The value must parse and re-format to exactly the same text, which
    rejects impossible dates such as 2024-02-30 and unpadded parts such as
    2024-1-05.

    Raises:
        InvalidFormatError: If the value is not a real, zero-padded date.
    """
    message = f"Invalid {field} format. Expected format: {DATE_FORMAT_DISPLAY}."
    try:
        parsed = datetime.strptime(raw, DATE_FORMAT)
    except ValueError:
        raise InvalidFormatError(field, message)
    if parsed.strftime(DATE_FORMAT) != raw:
        raise InvalidFormatError(field, message)
    return parsed.date()


def validate_choice(field: str, raw: str, choices: tuple[str, ...]) -> str:
    """
    Validate a value against a fixed whitelist, case-insensitively.

    Returns:
        The trimmed, lower-cased value.

    Raises:
        InvalidValueError: If the value is not one of the choices.
    """
    value = raw.strip().lower()
    if value not in choices:
        raise InvalidValueError(
            field,
            f"Invalid {field} value. Accepted values: {', '.join(choices)}.",
        )
    return value


def validate_text(field: str, raw: str, required: bool = False) -> str | None:
    """
    Trim a free-text value.

    Returns:
        The trimmed value, or None when it is empty and not required.

    Raises:
        InvalidValueError: If the value is empty and required.
    """
    value = raw.strip()
    if not value:
        if required:
            raise InvalidValueError(
                field, f"The '{field}' filter must be a non-empty string."
            )
        return None
    return value


def validate_non_negative_int(field: str, raw: str) -> int:
    """Validate a non-negative integer such as a minimum capacity."""
    value = raw.strip()
    if not _UNSIGNED_INT.fullmatch(value):
        raise InvalidValueError(
            field, f"The '{field}' filter must be a non-negative number."
        )
    return int(value)


def validate_filter(rule: FilterRule, raw: str) -> Any:
    """
    Validate one raw filter value according to its rule.

    Args:
        rule: Declarative rule of the filter.
        raw: Raw query-string value.

    Returns:
        The normalised value ready for binding, or None when the filter is
        to be treated as absent.

    Raises:
        ValidationError: A subclass describing why the value was rejected.
    """
    kind = rule.value_kind
    if kind == ValueKind.TEXT:
        return validate_text(rule.param, raw)
    if kind == ValueKind.REQUIRED_TEXT:
        return validate_text(rule.param, raw, required=True)
    if kind == ValueKind.DATE:
        return validate_date(rule.param, raw)
    if kind == ValueKind.IDENTIFIER:
        return validate_identifier(rule.param, raw, rule.identifier)
    if kind == ValueKind.CHOICE:
        value = validate_choice(rule.param, raw, rule.choices)
        return rule.value_map.get(value, value)
    if kind == ValueKind.NON_NEGATIVE_INT:
        return validate_non_negative_int(rule.param, raw)
    raise ValueError(f"Unsupported value kind: {kind}")


def validate_filters(
    rules: tuple[FilterRule, ...], query: Mapping[str, str]
) -> dict[str, Any]:
    """
    Validate every recognised filter present in the query.

    Unknown keys are ignored. Filters whose value normalises to None are
    left out of the result.

    Returns:
        Mapping of filter name to validated value, in rule order.
    """
    values: dict[str, Any] = {}
    for rule in rules:
        raw = query.get(rule.param)
        if raw is None:
            continue
        value = validate_filter(rule, raw)
        if value is not None:
            values[rule.param] = value
    return values


def _parse_page_value(
    query: Mapping[str, str], field: str, default: int, message: str
) -> int:
    raw = query.get(field)
    if raw is None:
        return default
    value = raw.strip()
    if not _SIGNED_INT.fullmatch(value):
        raise InvalidFormatError(field, message)
    try:
        return int(value)
    except ValueError:
        # More digits than the interpreter converts
        raise OutOfRangeError(field, message) from None


def parse_page_request(query: Mapping[str, str]) -> PageRequest:
    """
    Parse the page and page_size query parameters.

    Args:
        query: Raw query-string map.

    Returns:
        PageRequest with defaults applied for missing parameters.

    Raises:
        InvalidFormatError: If a value is not an integer.
        OutOfRangeError: If an integer is outside its accepted range.

    Example:
        >>> parse_page_request({"page": "3", "page_size": "5"})
        PageRequest(page_number=3, page_size=5)
    """
    page_number = _parse_page_value(
        query, "page", FIRST_PAGE, PAGE_NUMBER_MESSAGE
    )
    page_size = _parse_page_value(
        query, "page_size", app_settings.DEFAULT_PAGE_SIZE, PAGE_SIZE_MESSAGE
    )

    if page_number < FIRST_PAGE:
        raise OutOfRangeError("page", PAGE_NUMBER_MESSAGE)
    if not MIN_PAGE_SIZE <= page_size <= MAX_PAGE_SIZE:
        raise OutOfRangeError("page_size", PAGE_SIZE_MESSAGE)

    return PageRequest(page_number=page_number, page_size=page_size)
