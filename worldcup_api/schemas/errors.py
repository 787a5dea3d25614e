"""
Unified error envelope models for HTTP responses.

The error envelopes follow a common shape:
- code: Machine-readable error code (string)
- msg: Human-readable error description
- details: Optional additional context (offending field, identifier, etc.)

Example HTTP error response:
    {
        "error": {
            "code": "invalid_format",
            "msg": "The provided team_id is invalid! Expected format: T-XX.",
            "details": {"field": "team_id"}
        }
    }
"""

from typing import Any

from pydantic import BaseModel, Field


class ErrorEnvelope(BaseModel):
    """
    Unified error envelope structure.

    Attributes:
        code: Machine-readable error code for client-side error handling.
        msg: Human-readable error description for display.
        details: Optional additional context (offending field, etc.).

    Example:
        ```python
        error = ErrorEnvelope(
            code="not_found",
            msg="No player found with ID P-99999.",
            details={"player_id": "P-99999"}
        )
        ```
    """

    code: str = Field(
        ...,
        description="Machine-readable error code (e.g., 'validation_error', 'not_found')",
    )
    msg: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] | None = Field(
        default=None,
        description="Optional additional error context and metadata",
    )


class HTTPErrorResponse(BaseModel):
    """
    HTTP error response envelope.

    Used as the JSON body for every HTTP error response so that API clients
    can parse validation, lookup and server errors the same way.

    Attributes:
        error: Embedded error envelope with code, msg, and details.
    """

    error: ErrorEnvelope = Field(..., description="Error details envelope")


# Standard error codes for common scenarios
class ErrorCode:
    """
    Standard error codes for consistent error reporting.

    Categories:
    - Validation errors: VALIDATION_ERROR, INVALID_FORMAT, INVALID_VALUE,
      OUT_OF_RANGE
    - Resource errors: NOT_FOUND
    - System errors: DATABASE_ERROR, INTERNAL_ERROR
    """

    # Validation errors
    VALIDATION_ERROR = "validation_error"
    INVALID_FORMAT = "invalid_format"
    INVALID_VALUE = "invalid_value"
    OUT_OF_RANGE = "out_of_range"

    # Resource errors
    NOT_FOUND = "not_found"

    # System errors
    DATABASE_ERROR = "database_error"
    INTERNAL_ERROR = "internal_error"
