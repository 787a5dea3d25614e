"""
Custom exception classes for the application.

Every exception carries the HTTP status and the machine-readable error code
it is rendered with, so handlers never need to map exception types by hand.
"""

from typing import Any

from worldcup_api.schemas.errors import ErrorCode


class AppException(Exception):
    """
    Base exception class for all application exceptions.

    Attributes:
        message: Human-readable error message.
        http_status: HTTP status code for REST API responses.
        code: Machine-readable error code placed in the error envelope.
        details: Optional additional context placed in the error envelope.
    """

    http_status: int = 500
    code: str = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """
        Initialize the exception with a message.

        Args:
            message: Human-readable error description.
            details: Optional additional context for the client.
        """
        self.message = message
        self.details = details
        super().__init__(message)


class ValidationError(AppException):
    """
    Data validation failed.

    Raised when a query-string or path value fails validation before any
    query is built or executed.

    HTTP Status: 400 Bad Request
    """

    http_status = 400
    code = ErrorCode.VALIDATION_ERROR

    def __init__(self, field: str, message: str):
        """
        Args:
            field: Name of the offending query or path parameter.
            message: Human-readable error description.
        """
        self.field = field
        super().__init__(message, details={"field": field})


class InvalidFormatError(ValidationError):
    """
    Value does not match the expected textual format.

    Raised for malformed identifiers, dates and non-integer page values.
    """

    code = ErrorCode.INVALID_FORMAT


class InvalidValueError(ValidationError):
    """
    Value is well formed but not among the accepted values.

    Raised for unknown enumerated values, empty required text filters and
    negative numeric minimums.
    """

    code = ErrorCode.INVALID_VALUE


class OutOfRangeError(ValidationError):
    """Integer value falls outside its accepted range."""

    code = ErrorCode.OUT_OF_RANGE


class NotFoundError(AppException):
    """
    Resource not found.

    Raised when a lookup finds no row or a listing query matches no rows.

    HTTP Status: 404 Not Found
    """

    http_status = 404
    code = ErrorCode.NOT_FOUND


class BindingError(AppException):
    """
    SQL placeholders and bound parameters disagree.

    This is always a programming error. The public message stays generic
    and the internal detail is only logged.

    HTTP Status: 500 Internal Server Error
    """

    http_status = 500
    code = ErrorCode.INTERNAL_ERROR
    public_message = "An internal error occurred"

    def __init__(self, message: str):
        self.internal_message = message
        super().__init__(self.public_message)


class DataAccessError(AppException):
    """
    Database operation failed.

    Wraps driver and SQLAlchemy faults. The underlying error is logged and
    never exposed to clients.

    HTTP Status: 500 Internal Server Error
    """

    http_status = 500
    code = ErrorCode.DATABASE_ERROR

    def __init__(self, message: str = "Database error occurred"):
        super().__init__(message)
