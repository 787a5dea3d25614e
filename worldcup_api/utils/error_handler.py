"""
Error handling for HTTP endpoints.

Converts AppException instances and stray database errors into the unified
error envelope, eliminating duplicate try/except blocks in endpoints.
"""

from functools import wraps
from typing import Any, Callable

from fastapi import Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from worldcup_api.exceptions import AppException, BindingError
from worldcup_api.logging import logger
from worldcup_api.schemas.errors import (
    ErrorCode,
    ErrorEnvelope,
    HTTPErrorResponse,
)


def http_error_response(
    status_code: int,
    code: str,
    msg: str,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    """
    Create an HTTP error response with the unified envelope.

    Args:
        status_code: HTTP status code.
        code: Machine-readable error code (use ErrorCode constants).
        msg: Human-readable error message.
        details: Optional additional context.

    Returns:
        JSONResponse with body ``{"error": {"code", "msg", "details"}}``.

    Example:
        ```python
        return http_error_response(
            404, ErrorCode.NOT_FOUND, "No team found with ID T-99."
        )
        ```
    """
    body = HTTPErrorResponse(
        error=ErrorEnvelope(code=code, msg=msg, details=details)
    )
    return JSONResponse(status_code=status_code, content=body.model_dump())


def exception_response(ex: AppException) -> JSONResponse:
    """Render an AppException as an error envelope response."""
    return http_error_response(ex.http_status, ex.code, ex.message, ex.details)


def handle_http_errors(func: Callable) -> Callable:
    """
    Decorator for HTTP endpoints to convert exceptions to error envelopes.

    AppException instances are rendered with their own status and code.
    SQLAlchemyError instances that escaped the data access layer become a
    generic 500 database error.

    Args:
        func: The HTTP endpoint function to wrap.

    Returns:
        Wrapped function that handles exceptions.

    Example:
        ```python
        @router.get("/teams/{team_id}")
        @handle_http_errors
        async def get_team(team_id: str, repo: ResourceRepoDep) -> dict:
            return await repo.get_resource(TEAM_LOOKUP, team_id)
        ```
    """

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except BindingError as ex:
            logger.error(
                f"Binding error in {func.__name__}: {ex.internal_message}",
                extra={"exception_type": type(ex).__name__},
            )
            return exception_response(ex)
        except AppException as ex:
            logger.warning(
                f"AppException in {func.__name__}: {ex.message}",
                extra={"exception_type": type(ex).__name__},
            )
            return exception_response(ex)
        except SQLAlchemyError as ex:
            logger.error(
                f"Database error in {func.__name__}: {ex}",
                exc_info=True,
            )
            return http_error_response(
                500, ErrorCode.DATABASE_ERROR, "Database error occurred"
            )

    return wrapper


async def app_exception_handler(
    request: Request, ex: AppException
) -> JSONResponse:
    """Application-level handler for AppException raised outside endpoints."""
    logger.warning(
        f"AppException on {request.url.path}: {ex.message}",
        extra={"exception_type": type(ex).__name__},
    )
    return exception_response(ex)


async def unhandled_exception_handler(
    request: Request, ex: Exception
) -> JSONResponse:
    """Render any unexpected exception as a generic 500 envelope."""
    logger.error(
        f"Unhandled error on {request.url.path}: {ex}",
        exc_info=ex,
    )
    return http_error_response(
        500, ErrorCode.INTERNAL_ERROR, "An internal error occurred"
    )
