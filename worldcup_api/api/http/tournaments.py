"""Tournament endpoints."""

from typing import Any

from fastapi import APIRouter, Request

from worldcup_api.dependencies import ResourceRepoDep
from worldcup_api.repositories.resources import (
    TOURNAMENT_LOOKUP,
    TOURNAMENT_MATCHES,
    TOURNAMENTS,
)
from worldcup_api.schemas.errors import HTTPErrorResponse
from worldcup_api.schemas.pagination import PageResult
from worldcup_api.utils.error_handler import handle_http_errors

router = APIRouter(prefix="/tournaments", tags=["tournaments"])

ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": HTTPErrorResponse},
    404: {"model": HTTPErrorResponse},
}


@router.get("", summary="List tournaments", responses=ERROR_RESPONSES)
@handle_http_errors
async def get_tournaments(
    request: Request, repo: ResourceRepoDep
) -> PageResult:
    """
    List tournaments, optionally within a start date range.

    Example:
        GET /tournaments?start_date_min=1990-01-01&start_date_max=2010-12-31
    """
    return await repo.list_resource(TOURNAMENTS, dict(request.query_params))


@router.get(
    "/{tournament_id}",
    summary="Get tournament details",
    responses=ERROR_RESPONSES,
)
@handle_http_errors
async def get_tournament(
    tournament_id: str, repo: ResourceRepoDep
) -> dict[str, Any]:
    return await repo.get_resource(TOURNAMENT_LOOKUP, tournament_id)


@router.get(
    "/{tournament_id}/matches",
    summary="List matches of a tournament",
    responses=ERROR_RESPONSES,
)
@handle_http_errors
async def get_tournament_matches(
    tournament_id: str, request: Request, repo: ResourceRepoDep
) -> PageResult:
    return await repo.list_resource(
        TOURNAMENT_MATCHES, dict(request.query_params), scope_id=tournament_id
    )
