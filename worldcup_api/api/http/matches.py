"""Match endpoints."""

from typing import Any

from fastapi import APIRouter, Request

from worldcup_api.dependencies import ResourceRepoDep
from worldcup_api.repositories.resources import MATCH_PLAYERS
from worldcup_api.schemas.errors import HTTPErrorResponse
from worldcup_api.schemas.pagination import PageResult
from worldcup_api.utils.error_handler import handle_http_errors

router = APIRouter(prefix="/matches", tags=["matches"])

ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": HTTPErrorResponse},
    404: {"model": HTTPErrorResponse},
}


@router.get(
    "/{match_id}/players",
    summary="List players who appeared in a match",
    responses=ERROR_RESPONSES,
)
@handle_http_errors
async def get_match_players(
    match_id: str, request: Request, repo: ResourceRepoDep
) -> PageResult:
    """
    List distinct players who appeared in the match.

    Example:
        GET /matches/M-2022-64/players?position=goalkeeper
    """
    return await repo.list_resource(
        MATCH_PLAYERS, dict(request.query_params), scope_id=match_id
    )
