"""Team endpoints."""

from typing import Any

from fastapi import APIRouter, Request

from worldcup_api.dependencies import ResourceRepoDep
from worldcup_api.repositories.resources import (
    TEAM_APPEARANCES,
    TEAM_LOOKUP,
    TEAMS,
)
from worldcup_api.schemas.errors import HTTPErrorResponse
from worldcup_api.schemas.pagination import PageResult
from worldcup_api.utils.error_handler import handle_http_errors

router = APIRouter(prefix="/teams", tags=["teams"])

ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": HTTPErrorResponse},
    404: {"model": HTTPErrorResponse},
}


@router.get("", summary="List teams", responses=ERROR_RESPONSES)
@handle_http_errors
async def get_teams(request: Request, repo: ResourceRepoDep) -> PageResult:
    """
    List teams, optionally restricted to a confederation region.

    Example:
        GET /teams?region=Europe&sort_by=team_name
    """
    return await repo.list_resource(TEAMS, dict(request.query_params))


@router.get("/{team_id}", summary="Get team details", responses=ERROR_RESPONSES)
@handle_http_errors
async def get_team(team_id: str, repo: ResourceRepoDep) -> dict[str, Any]:
    return await repo.get_resource(TEAM_LOOKUP, team_id)


@router.get(
    "/{team_id}/appearances",
    summary="List appearances of a team",
    responses=ERROR_RESPONSES,
)
@handle_http_errors
async def get_team_appearances(
    team_id: str, request: Request, repo: ResourceRepoDep
) -> PageResult:
    """
    List match appearances of the team.

    Example:
        GET /teams/T-01/appearances?match_result=win
    """
    return await repo.list_resource(
        TEAM_APPEARANCES, dict(request.query_params), scope_id=team_id
    )
