"""Player endpoints: listing, lookup, goals and appearances."""

from typing import Any

from fastapi import APIRouter, Request

from worldcup_api.dependencies import ResourceRepoDep
from worldcup_api.repositories.resources import (
    PLAYER_APPEARANCES,
    PLAYER_GOALS,
    PLAYER_LOOKUP,
    PLAYERS,
)
from worldcup_api.schemas.errors import HTTPErrorResponse
from worldcup_api.schemas.pagination import PageResult
from worldcup_api.utils.error_handler import handle_http_errors

router = APIRouter(prefix="/players", tags=["players"])

ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": HTTPErrorResponse},
    404: {"model": HTTPErrorResponse},
}


@router.get(
    "",
    summary="List players",
    responses=ERROR_RESPONSES,
)
@handle_http_errors
async def get_players(request: Request, repo: ResourceRepoDep) -> PageResult:
    """
    List players matching the filters.

    Example:
        GET /players?last_name=Mes&position=forward&sort_by=dob&page=2
    """
    return await repo.list_resource(PLAYERS, dict(request.query_params))


@router.get(
    "/{player_id}",
    summary="Get player details",
    responses=ERROR_RESPONSES,
)
@handle_http_errors
async def get_player(player_id: str, repo: ResourceRepoDep) -> dict[str, Any]:
    return await repo.get_resource(PLAYER_LOOKUP, player_id)


@router.get(
    "/{player_id}/goals",
    summary="List goals scored by a player",
    responses=ERROR_RESPONSES,
)
@handle_http_errors
async def get_player_goals(
    player_id: str, request: Request, repo: ResourceRepoDep
) -> PageResult:
    """
    List goals scored by the player, optionally in one tournament or match.

    Example:
        GET /players/P-08509/goals?tournament=WC-2014
    """
    return await repo.list_resource(
        PLAYER_GOALS, dict(request.query_params), scope_id=player_id
    )


@router.get(
    "/{player_id}/appearances",
    summary="List appearances of a player",
    responses=ERROR_RESPONSES,
)
@handle_http_errors
async def get_player_appearances(
    player_id: str, request: Request, repo: ResourceRepoDep
) -> PageResult:
    return await repo.list_resource(
        PLAYER_APPEARANCES, dict(request.query_params), scope_id=player_id
    )
