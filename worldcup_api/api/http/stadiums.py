"""Stadium endpoints."""

from typing import Any

from fastapi import APIRouter, Request

from worldcup_api.dependencies import ResourceRepoDep
from worldcup_api.repositories.resources import STADIUM_MATCHES, STADIUMS
from worldcup_api.schemas.errors import HTTPErrorResponse
from worldcup_api.schemas.pagination import PageResult
from worldcup_api.utils.error_handler import handle_http_errors

router = APIRouter(prefix="/stadiums", tags=["stadiums"])

ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": HTTPErrorResponse},
    404: {"model": HTTPErrorResponse},
}


@router.get("", summary="List stadiums", responses=ERROR_RESPONSES)
@handle_http_errors
async def get_stadiums(request: Request, repo: ResourceRepoDep) -> PageResult:
    """
    List stadiums that hosted at least one match.

    Example:
        GET /stadiums?country=Brazil&capacity=50000&sort_by=capacity&sort_order=desc
    """
    return await repo.list_resource(STADIUMS, dict(request.query_params))


@router.get(
    "/{stadium_id}/matches",
    summary="List matches played in a stadium",
    responses=ERROR_RESPONSES,
)
@handle_http_errors
async def get_stadium_matches(
    stadium_id: str, request: Request, repo: ResourceRepoDep
) -> PageResult:
    return await repo.list_resource(
        STADIUM_MATCHES, dict(request.query_params), scope_id=stadium_id
    )
