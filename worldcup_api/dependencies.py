"""
Dependency injection configuration for FastAPI.

Example:
    ```python
    from fastapi import APIRouter
    from worldcup_api.dependencies import ResourceRepoDep

    router = APIRouter()

    @router.get("/teams/{team_id}")
    async def get_team(team_id: str, repo: ResourceRepoDep) -> dict:
        return await repo.get_resource(TEAM_LOOKUP, team_id)
    ```
"""

from typing import Annotated

from fastapi import Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from worldcup_api.repositories.resource_repository import ResourceRepository
from worldcup_api.storage.db import get_session

# ============================================================================
# Database Session Dependencies
# ============================================================================

SessionDep = Annotated[AsyncSession, Depends(get_session)]


# ============================================================================
# Repository Dependencies
# ============================================================================


def get_resource_repository(session: SessionDep) -> ResourceRepository:
    """
    Get the resource repository bound to the request session.

    Can be overridden in tests using app.dependency_overrides.

    Args:
        session: Database session from dependency injection.

    Returns:
        ResourceRepository instance.
    """
    return ResourceRepository(session)


ResourceRepoDep = Annotated[
    ResourceRepository, Depends(get_resource_repository)
]
