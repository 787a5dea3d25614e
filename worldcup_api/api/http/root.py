"""Service description and liveness endpoints."""

from datetime import datetime
from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel

from worldcup_api.constants import PING_TIMESTAMP_FORMAT
from worldcup_api.repositories.resources import ALL_RESOURCES, describe_resource

router = APIRouter(tags=["about"])

API_NAME = "World Cup API"
API_VERSION = "1.0.0"


class AboutResponse(BaseModel):
    """Description of the service and every resource it exposes."""

    version: str
    api: str
    about: str
    resources: list[dict[str, Any]]


class PingResponse(BaseModel):
    greetings: str
    now: str


@router.get("/", summary="Describe the web service")
async def about() -> AboutResponse:
    """
    List every exposed resource with its filters and sort options.

    The listing is generated from the same resource descriptions that
    drive validation and query construction.
    """
    resources = []
    for index, resource in enumerate(ALL_RESOURCES, start=1):
        entry = {"id": index}
        entry.update(describe_resource(resource))
        resources.append(entry)

    return AboutResponse(
        version=API_VERSION,
        api=API_NAME,
        about="Welcome! This is a web service that provides resources on the FIFA World Cup",
        resources=resources,
    )


@router.get("/ping", summary="Liveness check")
async def ping() -> PingResponse:
    return PingResponse(
        greetings="Reporting! Hello there!",
        now=datetime.now().strftime(PING_TIMESTAMP_FORMAT),
    )
