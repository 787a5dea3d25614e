from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from typing_extensions import Annotated

from worldcup_api.constants import FIRST_PAGE, MAX_PAGE_SIZE, MIN_PAGE_SIZE
from worldcup_api.settings import app_settings


class PageRequest(BaseModel):  # type: ignore[misc]
    """Validated page number and page size for one listing request."""

    model_config = ConfigDict(frozen=True)

    page_number: Annotated[int, Field(ge=FIRST_PAGE)] = FIRST_PAGE
    page_size: Annotated[
        int, Field(ge=MIN_PAGE_SIZE, le=MAX_PAGE_SIZE)
    ] = app_settings.DEFAULT_PAGE_SIZE

    @property
    def offset(self) -> int:
        """Number of rows to skip before the requested page."""
        return (self.page_number - 1) * self.page_size


class PageResult(BaseModel):  # type: ignore[misc]
    """
    Uniform envelope returned by every listing endpoint.

    Attributes:
        current_page: Page number that was requested.
        page_size: Page size that was requested.
        total_pages: ceil(total_records / page_size), 0 when there are no rows.
        total_records: Number of rows matching the filters.
        data: Rows of the requested page, at most page_size of them.
    """

    model_config = ConfigDict(frozen=True)

    current_page: Annotated[int, Field(ge=FIRST_PAGE)]
    page_size: Annotated[int, Field(ge=MIN_PAGE_SIZE, le=MAX_PAGE_SIZE)]
    total_pages: Annotated[int, Field(ge=0)]
    total_records: Annotated[int, Field(ge=0)]
    data: list[dict[str, Any]]
