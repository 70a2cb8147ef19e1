"""Link API schemas."""

from pydantic import Field

from linkvault.schemas.common import CamelModel


class LinkCreateRequest(CamelModel):
    """Request body for creating a link. Blank title or invalid URL -> 400."""

    title: str
    url: str
    description: str | None = None
    category_id: int | None = Field(default=None, gt=0)


class LinkUpdateRequest(CamelModel):
    """Partial update. Omitted fields are untouched; null clears description/categoryId."""

    title: str | None = None
    url: str | None = None
    description: str | None = None
    category_id: int | None = Field(default=None, gt=0)


class LinkResponse(CamelModel):
    """Stored link."""

    id: int
    title: str
    url: str
    description: str | None
    user_id: int
    category_id: int | None


class LinkItemResponse(LinkResponse):
    """Link with its category name (listings and GET /links/{id})."""

    category_name: str | None


class PaginationResponse(CamelModel):
    page: int
    limit: int
    total: int
    total_pages: int


class LinkListResponse(CamelModel):
    """GET /links: one page, or every match when search is given."""

    data: list[LinkItemResponse]
    pagination: PaginationResponse
