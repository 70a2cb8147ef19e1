"""Category API schemas."""

from linkvault.schemas.common import CamelModel


class CategoryRequest(CamelModel):
    """Request body for creating or renaming a category (trimmed, 1..256 chars)."""

    name: str


class CategoryResponse(CamelModel):
    id: int
    name: str
    user_id: int


class CategoryLinkResponse(CamelModel):
    """Link summary inside a category detail."""

    id: int
    title: str
    url: str
    description: str | None


class CategoryDetailResponse(CategoryResponse):
    """GET /categories/{id}: the category and its links, newest first."""

    links: list[CategoryLinkResponse]


class CategoryDeletedResponse(CamelModel):
    """DELETE /categories/{id}: confirmation plus the removed category."""

    message: str
    note: str
    category: CategoryResponse
