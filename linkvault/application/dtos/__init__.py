"""Application DTOs (no dependency on ORM or HTTP schemas)."""

from linkvault.application.dtos.category import (
    CategoryLinkItem,
    CategoryResult,
    CategoryWithLinks,
)
from linkvault.application.dtos.link import (
    LinkCreate,
    LinkListItem,
    LinkListQuery,
    LinkPage,
    LinkResult,
    LinkUpdate,
    Pagination,
)
from linkvault.application.dtos.user import UserCreate, UserResult

__all__ = [
    "CategoryLinkItem",
    "CategoryResult",
    "CategoryWithLinks",
    "LinkCreate",
    "LinkListItem",
    "LinkListQuery",
    "LinkPage",
    "LinkResult",
    "LinkUpdate",
    "Pagination",
    "UserCreate",
    "UserResult",
]
