"""DTOs for links: rows, mutations, the listing query and the paginated envelope."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Final


class _Unset(Enum):
    UNSET = "UNSET"

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Final = _Unset.UNSET
"""Marks an update field the client did not send (distinct from an explicit null)."""


@dataclass(frozen=True)
class LinkResult:
    """Link row as stored (no join)."""

    id: int
    title: str
    url: str
    description: str | None
    user_id: int
    category_id: int | None


@dataclass(frozen=True)
class LinkListItem:
    """Link row joined with its category name (listing and by-id reads)."""

    id: int
    title: str
    url: str
    description: str | None
    user_id: int
    category_id: int | None
    category_name: str | None


@dataclass(frozen=True)
class LinkCreate:
    """Input for creating a link."""

    title: str
    url: str
    description: str | None = None
    category_id: int | None = None


@dataclass(frozen=True)
class LinkUpdate:
    """Partial update. Fields left as UNSET are not touched."""

    title: str | _Unset = UNSET
    url: str | _Unset = UNSET
    description: str | None | _Unset = UNSET
    category_id: int | None | _Unset = UNSET

    @classmethod
    def from_fields(cls, values: dict[str, Any]) -> "LinkUpdate":
        """Build from a dict holding only the fields the client sent."""
        return cls(**{k: v for k, v in values.items() if k in cls.__dataclass_fields__})

    def changes(self) -> dict[str, Any]:
        """Return {column: value} for every field that was set."""
        return {
            name: getattr(self, name)
            for name in self.__dataclass_fields__
            if getattr(self, name) is not UNSET
        }


@dataclass(frozen=True)
class LinkListQuery:
    """Normalized link listing query.

    In search mode (non-blank search term) page and limit are None: the whole
    match set is returned in one response, and neither value takes part in
    the cache key.
    """

    category_id: int | None = None
    search: str | None = None
    page: int | None = None
    limit: int | None = None

    @property
    def is_search(self) -> bool:
        return self.search is not None

    @property
    def offset(self) -> int:
        if self.page is None or self.limit is None:
            return 0
        return (self.page - 1) * self.limit

    @classmethod
    def normalize(
        cls,
        page: int,
        limit: int,
        category_id: int | None = None,
        search: str | None = None,
    ) -> "LinkListQuery":
        """Derive the listing mode. The raw term is kept (it is matched as given)."""
        if search is not None and search.strip():
            return cls(category_id=category_id, search=search)
        return cls(category_id=category_id, page=page, limit=limit)


@dataclass(frozen=True)
class Pagination:
    """Pagination block of a link listing."""

    page: int
    limit: int
    total: int
    total_pages: int


@dataclass(frozen=True)
class LinkPage:
    """Link listing envelope: one page (browse mode) or every match (search mode)."""

    data: list[LinkListItem] = field(default_factory=list)
    pagination: Pagination = field(default_factory=lambda: Pagination(1, 0, 0, 0))
