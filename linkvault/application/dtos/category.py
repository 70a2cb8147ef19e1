"""DTOs for categories and the cached category-with-links read model."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class CategoryResult:
    """Category row (id, name, owner)."""

    id: int
    name: str
    user_id: int


@dataclass(frozen=True)
class CategoryLinkItem:
    """Link summary embedded in a category detail."""

    id: int
    title: str
    url: str
    description: str | None


@dataclass(frozen=True)
class CategoryWithLinks:
    """Category detail: the category plus its links (newest first)."""

    id: int
    name: str
    user_id: int
    links: list[CategoryLinkItem] = field(default_factory=list)
