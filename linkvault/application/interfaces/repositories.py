"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
Every method takes the owner id and filters by it: a row owned by someone
else is indistinguishable from a missing row. All types reference
application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from linkvault.application.dtos.category import CategoryLinkItem, CategoryResult
    from linkvault.application.dtos.link import LinkCreate, LinkListItem, LinkResult
    from linkvault.application.dtos.user import UserResult


class IUserRepository(Protocol):
    """Protocol for user repository (DIP)."""

    async def get_by_id(self, user_id: int) -> UserResult | None:
        """Return user by ID."""

    async def get_with_password(
        self, *, email: str | None = None, username: str | None = None
    ) -> tuple[UserResult, str] | None:
        """Return (user, hashed_password) by email, else by username."""

    async def create_user(
        self, username: str, email: str, hashed_password: str
    ) -> UserResult:
        """Insert a user. Raises CONFLICT when username or email is taken."""

    async def commit(self) -> None:
        """Commit the unit of work."""


class ICategoryRepository(Protocol):
    """Protocol for category repository (DIP)."""

    async def get_owned(self, owner_id: int, category_id: int) -> CategoryResult | None:
        """Return category if it exists and belongs to owner."""

    async def get_by_name(self, owner_id: int, name: str) -> CategoryResult | None:
        """Return owner's category with exactly this name."""

    async def list_by_owner(self, owner_id: int) -> list[CategoryResult]:
        """Return owner's categories ordered by name."""

    async def create_category(self, owner_id: int, name: str) -> CategoryResult:
        """Insert a category. Raises CONFLICT on (owner, name) duplicate."""

    async def update_name(
        self, owner_id: int, category_id: int, name: str
    ) -> CategoryResult | None:
        """Rename owner's category; None when not found."""

    async def delete_owned(self, owner_id: int, category_id: int) -> CategoryResult | None:
        """Delete owner's category (links keep existing with category_id NULL)."""

    async def commit(self) -> None:
        """Commit the unit of work."""


class ILinkRepository(Protocol):
    """Protocol for link repository (DIP)."""

    async def get_owned(self, owner_id: int, link_id: int) -> LinkResult | None:
        """Return link row if it exists and belongs to owner."""

    async def get_item(self, owner_id: int, link_id: int) -> LinkListItem | None:
        """Return link joined with its category name."""

    async def count_matching(
        self, owner_id: int, category_id: int | None, search: str | None
    ) -> int:
        """Count owner's links matching the optional category and search term."""

    async def list_matching(
        self,
        owner_id: int,
        category_id: int | None,
        search: str | None,
        *,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[LinkListItem]:
        """Return matching links newest first (id DESC); all of them when limit is None."""

    async def list_by_category(self, owner_id: int, category_id: int) -> list[CategoryLinkItem]:
        """Return owner's links in a category, newest first."""

    async def create_link(self, owner_id: int, data: LinkCreate) -> LinkResult:
        """Insert a link for owner."""

    async def update_link(
        self, owner_id: int, link_id: int, changes: dict[str, Any]
    ) -> LinkResult | None:
        """Apply column changes to owner's link; None when not found."""

    async def delete_owned(self, owner_id: int, link_id: int) -> LinkResult | None:
        """Delete owner's link; None when not found."""

    async def commit(self) -> None:
        """Commit the unit of work."""
