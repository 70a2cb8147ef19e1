"""In-memory repositories with the same contracts as the SQLAlchemy ones.

One FakeStore plays the record store: foreign-key behaviour (user cascade,
category SET NULL) and the per-owner category name constraint are mirrored,
and every read is counted so tests can assert that a cache hit never
reached the store.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

from linkvault.application.dtos.category import CategoryLinkItem, CategoryResult
from linkvault.application.dtos.link import LinkCreate, LinkListItem, LinkResult
from linkvault.application.dtos.user import UserResult
from linkvault.domain.exceptions import LinkVaultException


@dataclass
class _UserRow:
    id: int
    username: str
    email: str
    hashed_password: str


@dataclass
class FakeStore:
    users: dict[int, _UserRow] = field(default_factory=dict)
    categories: dict[int, CategoryResult] = field(default_factory=dict)
    links: dict[int, LinkResult] = field(default_factory=dict)
    reads: int = 0
    commits: int = 0
    _next_id: int = 0

    def next_id(self) -> int:
        self._next_id += 1
        return self._next_id

    def add_user(self, username: str = "alice", email: str | None = None) -> int:
        user_id = self.next_id()
        self.users[user_id] = _UserRow(
            user_id, username, email or f"{username}@example.com", "hash"
        )
        return user_id

    def delete_user(self, user_id: int) -> None:
        """ON DELETE CASCADE from users to categories and links."""
        self.users.pop(user_id, None)
        self.categories = {
            k: c for k, c in self.categories.items() if c.user_id != user_id
        }
        self.links = {k: link for k, link in self.links.items() if link.user_id != user_id}

    def category_name(self, category_id: int | None) -> str | None:
        if category_id is None:
            return None
        category = self.categories.get(category_id)
        return category.name if category else None


def _matches(link: LinkResult, search: str | None) -> bool:
    if not search:
        return True
    term = search.lower()
    return term in link.title.lower() or term in (link.description or "").lower()


class FakeUserRepository:
    def __init__(self, store: FakeStore) -> None:
        self.store = store

    async def get_by_id(self, user_id: int) -> UserResult | None:
        self.store.reads += 1
        row = self.store.users.get(user_id)
        return UserResult(row.id, row.username, row.email) if row else None

    async def get_with_password(
        self, *, email: str | None = None, username: str | None = None
    ) -> tuple[UserResult, str] | None:
        self.store.reads += 1
        for row in self.store.users.values():
            if (email and row.email == email) or (not email and username and row.username == username):
                return UserResult(row.id, row.username, row.email), row.hashed_password
        return None

    async def create_user(
        self, username: str, email: str, hashed_password: str
    ) -> UserResult:
        for row in self.store.users.values():
            if row.username == username or row.email == email:
                raise LinkVaultException.conflict("Username or email already registered")
        user_id = self.store.next_id()
        self.store.users[user_id] = _UserRow(user_id, username, email, hashed_password)
        return UserResult(user_id, username, email)

    async def commit(self) -> None:
        self.store.commits += 1


class FakeCategoryRepository:
    def __init__(self, store: FakeStore) -> None:
        self.store = store

    async def get_owned(self, owner_id: int, category_id: int) -> CategoryResult | None:
        self.store.reads += 1
        category = self.store.categories.get(category_id)
        return category if category and category.user_id == owner_id else None

    async def get_by_name(self, owner_id: int, name: str) -> CategoryResult | None:
        self.store.reads += 1
        for category in self.store.categories.values():
            if category.user_id == owner_id and category.name == name:
                return category
        return None

    async def list_by_owner(self, owner_id: int) -> list[CategoryResult]:
        self.store.reads += 1
        owned = [c for c in self.store.categories.values() if c.user_id == owner_id]
        return sorted(owned, key=lambda c: (c.name, c.id))

    async def create_category(self, owner_id: int, name: str) -> CategoryResult:
        for category in self.store.categories.values():
            if category.user_id == owner_id and category.name == name:
                raise LinkVaultException.conflict("A category with this name already exists")
        category = CategoryResult(id=self.store.next_id(), name=name, user_id=owner_id)
        self.store.categories[category.id] = category
        return category

    async def update_name(
        self, owner_id: int, category_id: int, name: str
    ) -> CategoryResult | None:
        category = self.store.categories.get(category_id)
        if category is None or category.user_id != owner_id:
            return None
        updated = replace(category, name=name)
        self.store.categories[category_id] = updated
        return updated

    async def delete_owned(self, owner_id: int, category_id: int) -> CategoryResult | None:
        category = self.store.categories.get(category_id)
        if category is None or category.user_id != owner_id:
            return None
        del self.store.categories[category_id]
        # ON DELETE SET NULL
        for link_id, link in list(self.store.links.items()):
            if link.category_id == category_id:
                self.store.links[link_id] = replace(link, category_id=None)
        return category

    async def commit(self) -> None:
        self.store.commits += 1


class FakeLinkRepository:
    def __init__(self, store: FakeStore) -> None:
        self.store = store

    def _item(self, link: LinkResult) -> LinkListItem:
        return LinkListItem(
            id=link.id,
            title=link.title,
            url=link.url,
            description=link.description,
            user_id=link.user_id,
            category_id=link.category_id,
            category_name=self.store.category_name(link.category_id),
        )

    def _matching(
        self, owner_id: int, category_id: int | None, search: str | None
    ) -> list[LinkResult]:
        rows = [
            link
            for link in self.store.links.values()
            if link.user_id == owner_id
            and (category_id is None or link.category_id == category_id)
            and _matches(link, search)
        ]
        return sorted(rows, key=lambda link: link.id, reverse=True)

    async def get_owned(self, owner_id: int, link_id: int) -> LinkResult | None:
        self.store.reads += 1
        link = self.store.links.get(link_id)
        return link if link and link.user_id == owner_id else None

    async def get_item(self, owner_id: int, link_id: int) -> LinkListItem | None:
        self.store.reads += 1
        link = self.store.links.get(link_id)
        return self._item(link) if link and link.user_id == owner_id else None

    async def count_matching(
        self, owner_id: int, category_id: int | None, search: str | None
    ) -> int:
        self.store.reads += 1
        return len(self._matching(owner_id, category_id, search))

    async def list_matching(
        self,
        owner_id: int,
        category_id: int | None,
        search: str | None,
        *,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[LinkListItem]:
        self.store.reads += 1
        rows = self._matching(owner_id, category_id, search)
        if limit is not None:
            rows = rows[offset : offset + limit]
        return [self._item(link) for link in rows]

    async def list_by_category(
        self, owner_id: int, category_id: int
    ) -> list[CategoryLinkItem]:
        self.store.reads += 1
        return [
            CategoryLinkItem(link.id, link.title, link.url, link.description)
            for link in self._matching(owner_id, category_id, None)
        ]

    async def create_link(self, owner_id: int, data: LinkCreate) -> LinkResult:
        link = LinkResult(
            id=self.store.next_id(),
            title=data.title,
            url=data.url,
            description=data.description,
            user_id=owner_id,
            category_id=data.category_id,
        )
        self.store.links[link.id] = link
        return link

    async def update_link(
        self, owner_id: int, link_id: int, changes: dict[str, Any]
    ) -> LinkResult | None:
        link = self.store.links.get(link_id)
        if link is None or link.user_id != owner_id:
            return None
        updated = replace(link, **changes)
        self.store.links[link_id] = updated
        return updated

    async def delete_owned(self, owner_id: int, link_id: int) -> LinkResult | None:
        link = self.store.links.get(link_id)
        if link is None or link.user_id != owner_id:
            return None
        del self.store.links[link_id]
        return link

    async def commit(self) -> None:
        self.store.commits += 1


class FakeAuthSecurity:
    """Reversible 'hash' so tests stay fast; tokens encode the subject only."""

    def hash_password(self, password: str) -> str:
        return f"hashed:{password}"

    def verify_password(self, password: str, hashed_password: str) -> bool:
        return hashed_password == f"hashed:{password}"

    def create_access_token(self, data: dict[str, Any]) -> str:
        return f"token-for-{data['sub']}"
