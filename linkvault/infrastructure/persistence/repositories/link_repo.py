"""Link repository (owner-scoped): filtered counts and listings, joined category names."""

from __future__ import annotations

from typing import Any

from sqlalchemy import Select, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from linkvault.application.dtos.category import CategoryLinkItem
from linkvault.application.dtos.link import LinkCreate, LinkListItem, LinkResult
from linkvault.infrastructure.persistence.models.category import Category
from linkvault.infrastructure.persistence.models.link import Link
from linkvault.infrastructure.persistence.repositories.base import BaseRepository

_LIKE_ESCAPE = "\\"
_UPDATABLE = frozenset({"title", "url", "description", "category_id"})


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so the term is matched literally."""
    return (
        term.replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2)
        .replace("%", _LIKE_ESCAPE + "%")
        .replace("_", _LIKE_ESCAPE + "_")
    )


def _link_to_result(link: Link) -> LinkResult:
    return LinkResult(
        id=link.id,
        title=link.title,
        url=link.url,
        description=link.description,
        user_id=link.user_id,
        category_id=link.category_id,
    )


def _row_to_item(link: Link, category_name: str | None) -> LinkListItem:
    return LinkListItem(
        id=link.id,
        title=link.title,
        url=link.url,
        description=link.description,
        user_id=link.user_id,
        category_id=link.category_id,
        category_name=category_name,
    )


class LinkRepository(BaseRepository[Link]):
    """Links of one owner; rows of other owners are invisible."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Link)

    @staticmethod
    def _filtered(
        stmt: Select[Any], owner_id: int, category_id: int | None, search: str | None
    ) -> Select[Any]:
        stmt = stmt.where(Link.user_id == owner_id)
        if category_id is not None:
            stmt = stmt.where(Link.category_id == category_id)
        if search:
            pattern = f"%{escape_like(search)}%"
            stmt = stmt.where(
                or_(
                    Link.title.ilike(pattern, escape=_LIKE_ESCAPE),
                    Link.description.ilike(pattern, escape=_LIKE_ESCAPE),
                )
            )
        return stmt

    @staticmethod
    def _with_category_name() -> Select[Any]:
        # Category ownership matches link ownership, so the join needs no owner filter.
        return select(Link, Category.name).outerjoin(
            Category, Link.category_id == Category.id
        )

    async def get_owned(self, owner_id: int, link_id: int) -> LinkResult | None:
        link = await self._get_owned_row(owner_id, link_id)
        return _link_to_result(link) if link else None

    async def get_item(self, owner_id: int, link_id: int) -> LinkListItem | None:
        stmt = self._with_category_name().where(
            Link.id == link_id, Link.user_id == owner_id
        )
        async with self.store_errors("link lookup"):
            row = (await self.db.execute(stmt)).one_or_none()
        return _row_to_item(*row) if row else None

    async def count_matching(
        self, owner_id: int, category_id: int | None, search: str | None
    ) -> int:
        stmt = self._filtered(
            select(func.count()).select_from(Link), owner_id, category_id, search
        )
        async with self.store_errors("links count"):
            total = (await self.db.execute(stmt)).scalar_one()
        return int(total)

    async def list_matching(
        self,
        owner_id: int,
        category_id: int | None,
        search: str | None,
        *,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[LinkListItem]:
        stmt = self._filtered(
            self._with_category_name(), owner_id, category_id, search
        ).order_by(Link.id.desc())
        if limit is not None:
            stmt = stmt.limit(limit).offset(offset)
        async with self.store_errors("links listing"):
            rows = (await self.db.execute(stmt)).all()
        return [_row_to_item(link, name) for link, name in rows]

    async def list_by_category(
        self, owner_id: int, category_id: int
    ) -> list[CategoryLinkItem]:
        stmt = (
            select(Link)
            .where(Link.user_id == owner_id, Link.category_id == category_id)
            .order_by(Link.id.desc())
        )
        async with self.store_errors("category links listing"):
            links = (await self.db.execute(stmt)).scalars().all()
        return [
            CategoryLinkItem(
                id=link.id, title=link.title, url=link.url, description=link.description
            )
            for link in links
        ]

    async def create_link(self, owner_id: int, data: LinkCreate) -> LinkResult:
        link = await self._add(
            Link(
                user_id=owner_id,
                title=data.title,
                url=data.url,
                description=data.description,
                category_id=data.category_id,
            )
        )
        return _link_to_result(link)

    async def update_link(
        self, owner_id: int, link_id: int, changes: dict[str, Any]
    ) -> LinkResult | None:
        unknown = set(changes) - _UPDATABLE
        if unknown:
            raise ValueError(f"Cannot update link columns: {sorted(unknown)}")
        link = await self._get_owned_row(owner_id, link_id)
        if link is None:
            return None
        for column, value in changes.items():
            setattr(link, column, value)
        return _link_to_result(await self._flush(link))

    async def delete_owned(self, owner_id: int, link_id: int) -> LinkResult | None:
        link = await self._get_owned_row(owner_id, link_id)
        if link is None:
            return None
        result = _link_to_result(link)
        await self._remove(link)
        return result
