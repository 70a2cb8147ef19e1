"""Category repository (owner-scoped). Interface methods return application DTOs."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from linkvault.application.dtos.category import CategoryResult
from linkvault.infrastructure.persistence.models.category import Category
from linkvault.infrastructure.persistence.repositories.base import BaseRepository


def _category_to_result(c: Category) -> CategoryResult:
    return CategoryResult(id=c.id, name=c.name, user_id=c.user_id)


class CategoryRepository(BaseRepository[Category]):
    """Categories of one owner; rows of other owners are invisible."""

    conflict_message = "A category with this name already exists"

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Category)

    async def get_owned(self, owner_id: int, category_id: int) -> CategoryResult | None:
        category = await self._get_owned_row(owner_id, category_id)
        return _category_to_result(category) if category else None

    async def get_by_name(self, owner_id: int, name: str) -> CategoryResult | None:
        async with self.store_errors("categories lookup"):
            result = await self.db.execute(
                select(Category).where(Category.user_id == owner_id, Category.name == name)
            )
            category = result.scalar_one_or_none()
        return _category_to_result(category) if category else None

    async def list_by_owner(self, owner_id: int) -> list[CategoryResult]:
        async with self.store_errors("categories listing"):
            result = await self.db.execute(
                select(Category)
                .where(Category.user_id == owner_id)
                .order_by(Category.name, Category.id)
            )
            rows = result.scalars().all()
        return [_category_to_result(c) for c in rows]

    async def create_category(self, owner_id: int, name: str) -> CategoryResult:
        category = await self._add(Category(user_id=owner_id, name=name))
        return _category_to_result(category)

    async def update_name(
        self, owner_id: int, category_id: int, name: str
    ) -> CategoryResult | None:
        category = await self._get_owned_row(owner_id, category_id)
        if category is None:
            return None
        category.name = name
        return _category_to_result(await self._flush(category))

    async def delete_owned(self, owner_id: int, category_id: int) -> CategoryResult | None:
        """Delete the row; the FK (ON DELETE SET NULL) uncategorizes its links."""
        category = await self._get_owned_row(owner_id, category_id)
        if category is None:
            return None
        result = _category_to_result(category)
        await self._remove(category)
        return result
