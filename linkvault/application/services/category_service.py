"""Category mutations: name validation, per-owner uniqueness, invalidation."""

from __future__ import annotations

import logging
from typing import Any

from linkvault.application.dtos.category import CategoryResult
from linkvault.application.interfaces.repositories import ICategoryRepository
from linkvault.application.services.cache_invalidation import CacheInvalidator
from linkvault.core.constants import MAX_NAME_LENGTH
from linkvault.domain.exceptions import LinkVaultException

logger = logging.getLogger(__name__)


def validate_category_name(name: Any) -> str:
    """Return the trimmed name; VALIDATION when missing, blank or too long."""
    if not isinstance(name, str) or not name.strip():
        raise LinkVaultException.validation("Category name is required", field="name")
    name = name.strip()
    if len(name) > MAX_NAME_LENGTH:
        raise LinkVaultException.validation(
            f"Category name must be at most {MAX_NAME_LENGTH} characters", field="name"
        )
    return name


class CategoryService:
    """Create, rename and delete an owner's categories."""

    def __init__(
        self, category_repo: ICategoryRepository, invalidator: CacheInvalidator
    ) -> None:
        self.category_repo = category_repo
        self.invalidator = invalidator

    async def _ensure_name_free(
        self, owner_id: int, name: str, exclude_id: int | None = None
    ) -> None:
        existing = await self.category_repo.get_by_name(owner_id, name)
        if existing is not None and existing.id != exclude_id:
            raise LinkVaultException.conflict(
                "A category with this name already exists", field="name"
            )

    async def create_category(self, owner_id: int, name: Any) -> CategoryResult:
        """Insert a category. CONFLICT when the owner already has one with this name."""
        name = validate_category_name(name)
        await self._ensure_name_free(owner_id, name)

        category = await self.category_repo.create_category(owner_id, name)
        await self.category_repo.commit()
        logger.info("Category %s created for user %s", category.id, owner_id)

        await self.invalidator.category_created(owner_id)
        return category

    async def update_category(
        self, owner_id: int, category_id: int, name: Any
    ) -> CategoryResult:
        """Rename a category. NOT_FOUND when absent or not owned; CONFLICT on duplicate name."""
        name = validate_category_name(name)
        if await self.category_repo.get_owned(owner_id, category_id) is None:
            raise LinkVaultException.not_found("Category", category_id)
        await self._ensure_name_free(owner_id, name, exclude_id=category_id)

        category = await self.category_repo.update_name(owner_id, category_id, name)
        if category is None:
            raise LinkVaultException.not_found("Category", category_id)
        await self.category_repo.commit()
        logger.info("Category %s renamed for user %s", category_id, owner_id)

        await self.invalidator.category_changed(owner_id, category_id)
        return category

    async def delete_category(self, owner_id: int, category_id: int) -> CategoryResult:
        """Delete and return the category. Its links stay, uncategorized."""
        category = await self.category_repo.delete_owned(owner_id, category_id)
        if category is None:
            raise LinkVaultException.not_found("Category", category_id)
        await self.category_repo.commit()
        logger.info("Category %s deleted for user %s", category_id, owner_id)

        await self.invalidator.category_changed(owner_id, category_id)
        return category
