"""Link mutations: validate, check ownership, write, commit, invalidate."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import urlsplit

from linkvault.application.dtos.link import LinkCreate, LinkResult, LinkUpdate
from linkvault.application.interfaces.repositories import (
    ICategoryRepository,
    ILinkRepository,
)
from linkvault.application.services.cache_invalidation import CacheInvalidator
from linkvault.core.constants import MAX_TITLE_LENGTH
from linkvault.domain.exceptions import LinkVaultException

logger = logging.getLogger(__name__)

_HOST_SCHEMES = frozenset({"http", "https", "ftp", "ftps", "ws", "wss"})


def validate_title(title: Any) -> str:
    """Return the trimmed title; VALIDATION when missing, blank or too long."""
    if not isinstance(title, str) or not title.strip():
        raise LinkVaultException.validation("Title is required", field="title")
    title = title.strip()
    if len(title) > MAX_TITLE_LENGTH:
        raise LinkVaultException.validation(
            f"Title must be at most {MAX_TITLE_LENGTH} characters", field="title"
        )
    return title


def validate_url(url: Any) -> str:
    """Return the trimmed URL; VALIDATION unless it is absolute (scheme, and host for web schemes)."""
    if not isinstance(url, str) or not url.strip():
        raise LinkVaultException.validation("URL is required", field="url")
    url = url.strip()
    try:
        parts = urlsplit(url)
        # Raises ValueError for an out-of-range port.
        parts.port
    except ValueError as e:
        raise LinkVaultException.validation("Invalid URL", field="url") from e
    if not parts.scheme or not (parts.netloc or parts.path):
        raise LinkVaultException.validation("Invalid URL", field="url")
    if parts.scheme.lower() in _HOST_SCHEMES and not parts.hostname:
        raise LinkVaultException.validation("Invalid URL", field="url")
    return url


class LinkService:
    """Create, update and delete an owner's links."""

    def __init__(
        self,
        link_repo: ILinkRepository,
        category_repo: ICategoryRepository,
        invalidator: CacheInvalidator,
    ) -> None:
        self.link_repo = link_repo
        self.category_repo = category_repo
        self.invalidator = invalidator

    async def _require_category(self, owner_id: int, category_id: int | None) -> None:
        """NOT_FOUND unless category_id is None or one of the owner's categories."""
        if category_id is None:
            return
        if await self.category_repo.get_owned(owner_id, category_id) is None:
            raise LinkVaultException.not_found("Category", category_id)

    async def create_link(self, owner_id: int, data: LinkCreate) -> LinkResult:
        """Validate and insert a link, then drop the owner's cached link reads."""
        data = LinkCreate(
            title=validate_title(data.title),
            url=validate_url(data.url),
            description=data.description,
            category_id=data.category_id,
        )
        await self._require_category(owner_id, data.category_id)

        link = await self.link_repo.create_link(owner_id, data)
        await self.link_repo.commit()
        logger.info("Link %s created for user %s", link.id, owner_id)

        await self.invalidator.links_changed(owner_id, (link.category_id,))
        return link

    async def update_link(
        self, owner_id: int, link_id: int, data: LinkUpdate
    ) -> LinkResult:
        """Apply the fields that were sent. NOT_FOUND when the link is absent or not owned."""
        existing = await self.link_repo.get_owned(owner_id, link_id)
        if existing is None:
            raise LinkVaultException.not_found("Link", link_id)

        changes = data.changes()
        if "title" in changes:
            changes["title"] = validate_title(changes["title"])
        if "url" in changes:
            changes["url"] = validate_url(changes["url"])
        if "category_id" in changes:
            await self._require_category(owner_id, changes["category_id"])
        if not changes:
            return existing

        link = await self.link_repo.update_link(owner_id, link_id, changes)
        if link is None:
            raise LinkVaultException.not_found("Link", link_id)
        await self.link_repo.commit()
        logger.info("Link %s updated for user %s", link_id, owner_id)

        await self.invalidator.links_changed(
            owner_id, (existing.category_id, link.category_id)
        )
        return link

    async def delete_link(self, owner_id: int, link_id: int) -> LinkResult:
        """Delete and return the link. NOT_FOUND when absent or not owned."""
        link = await self.link_repo.delete_owned(owner_id, link_id)
        if link is None:
            raise LinkVaultException.not_found("Link", link_id)
        await self.link_repo.commit()
        logger.info("Link %s deleted for user %s", link_id, owner_id)

        await self.invalidator.links_changed(owner_id, (link.category_id,))
        return link
