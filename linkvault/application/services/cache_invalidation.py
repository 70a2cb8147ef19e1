"""Cache invalidation after committed mutations.

Each scope is invalidated by rotating its version and then wiping every
entry under its prefix. Both steps are best-effort: a failure is logged and
reported to the observer, never raised to the caller. Invalidation runs
shielded from cancellation: a request that times out after its commit still
retires every affected scope.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable

from linkvault.application.cache import keys
from linkvault.application.cache.observer import CacheEvent, CacheObserver, notify
from linkvault.application.cache.versions import ScopeVersions
from linkvault.application.interfaces.services import ICacheService
from linkvault.domain.enums import CacheAction

logger = logging.getLogger(__name__)

# Invalidations outliving a cancelled request; referenced until they finish.
_in_flight: set[asyncio.Task[None]] = set()


class CacheInvalidator:
    """Drop every cached read a mutation may have made stale."""

    def __init__(
        self,
        cache: ICacheService | None = None,
        *,
        version_ttl: int = 86400,
        observer: CacheObserver | None = None,
    ) -> None:
        self._cache = cache
        self._versions = ScopeVersions(cache, ttl=version_ttl)
        self._observer = observer

    async def links_changed(
        self, owner_id: int, category_ids: Iterable[int | None] = ()
    ) -> None:
        """A link was created, updated or deleted.

        category_ids are the link's category before and after the change;
        their detail entries embed the link and are dropped too.
        """
        scopes = [keys.links_scope(owner_id)]
        for category_id in dict.fromkeys(category_ids):
            if category_id is not None:
                scopes.append(keys.category_detail_scope(owner_id, category_id))
        await self._invalidate(owner_id, scopes)

    async def category_created(self, owner_id: int) -> None:
        await self._invalidate(owner_id, [keys.category_list_scope(owner_id)])

    async def category_changed(self, owner_id: int, category_id: int) -> None:
        """A category was renamed or deleted.

        Link reads carry the category name and the category id, so the
        owner's link scope goes as well.
        """
        await self._invalidate(
            owner_id,
            [
                keys.category_list_scope(owner_id),
                keys.category_detail_scope(owner_id, category_id),
                keys.links_scope(owner_id),
            ],
        )

    async def _invalidate(self, owner_id: int, scopes: list[str]) -> None:
        if self._cache is None:
            return
        if not self._cache.is_available():
            logger.warning(
                "Cache unavailable; skipped invalidation of %s", ", ".join(scopes)
            )
            for scope in scopes:
                notify(
                    self._observer,
                    CacheEvent(CacheAction.ERROR, scope, owner_id, {"op": "invalidate"}),
                )
            return
        task = asyncio.create_task(self._invalidate_scopes(owner_id, scopes))
        _in_flight.add(task)
        task.add_done_callback(_in_flight.discard)
        try:
            await asyncio.shield(task)
        except asyncio.CancelledError:
            logger.warning(
                "Request cancelled during invalidation of %s; finishing in background",
                ", ".join(scopes),
            )
            raise

    async def _invalidate_scopes(self, owner_id: int, scopes: list[str]) -> None:
        for scope in scopes:
            await self._invalidate_scope(owner_id, scope)

    async def _invalidate_scope(self, owner_id: int, scope: str) -> None:
        assert self._cache is not None
        rotated = await self._versions.rotate(scope)
        pattern = keys.scope_pattern(scope)
        try:
            deleted = await self._cache.delete_pattern(pattern)
        except Exception:
            logger.exception("Cache invalidation failed for %s", pattern)
            notify(
                self._observer,
                CacheEvent(CacheAction.ERROR, scope, owner_id, {"op": "delete_pattern"}),
            )
            return
        if not rotated:
            notify(
                self._observer,
                CacheEvent(CacheAction.ERROR, scope, owner_id, {"op": "rotate"}),
            )
        logger.info("Invalidated %s (%s entries)", pattern, deleted)
        notify(
            self._observer,
            CacheEvent(
                CacheAction.INVALIDATE,
                scope,
                owner_id,
                {"deleted": deleted, "rotated": rotated},
            ),
        )
