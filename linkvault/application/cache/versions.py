"""Scope version tokens.

Readers embed the current version of a scope in every key they read or
write; invalidation rotates the version before wiping the scope. A cache
set that started before an invalidation therefore lands under a retired
version and is never read again. Tokens are random, so an expired or
flushed token can never bring an old version back.
"""

from __future__ import annotations

import logging
import uuid

from linkvault.application.cache.keys import version_key
from linkvault.application.interfaces.services import ICacheService
from linkvault.core.constants import CACHE_INITIAL_VERSION, CACHE_KEY_SEP

logger = logging.getLogger(__name__)


class ScopeVersions:
    """Read and rotate the version token of a cache scope."""

    def __init__(self, cache: ICacheService | None, ttl: int = 86400) -> None:
        self.cache = cache
        self.ttl = ttl

    async def current(self, scope: str) -> str | None:
        """Return the scope's version, or None when the cache must be bypassed."""
        if self.cache is None or not self.cache.is_available():
            return None
        try:
            token = await self.cache.get(version_key(scope))
        except Exception:
            logger.exception("Cache version read failed for %s", scope)
            return None
        if token is None:
            return CACHE_INITIAL_VERSION
        if not isinstance(token, str) or not token or CACHE_KEY_SEP in token:
            logger.warning("Ignoring malformed cache version for %s: %r", scope, token)
            return None
        return token

    async def rotate(self, scope: str) -> bool:
        """Retire the scope's current version. Returns True when stored."""
        if self.cache is None or not self.cache.is_available():
            return False
        token = uuid.uuid4().hex
        try:
            return bool(await self.cache.set(version_key(scope), token, ttl=self.ttl))
        except Exception:
            logger.exception("Cache version rotation failed for %s", scope)
            return False
