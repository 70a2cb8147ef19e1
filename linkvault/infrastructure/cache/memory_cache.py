"""In-process cache store with per-entry TTL.

Same contract as CacheService (JSON payloads, glob-pattern delete) for
single-process deployments without Redis and for tests. Values are stored
as JSON text so callers always get a fresh copy, as they would from Redis.
"""

from __future__ import annotations

import fnmatch
import json
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

# Expired entries are swept from the whole store once per this many sets.
SWEEP_EVERY_SETS = 100


@dataclass
class _Entry:
    payload: str
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


class MemoryCache:
    """Dict-backed cache store.

    Expired entries are dropped when read and by a periodic sweep on set, so
    keys that are never read again do not accumulate.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._entries: dict[str, _Entry] = {}
        self._clock = clock
        self._available = True
        self._sets_since_sweep = 0

    def is_available(self) -> bool:
        return self._available

    def set_available(self, available: bool) -> None:
        """Simulate an outage (tests) or bring the store back."""
        self._available = available

    async def ping(self) -> bool:
        return self._available

    def _live(self, key: str) -> _Entry | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.is_expired(self._clock()):
            del self._entries[key]
            return None
        return entry

    async def get(self, key: str) -> Any | None:
        if not self._available:
            return None
        entry = self._live(key)
        if entry is None:
            return None
        try:
            return json.loads(entry.payload)
        except json.JSONDecodeError:
            logger.warning("Cache entry %s is not valid JSON; treating as miss", key)
            return None

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        if not self._available:
            return False
        self._sets_since_sweep += 1
        if self._sets_since_sweep >= SWEEP_EVERY_SETS:
            self.purge_expired()
        self._entries[key] = _Entry(json.dumps(value), self._clock() + ttl)
        return True

    def purge_expired(self) -> int:
        """Drop every expired entry. Returns the number removed."""
        self._sets_since_sweep = 0
        now = self._clock()
        expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.debug("Swept %s expired cache entries", len(expired))
        return len(expired)

    async def set_raw(self, key: str, payload: str, ttl: int = 300) -> None:
        """Store payload text as is (tests inject corrupted entries with it)."""
        self._entries[key] = _Entry(payload, self._clock() + ttl)

    async def delete(self, key: str) -> bool:
        if not self._available:
            return False
        self._entries.pop(key, None)
        return True

    async def delete_pattern(self, pattern: str) -> int:
        """Delete keys matching a glob pattern (Redis MATCH semantics for * ? [])."""
        if not self._available:
            return 0
        doomed = [key for key in self._entries if fnmatch.fnmatchcase(key, pattern)]
        for key in doomed:
            del self._entries[key]
        return len(doomed)

    async def clear_all(self) -> bool:
        if not self._available:
            return False
        self._entries.clear()
        return True

    def keys(self) -> list[str]:
        """Live keys, sorted."""
        now = self._clock()
        return sorted(k for k, e in self._entries.items() if not e.is_expired(now))

    async def connect(self) -> None:
        logger.info("Using in-process cache store")

    async def disconnect(self) -> None:
        self._entries.clear()
