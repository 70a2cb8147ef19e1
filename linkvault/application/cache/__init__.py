"""Cache consistency core: key derivation, scope versions and cache events.

Key format lives in keys.py; the read path is
application.use_cases.bookmark_queries and the write path is
application.services.cache_invalidation.
"""

from linkvault.application.cache.observer import (
    CacheEvent,
    CacheObserver,
    logging_cache_observer,
)
from linkvault.application.cache.versions import ScopeVersions

__all__ = [
    "CacheEvent",
    "CacheObserver",
    "ScopeVersions",
    "logging_cache_observer",
]
