"""Cache stores: Redis-backed CacheService and in-process MemoryCache.

Both satisfy application.interfaces.services.ICacheService; key format lives
in application.cache.keys.
"""

from linkvault.infrastructure.cache.memory_cache import MemoryCache
from linkvault.infrastructure.cache.redis_cache import CacheService

__all__ = ["CacheService", "MemoryCache"]
