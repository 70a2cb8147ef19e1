"""Domain enums."""

from enum import Enum


class EntityKind(str, Enum):
    """Entity kinds that own a cache key namespace."""

    LINKS = "links"
    CATEGORIES = "categories"


class CacheAction(str, Enum):
    """Cache events reported to a CacheObserver."""

    HIT = "hit"
    MISS = "miss"
    SET = "set"
    INVALIDATE = "invalidate"
    ERROR = "error"
