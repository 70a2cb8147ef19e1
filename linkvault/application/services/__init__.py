"""Application services: entity mutations and cache invalidation."""

from linkvault.application.services.cache_invalidation import CacheInvalidator
from linkvault.application.services.category_service import CategoryService
from linkvault.application.services.link_service import LinkService
from linkvault.application.services.user_service import UserService

__all__ = [
    "CacheInvalidator",
    "CategoryService",
    "LinkService",
    "UserService",
]
