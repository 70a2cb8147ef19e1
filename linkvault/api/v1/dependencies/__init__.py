"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for repositories, the cache store, the current
user id and application services. Routes depend only on these.
"""

from linkvault.api.v1.dependencies.auth import (
    AuthSecurity,
    get_auth_security,
    get_current_user_id,
)
from linkvault.api.v1.dependencies.cache import get_cache, get_cache_observer
from linkvault.api.v1.dependencies.db import (
    get_category_repo,
    get_category_repo_for_write,
    get_link_repo,
    get_link_repo_for_write,
    get_user_repo_for_write,
)
from linkvault.api.v1.dependencies.services import (
    get_bookmark_query_service,
    get_cache_invalidator,
    get_category_service,
    get_link_service,
    get_user_service,
)

__all__ = [
    "AuthSecurity",
    "get_auth_security",
    "get_bookmark_query_service",
    "get_cache",
    "get_cache_invalidator",
    "get_cache_observer",
    "get_category_repo",
    "get_category_repo_for_write",
    "get_category_service",
    "get_current_user_id",
    "get_link_repo",
    "get_link_repo_for_write",
    "get_link_service",
    "get_user_repo_for_write",
    "get_user_service",
]
