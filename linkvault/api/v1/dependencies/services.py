"""Application service dependencies (composition root).

Routes depend on these; services receive repositories, the cache store and
the configured TTLs here and never import infrastructure themselves.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from linkvault.api.v1.dependencies.auth import AuthSecurity, get_auth_security
from linkvault.api.v1.dependencies.cache import get_cache, get_cache_observer
from linkvault.api.v1.dependencies.db import (
    get_category_repo,
    get_category_repo_for_write,
    get_link_repo,
    get_link_repo_for_write,
    get_user_repo_for_write,
)
from linkvault.application.cache import CacheObserver
from linkvault.application.interfaces.repositories import (
    ICategoryRepository,
    ILinkRepository,
    IUserRepository,
)
from linkvault.application.interfaces.services import ICacheService
from linkvault.application.services import (
    CacheInvalidator,
    CategoryService,
    LinkService,
    UserService,
)
from linkvault.application.use_cases import BookmarkQueryService
from linkvault.core.config import get_settings


def get_cache_invalidator(
    cache: Annotated[ICacheService | None, Depends(get_cache)],
    observer: Annotated[CacheObserver | None, Depends(get_cache_observer)],
) -> CacheInvalidator:
    return CacheInvalidator(
        cache, version_ttl=get_settings().cache_ttl_version, observer=observer
    )


def get_bookmark_query_service(
    link_repo: Annotated[ILinkRepository, Depends(get_link_repo)],
    category_repo: Annotated[ICategoryRepository, Depends(get_category_repo)],
    cache: Annotated[ICacheService | None, Depends(get_cache)],
    observer: Annotated[CacheObserver | None, Depends(get_cache_observer)],
) -> BookmarkQueryService:
    """Cache-first reads over the read session."""
    settings = get_settings()
    return BookmarkQueryService(
        link_repo,
        category_repo,
        cache,
        links_ttl=settings.cache_ttl_links,
        categories_ttl=settings.cache_ttl_categories,
        version_ttl=settings.cache_ttl_version,
        observer=observer,
    )


def get_link_service(
    link_repo: Annotated[ILinkRepository, Depends(get_link_repo_for_write)],
    category_repo: Annotated[ICategoryRepository, Depends(get_category_repo_for_write)],
    invalidator: Annotated[CacheInvalidator, Depends(get_cache_invalidator)],
) -> LinkService:
    return LinkService(link_repo, category_repo, invalidator)


def get_category_service(
    category_repo: Annotated[ICategoryRepository, Depends(get_category_repo_for_write)],
    invalidator: Annotated[CacheInvalidator, Depends(get_cache_invalidator)],
) -> CategoryService:
    return CategoryService(category_repo, invalidator)


def get_user_service(
    user_repo: Annotated[IUserRepository, Depends(get_user_repo_for_write)],
    auth_security: Annotated[AuthSecurity, Depends(get_auth_security)],
) -> UserService:
    return UserService(user_repo=user_repo, auth_security=auth_security)
