"""Cache-first read operations for links and categories.

Every read derives its key from (owner, query shape, scope version), tries
the cache, and on a miss reads the record store and stores the result with
a TTL. A hit never touches the record store; a miss performs exactly one
cache set. Cache failures and malformed payloads fall back to the record
store. Not-found results are never cached.
"""

from __future__ import annotations

import functools
import logging
import math
from collections.abc import Awaitable, Callable
from dataclasses import asdict
from types import UnionType
from typing import Any, TypeVar, get_args, get_origin, get_type_hints

from linkvault.application.cache import keys
from linkvault.application.cache.observer import CacheEvent, CacheObserver, notify
from linkvault.application.cache.versions import ScopeVersions
from linkvault.application.dtos.category import (
    CategoryLinkItem,
    CategoryResult,
    CategoryWithLinks,
)
from linkvault.application.dtos.link import (
    LinkListItem,
    LinkListQuery,
    LinkPage,
    Pagination,
)
from linkvault.application.interfaces.repositories import (
    ICategoryRepository,
    ILinkRepository,
)
from linkvault.application.interfaces.services import ICacheService
from linkvault.core.constants import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from linkvault.domain.enums import CacheAction
from linkvault.domain.exceptions import LinkVaultException

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Raised by the decoders below when a cached payload has the wrong shape.
_MALFORMED = (KeyError, TypeError, ValueError, AttributeError)


@functools.cache
def _scalar_fields(cls: type) -> dict[str, tuple[type, ...]]:
    """Allowed types per scalar field of a DTO; list fields are decoded separately."""
    allowed: dict[str, tuple[type, ...]] = {}
    for name, hint in get_type_hints(cls).items():
        if get_origin(hint) is list:
            continue
        allowed[name] = get_args(hint) if isinstance(hint, UnionType) else (hint,)
    return allowed


def _has_type(value: Any, allowed: tuple[type, ...]) -> bool:
    if isinstance(value, bool):
        return bool in allowed
    return any(
        value is None if t is type(None) else isinstance(value, t) for t in allowed
    )


def _build(cls: type[T], row: Any) -> T:
    """Instantiate a DTO from a cached dict. TypeError when a value has the wrong type."""
    if not isinstance(row, dict):
        raise TypeError(f"{cls.__name__} entry is not an object")
    for name, allowed in _scalar_fields(cls).items():
        if name in row and not _has_type(row[name], allowed):
            raise TypeError(f"{cls.__name__}.{name} has unexpected value {row[name]!r}")
    return cls(**row)


def _decode_categories(payload: Any) -> list[CategoryResult]:
    return [_build(CategoryResult, row) for row in payload]


def _decode_category_detail(payload: Any) -> CategoryWithLinks:
    data = dict(payload)
    data["links"] = [_build(CategoryLinkItem, row) for row in data.pop("links")]
    return _build(CategoryWithLinks, data)


def _decode_link_item(payload: Any) -> LinkListItem:
    return _build(LinkListItem, payload)


def _decode_link_page(payload: Any) -> LinkPage:
    return LinkPage(
        data=[_build(LinkListItem, row) for row in payload["data"]],
        pagination=_build(Pagination, payload["pagination"]),
    )


def _encode_list(items: list[Any]) -> list[dict[str, Any]]:
    return [asdict(item) for item in items]


class BookmarkQueryService:
    """Cache-first reads: category listing, category detail, link listing, single link.

    Dependencies are injected; cache=None disables caching entirely.
    """

    def __init__(
        self,
        link_repo: ILinkRepository,
        category_repo: ICategoryRepository,
        cache: ICacheService | None = None,
        *,
        links_ttl: int = 300,
        categories_ttl: int = 600,
        version_ttl: int = 86400,
        observer: CacheObserver | None = None,
    ) -> None:
        self._link_repo = link_repo
        self._category_repo = category_repo
        self._cache = cache
        self._links_ttl = links_ttl
        self._categories_ttl = categories_ttl
        self._observer = observer
        self._versions = ScopeVersions(cache, ttl=version_ttl)

    async def list_categories(self, owner_id: int) -> list[CategoryResult]:
        """Return the owner's categories ordered by name."""
        return await self._read_through(
            owner_id,
            scope=keys.category_list_scope(owner_id),
            build_key=lambda version: keys.category_list_key(owner_id, version),
            ttl=self._categories_ttl,
            load=lambda: self._category_repo.list_by_owner(owner_id),
            encode=_encode_list,
            decode=_decode_categories,
        )

    async def get_category_with_links(
        self, owner_id: int, category_id: int
    ) -> CategoryWithLinks:
        """Return one category with its links. NOT_FOUND when absent or not owned."""

        async def load() -> CategoryWithLinks:
            category = await self._category_repo.get_owned(owner_id, category_id)
            if category is None:
                raise LinkVaultException.not_found("Category", category_id)
            links = await self._link_repo.list_by_category(owner_id, category_id)
            return CategoryWithLinks(
                id=category.id,
                name=category.name,
                user_id=category.user_id,
                links=links,
            )

        return await self._read_through(
            owner_id,
            scope=keys.category_detail_scope(owner_id, category_id),
            build_key=lambda version: keys.category_key(owner_id, category_id, version),
            ttl=self._categories_ttl,
            load=load,
            encode=asdict,
            decode=_decode_category_detail,
        )

    async def list_links(
        self,
        owner_id: int,
        page: int = DEFAULT_PAGE,
        limit: int = DEFAULT_PAGE_SIZE,
        category_id: int | None = None,
        search: str | None = None,
    ) -> LinkPage:
        """Return one page of the owner's links, or every match when searching.

        Raises:
            LinkVaultException: VALIDATION when page < 1 or limit outside [1, 100].
        """
        if page < 1:
            raise LinkVaultException.validation("page must be at least 1", field="page")
        if limit < 1 or limit > MAX_PAGE_SIZE:
            raise LinkVaultException.validation(
                f"limit must be between 1 and {MAX_PAGE_SIZE}", field="limit"
            )
        query = LinkListQuery.normalize(page, limit, category_id, search)

        return await self._read_through(
            owner_id,
            scope=keys.links_scope(owner_id),
            build_key=lambda version: keys.link_list_key(owner_id, query, version),
            ttl=self._links_ttl,
            load=lambda: self._load_links(owner_id, query),
            encode=asdict,
            decode=_decode_link_page,
        )

    async def get_link(self, owner_id: int, link_id: int) -> LinkListItem:
        """Return one of the owner's links with its category name. NOT_FOUND otherwise."""

        async def load() -> LinkListItem:
            item = await self._link_repo.get_item(owner_id, link_id)
            if item is None:
                raise LinkVaultException.not_found("Link", link_id)
            return item

        return await self._read_through(
            owner_id,
            scope=keys.links_scope(owner_id),
            build_key=lambda version: keys.link_key(owner_id, link_id, version),
            ttl=self._links_ttl,
            load=load,
            encode=asdict,
            decode=_decode_link_item,
        )

    async def _load_links(self, owner_id: int, query: LinkListQuery) -> LinkPage:
        total = await self._link_repo.count_matching(owner_id, query.category_id, query.search)
        if query.is_search:
            rows = await self._link_repo.list_matching(
                owner_id, query.category_id, query.search
            )
            pagination = Pagination(page=1, limit=total, total=total, total_pages=1)
        else:
            assert query.page is not None and query.limit is not None
            rows = await self._link_repo.list_matching(
                owner_id,
                query.category_id,
                None,
                limit=query.limit,
                offset=query.offset,
            )
            pagination = Pagination(
                page=query.page,
                limit=query.limit,
                total=total,
                total_pages=math.ceil(total / query.limit),
            )
        logger.debug(
            "Fetched %s/%s links for user %s (search=%s)",
            len(rows),
            total,
            owner_id,
            query.is_search,
        )
        return LinkPage(data=rows, pagination=pagination)

    async def _read_through(
        self,
        owner_id: int,
        *,
        scope: str,
        build_key: Callable[[str], str],
        ttl: int,
        load: Callable[[], Awaitable[T]],
        encode: Callable[[T], Any],
        decode: Callable[[Any], T],
    ) -> T:
        version = await self._versions.current(scope)
        if version is None:
            return await load()
        key = build_key(version)

        cached = await self._cache_get(key, owner_id)
        if cached is not None:
            try:
                result = decode(cached)
            except _MALFORMED as e:
                logger.warning("Ignoring malformed cache entry %s: %s", key, e)
                notify(
                    self._observer,
                    CacheEvent(CacheAction.ERROR, key, owner_id, {"reason": "malformed"}),
                )
            else:
                notify(self._observer, CacheEvent(CacheAction.HIT, key, owner_id))
                return result

        notify(self._observer, CacheEvent(CacheAction.MISS, key, owner_id))
        result = await load()
        await self._cache_set(key, encode(result), ttl, owner_id)
        return result

    async def _cache_get(self, key: str, owner_id: int) -> Any:
        assert self._cache is not None
        try:
            return await self._cache.get(key)
        except Exception:
            logger.exception("Cache get failed for %s; reading record store", key)
            notify(self._observer, CacheEvent(CacheAction.ERROR, key, owner_id, {"op": "get"}))
            return None

    async def _cache_set(self, key: str, value: Any, ttl: int, owner_id: int) -> None:
        assert self._cache is not None
        try:
            stored = await self._cache.set(key, value, ttl=ttl)
        except Exception:
            logger.exception("Cache set failed for %s", key)
            notify(self._observer, CacheEvent(CacheAction.ERROR, key, owner_id, {"op": "set"}))
            return
        if stored:
            notify(self._observer, CacheEvent(CacheAction.SET, key, owner_id, {"ttl": ttl}))
