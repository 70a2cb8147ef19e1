"""Cache key builders. Single place for key format.

Every key belongs to a scope and starts with "{scope}:", so one
delete_pattern("{scope}:*") removes every cached read of that scope:

    links:user:{owner}                 all link reads of an owner
    categories:user:{owner}:list       the owner's category listing
    categories:user:{owner}:id:{id}    one category detail of an owner

Entry keys embed the scope version ("v:{version}") right after the scope.
The version token itself lives outside the data prefixes, at
"version:{scope}", so wiping a scope never touches it.

Key components other than the search term must not contain CACHE_KEY_SEP.
The search term is always the last component, so it may contain anything
without two distinct queries colliding.
"""

from linkvault.application.dtos.link import LinkListQuery
from linkvault.core.constants import (
    CACHE_INITIAL_VERSION,
    CACHE_KEY_SEP,
    CACHE_NO_CATEGORY_FILTER,
    CACHE_NO_SEARCH,
    CACHE_OWNER_SEGMENT,
    CACHE_PREFIX_CATEGORIES,
    CACHE_PREFIX_LINKS,
    CACHE_PREFIX_VERSION,
)
from linkvault.domain.enums import EntityKind

_PREFIXES = {
    EntityKind.LINKS: CACHE_PREFIX_LINKS,
    EntityKind.CATEGORIES: CACHE_PREFIX_CATEGORIES,
}


def _validate_key_component(value: str, name: str) -> None:
    """Raise ValueError if value is empty or contains the cache key separator.

    Args:
        value: String component used in a cache key.
        name: Name of the component (for error message).

    Raises:
        ValueError: If value is empty or contains CACHE_KEY_SEP.
    """
    if not value or CACHE_KEY_SEP in value:
        raise ValueError(
            f"Cache key component {name!r} must be non-empty and not contain "
            f"separator {CACHE_KEY_SEP!r}"
        )


def _join(*parts: object) -> str:
    return CACHE_KEY_SEP.join(str(p) for p in parts)


def owner_prefix(kind: EntityKind, owner_id: int) -> str:
    """Prefix shared by every key of one (entity kind, owner) pair."""
    return _join(_PREFIXES[kind], CACHE_OWNER_SEGMENT, int(owner_id))


def links_scope(owner_id: int) -> str:
    """Scope of every cached link read of an owner."""
    return owner_prefix(EntityKind.LINKS, owner_id)


def category_list_scope(owner_id: int) -> str:
    """Scope of the owner's category listing."""
    return _join(owner_prefix(EntityKind.CATEGORIES, owner_id), "list")


def category_detail_scope(owner_id: int, category_id: int) -> str:
    """Scope of one category detail (category plus embedded links)."""
    return _join(owner_prefix(EntityKind.CATEGORIES, owner_id), "id", int(category_id))


def scope_pattern(scope: str) -> str:
    """Glob pattern matching every entry of a scope (never a neighbouring owner or id)."""
    return f"{scope}{CACHE_KEY_SEP}*"


def version_key(scope: str) -> str:
    """Key holding the current version token of a scope."""
    return _join(CACHE_PREFIX_VERSION, scope)


def _versioned(scope: str, version: str) -> str:
    _validate_key_component(version, "version")
    return _join(scope, "v", version)


def link_list_key(
    owner_id: int, query: LinkListQuery, version: str = CACHE_INITIAL_VERSION
) -> str:
    """Cache key for a link listing.

    Browse mode encodes page, limit, category filter and the "no search"
    sentinel. Search mode drops page/limit and encodes the category filter
    and the raw term (last).
    """
    base = _versioned(links_scope(owner_id), version)
    category = (
        CACHE_NO_CATEGORY_FILTER if query.category_id is None else int(query.category_id)
    )
    if query.is_search:
        return f"{_join(base, 'search', 'cat', category, 'q')}{CACHE_KEY_SEP}{query.search}"
    if query.page is None or query.limit is None:
        raise ValueError("Browse-mode link listing requires page and limit")
    return _join(
        base,
        "page",
        int(query.page),
        "limit",
        int(query.limit),
        "cat",
        category,
        "search",
        CACHE_NO_SEARCH,
    )


def link_key(owner_id: int, link_id: int, version: str = CACHE_INITIAL_VERSION) -> str:
    """Cache key for one link (joined with its category name)."""
    return _join(_versioned(links_scope(owner_id), version), "id", int(link_id))


def category_list_key(owner_id: int, version: str = CACHE_INITIAL_VERSION) -> str:
    """Cache key for the owner's category listing."""
    return _versioned(category_list_scope(owner_id), version)


def category_key(
    owner_id: int, category_id: int, version: str = CACHE_INITIAL_VERSION
) -> str:
    """Cache key for one category with its links."""
    return _versioned(category_detail_scope(owner_id, category_id), version)
