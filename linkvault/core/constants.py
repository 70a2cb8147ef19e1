"""Core constants: cache key prefixes, sentinels and listing limits.

Single source of truth for cache key structure. Used by
application.cache.keys and the query/invalidation layer.
"""

# Cache key prefixes: {entity}:user:{owner_id}...
CACHE_PREFIX_LINKS = "links"
CACHE_PREFIX_CATEGORIES = "categories"
CACHE_PREFIX_VERSION = "version"
CACHE_OWNER_SEGMENT = "user"

# Delimiter for composite keys
CACHE_KEY_SEP = ":"

# Sentinels encoded in link listing keys
CACHE_NO_CATEGORY_FILTER = "all"
CACHE_NO_SEARCH = "none"

# Version used when a scope has never been invalidated (or its token expired)
CACHE_INITIAL_VERSION = "0"

# Link listing pagination
DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

# Field limits (match column sizes)
MAX_NAME_LENGTH = 256
MAX_TITLE_LENGTH = 256
MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 6
