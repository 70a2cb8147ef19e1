"""Application lifespan: startup and shutdown.

Only wiring of infrastructure (cache store, cache observer, DB engine
dispose); no business logic here.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from linkvault.application.cache import logging_cache_observer
from linkvault.core.config import get_settings
from linkvault.infrastructure.cache import CacheService, MemoryCache
from linkvault.infrastructure.persistence.database import dispose_engine

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Connect the cache store on startup; disconnect it and dispose the engine on exit.

    With REDIS_ENABLED the Redis store is used (reads bypass it while it is
    unreachable); otherwise an in-process store.
    """
    settings = get_settings()

    # ---- Startup ----
    cache: CacheService | MemoryCache
    if settings.redis_enabled:
        cache = CacheService(settings=settings)
    else:
        cache = MemoryCache()
    await cache.connect()
    app.state.cache = cache
    app.state.cache_observer = (
        logging_cache_observer if settings.cache_event_logging else None
    )

    yield

    # ---- Shutdown ----
    await app.state.cache.disconnect()
    logger.info("Cache disconnected")
    await dispose_engine()
