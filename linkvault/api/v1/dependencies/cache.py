"""Cache store and observer dependencies (set on app.state by the lifespan)."""

from __future__ import annotations

from fastapi import Request

from linkvault.application.cache import CacheObserver
from linkvault.application.interfaces.services import ICacheService


def get_cache(request: Request) -> ICacheService | None:
    """Shared cache store, or None before startup wiring (caching disabled)."""
    return getattr(request.app.state, "cache", None)


def get_cache_observer(request: Request) -> CacheObserver | None:
    return getattr(request.app.state, "cache_observer", None)
