"""Cache events as an optional side channel.

Query and invalidation services report hits, misses, sets, invalidations
and degraded cache calls to an injected CacheObserver. No observer means
silence; logging_cache_observer turns the events into log lines.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from linkvault.domain.enums import CacheAction

logger = logging.getLogger("linkvault.cache")


@dataclass(frozen=True)
class CacheEvent:
    """One cache interaction."""

    action: CacheAction
    key: str
    owner_id: int | None = None
    detail: dict[str, Any] = field(default_factory=dict)


CacheObserver = Callable[[CacheEvent], None]


def logging_cache_observer(event: CacheEvent) -> None:
    """Write cache events to the linkvault.cache logger."""
    if event.action is CacheAction.ERROR:
        logger.warning("Cache %s: %s %s", event.action.value.upper(), event.key, event.detail)
    elif event.action is CacheAction.INVALIDATE:
        logger.info(
            "Cache %s: %s owner=%s %s",
            event.action.value.upper(),
            event.key,
            event.owner_id,
            event.detail,
        )
    else:
        logger.debug("Cache %s: %s owner=%s", event.action.value.upper(), event.key, event.owner_id)


def notify(observer: CacheObserver | None, event: CacheEvent) -> None:
    """Deliver event to observer; a failing observer is logged and ignored."""
    if observer is None:
        return
    try:
        observer(event)
    except Exception:
        logger.exception("Cache observer failed for %s", event.key)
