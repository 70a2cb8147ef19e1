"""Redis-backed cache store.

Async Redis with JSON payloads and per-entry TTL (SETEX). Every operation
degrades instead of raising: a dropped connection triggers one reconnect
and retry, after which the call reports a miss / False / 0.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import redis.asyncio as redis

from linkvault.core.config import Settings, get_settings

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Keys per UNLINK round-trip when wiping a pattern
UNLINK_CHUNK_SIZE = 500


class CacheService:
    """Async Redis cache store.

    Call connect() at startup and disconnect() at shutdown (see core.lifespan).
    Connection settings come from Settings unless a client is injected.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.redis = redis_client
        self.settings = settings or get_settings()
        self._connected = redis_client is not None

    async def connect(self) -> None:
        """Open the connection and ping it; on failure the cache stays disabled."""
        if self.redis is not None:
            return
        password = self.settings.redis_password
        client = redis.Redis(
            host=self.settings.redis_host,
            port=self.settings.redis_port,
            db=self.settings.redis_db,
            password=password.get_secret_value() if password else None,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_keepalive=True,
        )
        try:
            await client.ping()
        except (redis.ConnectionError, redis.TimeoutError) as e:
            logger.warning("Redis connection failed: %s. Cache disabled.", e)
            await client.aclose()
            self._connected = False
            return
        self.redis = client
        self._connected = True
        logger.info(
            "Redis cache connected: %s:%s/%s",
            self.settings.redis_host,
            self.settings.redis_port,
            self.settings.redis_db,
        )

    async def disconnect(self) -> None:
        """Close the connection."""
        if self.redis is not None:
            await self.redis.aclose()
            self.redis = None
            self._connected = False
            logger.info("Redis cache disconnected")

    async def _reconnect(self) -> bool:
        """Drop the current client and connect again. Returns True if reconnected."""
        if self.redis is not None:
            try:
                await self.redis.aclose()
            except redis.RedisError as e:
                logger.debug("Ignoring error while closing Redis client: %s", e)
        self.redis = None
        self._connected = False
        await self.connect()
        return self._connected

    def is_available(self) -> bool:
        """Return True if Redis is connected and usable."""
        return self._connected and self.redis is not None

    async def ping(self) -> bool:
        """Round-trip check used by the readiness check."""
        if not self.is_available():
            return False
        return await self._call("ping", "-", lambda client: client.ping(), False)

    async def _call(
        self,
        op: str,
        target: str,
        fn: Callable[[redis.Redis], Awaitable[T]],
        default: T,
    ) -> T:
        """Run fn against the client, reconnecting once on connection loss."""
        if not self.is_available() or self.redis is None:
            return default
        try:
            return await fn(self.redis)
        except (redis.ConnectionError, redis.TimeoutError):
            if await self._reconnect() and self.redis is not None:
                try:
                    return await fn(self.redis)
                except redis.RedisError:
                    logger.exception("Cache %s error for %s after reconnect", op, target)
                    return default
            logger.warning("Cache %s unavailable for %s (Redis disconnected)", op, target)
            return default
        except redis.RedisError:
            logger.exception("Cache %s error for %s", op, target)
            return default

    async def get(self, key: str) -> Any | None:
        """Return the JSON-decoded value, or None when missing, unreadable or unavailable."""
        raw = await self._call("get", key, lambda client: client.get(key), None)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Cache entry %s is not valid JSON; treating as miss", key)
            return None

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        """Store one JSON-serializable value with TTL (single SETEX). True on success."""
        serialized = json.dumps(value)

        async def setex(client: redis.Redis) -> bool:
            await client.setex(key, ttl, serialized)
            return True

        return await self._call("set", key, setex, False)

    async def delete(self, key: str) -> bool:
        """Remove one key. True if the command ran."""

        async def remove(client: redis.Redis) -> bool:
            await client.delete(key)
            return True

        return await self._call("delete", key, remove, False)

    async def delete_pattern(self, pattern: str) -> int:
        """Delete every key matching a glob pattern with SCAN + batched UNLINK.

        SCAN never blocks the server the way KEYS does; UNLINK frees memory
        asynchronously. Returns the number of keys removed.
        """

        async def wipe(client: redis.Redis) -> int:
            deleted = 0
            chunk: list[str] = []
            async for key in client.scan_iter(match=pattern, count=UNLINK_CHUNK_SIZE):
                chunk.append(key)
                if len(chunk) >= UNLINK_CHUNK_SIZE:
                    deleted += int(await client.unlink(*chunk) or 0)
                    chunk = []
            if chunk:
                deleted += int(await client.unlink(*chunk) or 0)
            return deleted

        deleted = await self._call("delete_pattern", pattern, wipe, 0)
        if deleted:
            logger.debug("Cache UNLINK: %s (%s keys)", pattern, deleted)
        return deleted

    async def clear_all(self) -> bool:
        """Flush the whole database. Tests and operations only."""

        async def flush(client: redis.Redis) -> bool:
            await client.flushdb()
            return True

        cleared = await self._call("clear_all", "*", flush, False)
        if cleared:
            logger.warning("Cache CLEARED: all keys deleted")
        return cleared
