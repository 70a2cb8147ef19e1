"""Tests for the Redis CacheService against a mocked async client."""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest
import redis.asyncio as redis

from linkvault.infrastructure.cache import CacheService
from linkvault.infrastructure.cache.redis_cache import UNLINK_CHUNK_SIZE


@pytest.fixture
def client() -> MagicMock:
    mock = MagicMock()
    for name in ("get", "setex", "delete", "unlink", "flushdb", "ping", "aclose"):
        setattr(mock, name, AsyncMock())
    return mock


@pytest.fixture
def service(client) -> CacheService:
    return CacheService(redis_client=client)


def _scan(keys: list[str]):
    async def scan_iter(match=None, count=None):
        for key in keys:
            yield key

    return scan_iter


async def test_get_decodes_json(service, client) -> None:
    client.get.return_value = json.dumps({"a": 1})
    assert await service.get("k") == {"a": 1}
    client.get.assert_awaited_once_with("k")


async def test_get_invalid_json_is_a_miss(service, client) -> None:
    client.get.return_value = "{broken"
    assert await service.get("k") is None


async def test_set_uses_setex(service, client) -> None:
    assert await service.set("k", [1, 2], ttl=42)
    client.setex.assert_awaited_once_with("k", 42, "[1, 2]")


async def test_delete_pattern_unlinks_in_chunks(service, client) -> None:
    keys = [f"links:user:1:{i}" for i in range(UNLINK_CHUNK_SIZE + 3)]
    client.scan_iter = _scan(keys)
    client.unlink.side_effect = lambda *chunk: len(chunk)

    assert await service.delete_pattern("links:user:1:*") == len(keys)
    assert client.unlink.await_count == 2


async def test_delete_pattern_without_matches(service, client) -> None:
    client.scan_iter = _scan([])
    assert await service.delete_pattern("links:user:1:*") == 0
    client.unlink.assert_not_awaited()


async def test_redis_errors_degrade(service, client) -> None:
    client.get.side_effect = redis.ResponseError("WRONGTYPE")
    client.setex.side_effect = redis.ResponseError("OOM")
    assert await service.get("k") is None
    assert await service.set("k", 1) is False


async def test_connection_loss_reconnects_once(service, client, monkeypatch) -> None:
    """A dropped connection is retried after one reconnect attempt."""
    client.get.side_effect = [redis.ConnectionError("reset"), json.dumps("ok")]

    async def reconnect_same_client() -> None:
        service.redis = client
        service._connected = True

    monkeypatch.setattr(service, "connect", reconnect_same_client)
    assert await service.get("k") == "ok"
    client.aclose.assert_awaited_once()


async def test_failed_reconnect_disables_cache(service, client, monkeypatch) -> None:
    client.setex.side_effect = redis.ConnectionError("reset")

    async def stay_down() -> None:
        return None

    monkeypatch.setattr(service, "connect", stay_down)
    assert await service.set("k", 1) is False
    assert not service.is_available()
    assert await service.get("k") is None
    assert await service.delete_pattern("*") == 0


async def test_unconnected_service_is_unavailable() -> None:
    service = CacheService()
    assert not service.is_available()
    assert await service.get("k") is None
    assert await service.ping() is False
    assert await service.clear_all() is False


async def test_disconnect_closes_client(service, client) -> None:
    await service.disconnect()
    client.aclose.assert_awaited_once()
    assert not service.is_available()
