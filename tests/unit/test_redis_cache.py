"""RedisCache tests with a mocked redis.asyncio client."""

import json
from unittest.mock import AsyncMock

import pytest

from roadbook.core.config import Settings
from roadbook.infrastructure.cache.redis_cache import RedisCache


@pytest.fixture
def redis_client() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def cache(redis_client: AsyncMock) -> RedisCache:
    return RedisCache(redis_client=redis_client, settings=Settings(cache_ttl_ms=1234))


async def test_set_uses_namespaced_key_and_millisecond_ttl(
    cache: RedisCache, redis_client: AsyncMock
) -> None:
    await cache.set("booking:RRP-1", {"id": 1})
    redis_client.set.assert_awaited_once_with(
        "roadbook:booking:RRP-1", json.dumps({"id": 1}), px=1234
    )


async def test_get_hit_and_miss_update_counters(
    cache: RedisCache, redis_client: AsyncMock
) -> None:
    redis_client.get.side_effect = [json.dumps({"id": 1}), None]
    assert await cache.get("booking:RRP-1") == {"id": 1}
    assert await cache.get("booking:RRP-2") is None

    async def scan_iter(*args, **kwargs):
        yield "roadbook:booking:RRP-1"

    redis_client.scan_iter = scan_iter
    stats = await cache.stats()
    assert (stats.hits, stats.misses, stats.size) == (1, 1, 1)


async def test_unavailable_cache_misses_and_drops_writes() -> None:
    cache = RedisCache(settings=Settings())
    assert cache.is_available() is False
    await cache.set("booking:RRP-1", {"id": 1})
    assert await cache.get("booking:RRP-1") is None
    stats = await cache.stats()
    assert (stats.misses, stats.size) == (1, 0)


async def test_corrupt_value_counts_as_miss(cache: RedisCache, redis_client: AsyncMock) -> None:
    redis_client.get.return_value = "{not json"
    assert await cache.get("booking:RRP-1") is None

    async def scan_iter(*args, **kwargs):
        return
        yield

    redis_client.scan_iter = scan_iter
    stats = await cache.stats()
    assert (stats.hits, stats.misses) == (0, 1)
