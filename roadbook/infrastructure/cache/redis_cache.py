"""Redis-backed response cache.

Same protocol as MemoryCache, for deployments running several workers that
should share lookup results. Values are JSON; TTLs use SET PX. Keys are
namespaced under "roadbook:". When Redis is unreachable every read is a
miss and writes are dropped (the resolver still answers).
"""

from __future__ import annotations

import json
import logging
from typing import Any

import redis.asyncio as redis

from roadbook.core.config import Settings, get_settings
from roadbook.core.constants import CACHE_KEY_SEP, CACHE_NAMESPACE
from roadbook.infrastructure.cache.cache_protocol import CacheStats

logger = logging.getLogger(__name__)

_SCAN_CHUNK = 500


class RedisCache:
    """Async Redis cache with millisecond TTLs and local hit/miss counters.

    Call connect() at startup and disconnect() at shutdown. Hit/miss counters
    are per process; size counts the namespaced keys in Redis.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize cache service.

        Args:
            redis_client: Optional Redis client for testing or DI.
            settings: Optional settings; defaults to get_settings().
        """
        self.redis = redis_client
        self.settings = settings or get_settings()
        self._connected = redis_client is not None
        self._hits = 0
        self._misses = 0

    def _key(self, key: str) -> str:
        return f"{CACHE_NAMESPACE}{CACHE_KEY_SEP}{key}"

    async def connect(self) -> None:
        """Establish Redis connection. Call on app startup."""
        if self.redis is not None:
            return
        try:
            self.redis = redis.Redis(
                host=self.settings.redis_host,
                port=self.settings.redis_port,
                db=self.settings.redis_db,
                password=self.settings.redis_password.get_secret_value()
                if self.settings.redis_password
                else None,
                decode_responses=True,
                socket_connect_timeout=5,
                socket_keepalive=True,
            )
            await self.redis.ping()
            self._connected = True
            logger.info(
                "Redis cache connected: %s:%s",
                self.settings.redis_host,
                self.settings.redis_port,
            )
        except (redis.ConnectionError, redis.TimeoutError) as e:
            logger.warning("Redis connection failed: %s. Cache disabled.", e)
            self._connected = False
            self.redis = None

    async def disconnect(self) -> None:
        """Close Redis connection. Call on app shutdown."""
        if self.redis:
            await self.redis.aclose()
            self.redis = None
            self._connected = False
            logger.info("Redis cache disconnected")

    def is_available(self) -> bool:
        return self._connected and self.redis is not None

    async def get(self, key: str) -> Any | None:
        if not self.is_available() or self.redis is None:
            self._misses += 1
            return None
        try:
            raw = await self.redis.get(self._key(key))
        except redis.RedisError:
            logger.exception("Cache get error for key %s", key)
            self._misses += 1
            return None
        if raw is None:
            self._misses += 1
            logger.debug("Cache MISS: %s", key)
            return None
        try:
            value = json.loads(raw)
        except ValueError:
            logger.warning("Cache value for key %s is not valid JSON; treating as miss", key)
            self._misses += 1
            return None
        self._hits += 1
        logger.debug("Cache HIT: %s", key)
        return value

    async def set(self, key: str, value: Any, ttl_ms: int | None = None) -> None:
        if value is None:
            raise ValueError("None cannot be cached (it means 'miss')")
        ttl = self.settings.cache_ttl_ms if ttl_ms is None else ttl_ms
        if ttl <= 0:
            raise ValueError("ttl_ms must be positive")
        if not self.is_available() or self.redis is None:
            return
        try:
            await self.redis.set(self._key(key), json.dumps(value), px=ttl)
            logger.debug("Cache SET: %s (TTL: %sms)", key, ttl)
        except redis.RedisError:
            logger.exception("Cache set error for key %s", key)

    async def has(self, key: str) -> bool:
        if not self.is_available() or self.redis is None:
            return False
        try:
            return bool(await self.redis.exists(self._key(key)))
        except redis.RedisError:
            logger.exception("Cache exists error for key %s", key)
            return False

    async def delete(self, key: str) -> None:
        if not self.is_available() or self.redis is None:
            return
        try:
            await self.redis.delete(self._key(key))
        except redis.RedisError:
            logger.exception("Cache delete error for key %s", key)

    async def _namespaced_keys(self) -> list[str]:
        assert self.redis is not None
        pattern = f"{CACHE_NAMESPACE}{CACHE_KEY_SEP}*"
        return [key async for key in self.redis.scan_iter(match=pattern, count=_SCAN_CHUNK)]

    async def clear(self) -> None:
        """Delete every namespaced key (SCAN + batched UNLINK) and reset counters."""
        self._hits = 0
        self._misses = 0
        if not self.is_available() or self.redis is None:
            return
        try:
            keys = await self._namespaced_keys()
            for start in range(0, len(keys), _SCAN_CHUNK):
                await self.redis.unlink(*keys[start:start + _SCAN_CHUNK])
            logger.info("Cache CLEARED: %d keys", len(keys))
        except redis.RedisError:
            logger.exception("Cache clear error")

    async def stats(self) -> CacheStats:
        size = 0
        if self.is_available() and self.redis is not None:
            try:
                size = len(await self._namespaced_keys())
            except redis.RedisError:
                logger.exception("Cache stats error")
        return CacheStats(hits=self._hits, misses=self._misses, size=size)
