"""In-process TTL cache for lookup results.

Expired entries are removed lazily: only when get/has touches them, or when
purge_expired() runs (optionally from a periodic sweep task). Until then an
expired entry still counts in size. With max_entries set, the oldest stored
entry is evicted first; without it the cache is unbounded.
"""

from __future__ import annotations

import time
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from roadbook.infrastructure.cache.cache_protocol import CacheStats
from roadbook.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


@dataclass
class CacheEntry:
    """One cached value; stored_at is a clock reading in seconds."""

    key: str
    value: Any
    stored_at: float
    ttl_ms: int

    def is_expired(self, now: float) -> bool:
        return (now - self.stored_at) * 1000 >= self.ttl_ms


class MemoryCache:
    """Async-compatible in-memory cache with per-entry TTL and hit/miss stats.

    All methods run without awaiting, so each call is atomic on the event
    loop and safe under concurrent lookups.
    """

    def __init__(
        self,
        default_ttl_ms: int = 5 * 60 * 1000,
        max_entries: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the cache.

        Args:
            default_ttl_ms: TTL used when set() is called without one.
            max_entries: Optional size bound; None keeps the cache unbounded.
            clock: Monotonic clock in seconds (injectable for tests).
        """
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()
        self._default_ttl_ms = default_ttl_ms
        self._max_entries = max_entries
        self._clock = clock
        self._hits = 0
        self._misses = 0

    def is_available(self) -> bool:
        return True

    def _live_entry(self, key: str) -> CacheEntry | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.is_expired(self._clock()):
            del self._entries[key]
            return None
        return entry

    async def get(self, key: str) -> Any | None:
        entry = self._live_entry(key)
        if entry is None:
            self._misses += 1
            logger.debug("Cache MISS: %s", key)
            return None
        self._hits += 1
        logger.debug("Cache HIT: %s", key)
        return entry.value

    async def set(self, key: str, value: Any, ttl_ms: int | None = None) -> None:
        if value is None:
            raise ValueError("None cannot be cached (it means 'miss')")
        ttl = self._default_ttl_ms if ttl_ms is None else ttl_ms
        if ttl <= 0:
            raise ValueError("ttl_ms must be positive")
        self._entries.pop(key, None)
        self._entries[key] = CacheEntry(key, value, self._clock(), ttl)
        if self._max_entries is not None:
            while len(self._entries) > self._max_entries:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("Cache EVICT: %s", evicted)
        logger.debug("Cache SET: %s (TTL: %sms)", key, ttl)

    async def has(self, key: str) -> bool:
        return self._live_entry(key) is not None

    async def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    async def clear(self) -> None:
        self._entries.clear()
        self._hits = 0
        self._misses = 0
        logger.info("Cache CLEARED")

    async def stats(self) -> CacheStats:
        return CacheStats(hits=self._hits, misses=self._misses, size=len(self._entries))

    def purge_expired(self) -> int:
        """Delete every expired entry now; returns how many were removed."""
        now = self._clock()
        expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.info("Cache SWEEP: %d expired entries removed", len(expired))
        return len(expired)
