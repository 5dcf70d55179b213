"""Cache: response cache backends and key builders.

MemoryCache is the default backend; RedisCache is selected with
CACHE_BACKEND=redis. Key format lives in keys.py.
"""

from roadbook.infrastructure.cache.cache_protocol import CacheProtocol, CacheStats
from roadbook.infrastructure.cache.keys import booking_lookup_key
from roadbook.infrastructure.cache.memory_cache import CacheEntry, MemoryCache

__all__ = [
    "CacheEntry",
    "CacheProtocol",
    "CacheStats",
    "MemoryCache",
    "booking_lookup_key",
]
