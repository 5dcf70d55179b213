"""Cache protocol shared by the in-memory and Redis backends."""

from dataclasses import asdict, dataclass
from typing import Any, Protocol


@dataclass(frozen=True)
class CacheStats:
    """Cumulative hit/miss counters since the last clear, plus current entry count."""

    hits: int
    misses: int
    size: int

    @property
    def hit_rate(self) -> float:
        """Hits as a percentage of all reads (0.0 when nothing was read)."""
        total = self.hits + self.misses
        return (self.hits / total) * 100 if total else 0.0

    def to_dict(self) -> dict[str, Any]:
        return {**asdict(self), "hit_rate": round(self.hit_rate, 2)}


class CacheProtocol(Protocol):
    """Protocol for response cache backends. None is never a cached value."""

    def is_available(self) -> bool:
        """Return True if the backend is usable."""
        ...

    async def get(self, key: str) -> Any:
        """Return cached value or None on miss (expired entries count as misses)."""
        ...

    async def set(self, key: str, value: Any, ttl_ms: int | None = None) -> None:
        """Store value with a TTL in milliseconds (backend default when None)."""
        ...

    async def has(self, key: str) -> bool:
        """Return True if key holds an unexpired value. Does not touch stats."""
        ...

    async def delete(self, key: str) -> None:
        """Remove key from cache."""
        ...

    async def clear(self) -> None:
        """Remove every entry and reset hit/miss counters."""
        ...

    async def stats(self) -> CacheStats:
        """Return hits, misses and current size."""
        ...
