"""Cache administration API schemas."""

from pydantic import Field

from roadbook.schemas.booking import CamelModel


class CacheStatsResponse(CamelModel):
    """Cumulative counters since the last clear plus current entry count."""

    backend: str
    available: bool
    hits: int
    misses: int
    size: int = Field(..., description="Entries held, including not-yet-evicted expired ones")
    hit_rate: float = Field(..., description="Percentage of reads that were hits")
