"""DTOs for multi-tenant booking searches (no dependency on HTTP schemas)."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Literal

SearchMethod = Literal["direct", "listing"]


@dataclass(frozen=True)
class SearchAttempt:
    """Outcome of probing one tenant; exactly one per configured tenant."""

    config_id: int
    microsite_id: str | None
    success: bool
    response_time_ms: int
    error: str | None = None
    method: SearchMethod | None = None


@dataclass(frozen=True)
class SearchResult:
    """Aggregated search outcome.

    booking is the raw upstream payload of the winning tenant, or None.
    found_in_microsite is the winning tenant's config id as a string.
    attempts are in tenant enumeration order.
    """

    booking: dict[str, Any] | None
    found_in_microsite: str | None
    attempts: list[SearchAttempt] = field(default_factory=list)
    total_time_ms: int = 0
    cached: bool = False

    @property
    def found(self) -> bool:
        return self.booking is not None

    def to_dict(self) -> dict[str, Any]:
        """JSON-serializable form (used as the cached value)."""
        return {
            "booking": self.booking,
            "found_in_microsite": self.found_in_microsite,
            "attempts": [asdict(a) for a in self.attempts],
            "total_time_ms": self.total_time_ms,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any], cached: bool = False) -> SearchResult:
        return cls(
            booking=data.get("booking"),
            found_in_microsite=data.get("found_in_microsite"),
            attempts=[SearchAttempt(**a) for a in data.get("attempts", [])],
            total_time_ms=int(data.get("total_time_ms", 0)),
            cached=cached,
        )
