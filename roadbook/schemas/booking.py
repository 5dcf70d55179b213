"""Booking lookup API schemas. Fields serialize as camelCase."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from roadbook.application.dtos.search import SearchAttempt, SearchResult
from roadbook.application.services.booking_mapper import to_booking_record


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LookupRequest(CamelModel):
    """Request body for POST /bookings/lookup."""

    booking_id: str = Field(..., min_length=1, max_length=100, description="e.g. RRP-9263")
    timeout_ms: int | None = Field(default=None, gt=0, le=120_000)
    use_cache: bool = True


class SearchAttemptResponse(CamelModel):
    """Diagnostics for one tenant probe."""

    config_id: int
    microsite_id: str | None
    success: bool
    response_time_ms: int
    error: str | None = None
    method: Literal["direct", "listing"] | None = None

    @classmethod
    def from_attempt(cls, attempt: SearchAttempt) -> SearchAttemptResponse:
        return cls(
            config_id=attempt.config_id,
            microsite_id=attempt.microsite_id,
            success=attempt.success,
            response_time_ms=attempt.response_time_ms,
            error=attempt.error,
            method=attempt.method,
        )


class BookingSummaryResponse(CamelModel):
    """Typed fields extracted from the raw booking."""

    id: str | None = None
    reference: str | None = None
    custom_reference: str | None = None
    status: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    total_price: float | None = None
    currency: str | None = None
    client_name: str | None = None
    destinations: list[str] = Field(default_factory=list)


class LookupResponse(CamelModel):
    """Result of a booking lookup; booking is the raw upstream payload."""

    success: bool
    booking: dict[str, Any] | None = None
    summary: BookingSummaryResponse | None = None
    found_in_microsite: str | None = None
    attempts: list[SearchAttemptResponse]
    total_time_ms: int
    cached: bool = False

    @classmethod
    def from_result(cls, result: SearchResult) -> LookupResponse:
        summary = None
        if result.booking is not None:
            summary = BookingSummaryResponse(**to_booking_record(result.booking).summary())
        return cls(
            success=result.found,
            booking=result.booking,
            summary=summary,
            found_in_microsite=result.found_in_microsite,
            attempts=[SearchAttemptResponse.from_attempt(a) for a in result.attempts],
            total_time_ms=result.total_time_ms,
            cached=result.cached,
        )
