"""Booking lookup use case: response cache in front of the multi-tenant resolver."""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from roadbook.application.dtos.search import SearchResult
from roadbook.domain.exceptions import ValidationException
from roadbook.infrastructure.cache.keys import booking_lookup_key
from roadbook.shared.telemetry import get_logger, traced

if TYPE_CHECKING:
    from roadbook.application.services.booking_resolver import MultiTenantBookingResolver
    from roadbook.infrastructure.cache.cache_protocol import CacheProtocol

logger = get_logger(__name__)


class BookingLookupService:
    """Serves lookups from the cache when possible; caches found results only."""

    def __init__(
        self,
        resolver: MultiTenantBookingResolver,
        cache: CacheProtocol,
        ttl_ms: int = 5 * 60 * 1000,
    ) -> None:
        self._resolver = resolver
        self._cache = cache
        self._ttl_ms = ttl_ms

    @traced("booking_lookup.lookup")
    async def lookup(
        self,
        booking_id: str,
        timeout_ms: int | None = None,
        use_cache: bool = True,
    ) -> SearchResult:
        """Resolve a booking id, reading and refreshing the cache.

        With use_cache=False the cache is not read, but a found result still
        replaces the cached one.

        Raises:
            ValidationException: Blank or malformed booking id.
            NoTenantsConfiguredError: No tenant slot is configured.
        """
        try:
            key = booking_lookup_key(booking_id)
        except ValueError as e:
            raise ValidationException(str(e), field="booking_id") from e

        if use_cache and self._cache.is_available():
            cached = await self._cache.get(key)
            if cached is not None:
                logger.info("Booking %s served from cache", booking_id)
                return replace(SearchResult.from_dict(cached), cached=True)

        result = await self._resolver.search_across_all_tenants(
            booking_id, timeout_ms=timeout_ms
        )
        if result.found and self._cache.is_available():
            await self._cache.set(key, result.to_dict(), ttl_ms=self._ttl_ms)
        return result
