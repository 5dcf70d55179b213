"""Service wiring: builds the process-wide services from settings.

Used by the lifespan at startup and by tests (with a mocked HTTP transport
and an explicit environment) so both run the same object graph.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from dataclasses import dataclass

import httpx

from roadbook.application.services.booking_resolver import MultiTenantBookingResolver
from roadbook.application.use_cases.booking_lookup import BookingLookupService
from roadbook.core.config import Settings
from roadbook.infrastructure.cache import CacheProtocol, MemoryCache
from roadbook.infrastructure.travel_compositor import (
    BookingFilter,
    CredentialRegistry,
    TravelCompositorClientPool,
)
from roadbook.shared.telemetry import get_logger
from roadbook.shared.utils.datetime import utc_now

logger = get_logger(__name__)


@dataclass
class ServiceContainer:
    """Everything the endpoints need, stored on app.state.services."""

    settings: Settings
    http_client: httpx.AsyncClient
    registry: CredentialRegistry
    clients: TravelCompositorClientPool
    cache: CacheProtocol
    resolver: MultiTenantBookingResolver
    lookup: BookingLookupService


def build_cache(settings: Settings) -> CacheProtocol:
    """Return the configured cache backend (Redis still needs connect())."""
    if settings.cache_backend == "redis":
        from roadbook.infrastructure.cache.redis_cache import RedisCache

        return RedisCache(settings=settings)
    return MemoryCache(
        default_ttl_ms=settings.cache_ttl_ms,
        max_entries=settings.cache_max_entries,
    )


def build_services(
    settings: Settings,
    http_client: httpx.AsyncClient,
    environ: Mapping[str, str] | None = None,
    cache: CacheProtocol | None = None,
) -> ServiceContainer:
    """Wire registry, client pool, cache, resolver and lookup service.

    Args:
        settings: Application settings.
        http_client: Shared client for all upstream calls.
        environ: Tenant credential source; defaults to os.environ.
        cache: Optional cache override; defaults to build_cache(settings).
    """
    registry = CredentialRegistry(environ, max_slots=settings.compositor_max_slots)
    clients = TravelCompositorClientPool(
        registry,
        http_client,
        settings.compositor_base_url,
        token_ttl_seconds=settings.token_default_ttl_seconds,
        expiry_skew_seconds=settings.token_expiry_skew_seconds,
    )

    def booking_filter() -> BookingFilter:
        return BookingFilter.around(
            utc_now().date(),
            years_back=settings.listing_years_back,
            years_forward=settings.listing_years_forward,
            page_size=settings.listing_page_size,
            max_pages=settings.listing_max_pages,
        )

    resolver = MultiTenantBookingResolver(
        registry,
        clients,
        default_timeout_ms=settings.search_timeout_ms,
        booking_filter_factory=booking_filter,
    )
    cache = cache if cache is not None else build_cache(settings)
    lookup = BookingLookupService(resolver, cache, ttl_ms=settings.cache_ttl_ms)
    logger.info(
        "Configured tenant slots: %s (of %d)",
        registry.list_available_configs(),
        registry.max_slots,
    )
    return ServiceContainer(
        settings=settings,
        http_client=http_client,
        registry=registry,
        clients=clients,
        cache=cache,
        resolver=resolver,
        lookup=lookup,
    )


async def run_cache_sweep(cache: MemoryCache, interval_seconds: float) -> None:
    """Purge expired cache entries every interval until cancelled."""
    while True:
        await asyncio.sleep(interval_seconds)
        cache.purge_expired()
