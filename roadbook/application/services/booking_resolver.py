"""Multi-tenant booking resolver.

Probes every configured tenant concurrently under one overall deadline and
picks a winner in tenant enumeration order: the first tenant (lowest config
id) holding the booking wins, even when a later tenant answered sooner.
Probes still running once the winner is known are cancelled and reported
as skipped; probes still running at the deadline are cancelled and reported
as timed out. Per-tenant failures never abort the search.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

from roadbook.application.dtos.search import SearchAttempt, SearchMethod, SearchResult
from roadbook.application.services.booking_mapper import find_booking
from roadbook.domain.exceptions import NoTenantsConfiguredError, ValidationException
from roadbook.infrastructure.exceptions import AuthenticationError, CompositorError, UpstreamError
from roadbook.infrastructure.travel_compositor.client import BookingFilter
from roadbook.shared.telemetry import add_span_attributes, add_span_event, get_logger, traced
from roadbook.shared.utils.datetime import elapsed_ms, utc_now

if TYPE_CHECKING:
    from roadbook.infrastructure.travel_compositor.client import TravelCompositorClient
    from roadbook.infrastructure.travel_compositor.credentials import CredentialRegistry

logger = get_logger(__name__)

ATTEMPT_SKIPPED = "skipped"
ATTEMPT_TIMEOUT = "timeout"


class TenantClientSource(Protocol):
    """Anything that hands out one client per config id (the client pool)."""

    def get(self, config_id: int) -> TravelCompositorClient: ...


@dataclass(frozen=True)
class _ProbeOutcome:
    attempt: SearchAttempt
    booking: dict[str, Any] | None


def default_booking_filter() -> BookingFilter:
    return BookingFilter.around(utc_now().date())


class MultiTenantBookingResolver:
    """Finds which tenant holds a booking id."""

    def __init__(
        self,
        registry: CredentialRegistry,
        clients: TenantClientSource,
        *,
        default_timeout_ms: int = 30_000,
        booking_filter_factory: Callable[[], BookingFilter] = default_booking_filter,
    ) -> None:
        """Initialize the resolver.

        Args:
            registry: Source of the configured tenant slots.
            clients: Client pool; one shared client (and session) per tenant.
            default_timeout_ms: Overall search deadline when none is given.
            booking_filter_factory: Builds the listing window for the fallback scan.
        """
        self._registry = registry
        self._clients = clients
        self._default_timeout_ms = default_timeout_ms
        self._booking_filter_factory = booking_filter_factory

    def _microsite_of(self, config_id: int) -> str | None:
        return self._registry.get_config(config_id).microsite_id

    @traced("resolver.probe_tenant")
    async def _probe(self, *, config_id: int, booking_id: str) -> _ProbeOutcome:
        """Look the booking up in one tenant: direct lookup, then listing scan."""
        started = time.perf_counter()
        microsite_id = self._microsite_of(config_id)
        method: SearchMethod = "direct"
        booking: dict[str, Any] | None = None
        error: str | None = None
        try:
            client = self._clients.get(config_id)
            try:
                booking = await client.get_booking_by_reference(booking_id)
            except AuthenticationError:
                raise
            except UpstreamError as e:
                logger.debug(
                    "Direct lookup of %s failed in tenant config %s (%s); scanning listing",
                    booking_id,
                    config_id,
                    e.message,
                )
                method = "listing"
                bookings = await client.get_all_bookings(self._booking_filter_factory())
                booking = find_booking(bookings, booking_id)
                if booking is None:
                    error = f"Booking {booking_id} not found in tenant config {config_id}"
        except CompositorError as e:
            error = e.message
            logger.warning("Tenant config %s probe failed: %s", config_id, e.message)
        except Exception as e:
            error = f"Unexpected error: {e.__class__.__name__}"
            logger.exception("Unexpected error probing tenant config %s", config_id)
        return _ProbeOutcome(
            attempt=SearchAttempt(
                config_id=config_id,
                microsite_id=microsite_id,
                success=booking is not None,
                response_time_ms=elapsed_ms(started, time.perf_counter()),
                error=error,
                method=method,
            ),
            booking=booking,
        )

    @traced("resolver.search_across_all_tenants")
    async def search_across_all_tenants(
        self, booking_id: str, timeout_ms: int | None = None
    ) -> SearchResult:
        """Search every configured tenant for booking_id.

        Args:
            booking_id: Identifier as typed by the user (e.g. "RRP-9263").
            timeout_ms: Overall deadline; defaults to the resolver's default.

        Returns:
            SearchResult with one attempt per configured tenant, in order.
            Not found is booking=None, never an exception.

        Raises:
            ValidationException: booking_id is blank or timeout_ms not positive.
            NoTenantsConfiguredError: No tenant slot is configured.
        """
        booking_id = (booking_id or "").strip()
        if not booking_id:
            raise ValidationException("Booking id must not be empty", field="booking_id")
        timeout_ms = self._default_timeout_ms if timeout_ms is None else timeout_ms
        if timeout_ms <= 0:
            raise ValidationException("timeout_ms must be positive", field="timeout_ms")
        config_ids = self._registry.list_available_configs()
        if not config_ids:
            raise NoTenantsConfiguredError()

        logger.info(
            "Searching booking %s across %d tenants (timeout %dms)",
            booking_id,
            len(config_ids),
            timeout_ms,
        )
        started = time.perf_counter()
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout_ms / 1000
        tasks = [
            asyncio.create_task(
                self._probe(config_id=config_id, booking_id=booking_id),
                name=f"probe-{booking_id}-{config_id}",
            )
            for config_id in config_ids
        ]
        outcomes: dict[int, _ProbeOutcome] = {}
        winner: int | None = None
        deadline_hit = False
        try:
            for index, task in enumerate(tasks):
                remaining = max(deadline - loop.time(), 0)
                done, _ = await asyncio.wait({task}, timeout=remaining)
                if not done:
                    deadline_hit = True
                    break
                outcomes[index] = task.result()
                if outcomes[index].booking is not None:
                    winner = index
                    break
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)

        total_ms = elapsed_ms(started, time.perf_counter())
        # Probes that finished before cancellation still count
        for index, task in enumerate(tasks):
            if index not in outcomes and not task.cancelled() and task.exception() is None:
                outcomes[index] = task.result()
        if winner is None:
            winner = next(
                (i for i in sorted(outcomes) if outcomes[i].booking is not None), None
            )

        cancel_reason = ATTEMPT_TIMEOUT if deadline_hit else ATTEMPT_SKIPPED
        unfinished = len(config_ids) - len(outcomes)
        if unfinished:
            add_span_event("probes.cancelled", {"count": unfinished, "reason": cancel_reason})

        attempts: list[SearchAttempt] = []
        for index, config_id in enumerate(config_ids):
            outcome = outcomes.get(index)
            if outcome is not None:
                attempts.append(outcome.attempt)
                continue
            attempts.append(
                SearchAttempt(
                    config_id=config_id,
                    microsite_id=self._microsite_of(config_id),
                    success=False,
                    response_time_ms=total_ms,
                    error=cancel_reason,
                )
            )

        booking = outcomes[winner].booking if winner is not None else None
        found_in = str(config_ids[winner]) if winner is not None else None
        add_span_attributes(
            **{"search.found": booking is not None, "search.tenants": len(config_ids)}
        )
        if found_in is not None:
            logger.info(
                "Booking %s found in tenant config %s after %dms",
                booking_id,
                found_in,
                total_ms,
            )
        else:
            logger.info(
                "Booking %s not found in %d tenants after %dms",
                booking_id,
                len(config_ids),
                total_ms,
            )
        return SearchResult(
            booking=booking,
            found_in_microsite=found_in,
            attempts=attempts,
            total_time_ms=total_ms,
        )

    @traced("resolver.search_tenant")
    async def search_tenant(self, *, config_id: int, booking_id: str) -> SearchResult:
        """Look booking_id up in a single tenant (direct lookup, then listing).

        Raises:
            ValidationException: booking_id is blank.
            ConfigurationError: The slot is not configured.
        """
        booking_id = (booking_id or "").strip()
        if not booking_id:
            raise ValidationException("Booking id must not be empty", field="booking_id")
        self._registry.get_config(config_id)
        started = time.perf_counter()
        outcome = await self._probe(config_id=config_id, booking_id=booking_id)
        return SearchResult(
            booking=outcome.booking,
            found_in_microsite=str(config_id) if outcome.booking is not None else None,
            attempts=[outcome.attempt],
            total_time_ms=elapsed_ms(started, time.perf_counter()),
        )
