"""Travel Compositor REST client for a single tenant (microsite).

Owns one AuthSession: logs in lazily, reuses the token until it expires,
and sends it in the auth-token header. Every non-2xx response becomes a
typed CompositorError carrying status and raw body; network failures become
TransportError. Nothing is retried here; callers decide.
All HTTP calls use a shared httpx.AsyncClient so they do not block the event loop.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any
from urllib.parse import quote

import httpx

from roadbook.core.constants import AUTH_PATH, AUTH_TOKEN_HEADER, BOOKINGS_PATH
from roadbook.domain.entities import AuthSession, TenantConfig
from roadbook.infrastructure.exceptions import (
    AuthenticationError,
    CompositorError,
    NotFoundError,
    TransportError,
    UpstreamError,
)
from roadbook.shared.telemetry.logging import get_logger
from roadbook.shared.utils.datetime import elapsed_ms, expires_after, listing_window, utc_now

logger = get_logger(__name__)


@dataclass(frozen=True)
class BookingFilter:
    """Date window and paging limits for the booking listing (dates are YYYYMMDD)."""

    from_date: str
    to_date: str
    page_size: int = 50
    max_pages: int = 20

    @classmethod
    def around(
        cls,
        today: date,
        years_back: int = 1,
        years_forward: int = 1,
        page_size: int = 50,
        max_pages: int = 20,
    ) -> BookingFilter:
        """Build a filter covering whole calendar years around today."""
        from_date, to_date = listing_window(today, years_back, years_forward)
        return cls(from_date, to_date, page_size=page_size, max_pages=max_pages)


def _json_or_none(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


def _extract_trips(data: Any) -> list[dict[str, Any]]:
    """Return the booking list from a listing page (bookedTrip or bookings envelope)."""
    if isinstance(data, list):
        items = data
    elif isinstance(data, dict):
        items = data.get("bookedTrip") or data.get("bookings") or []
    else:
        items = []
    return [item for item in items if isinstance(item, dict)]


class TravelCompositorClient:
    """Authenticated access to one tenant of the Travel Compositor API."""

    def __init__(
        self,
        config: TenantConfig,
        http_client: httpx.AsyncClient,
        base_url: str,
        *,
        token_ttl_seconds: int = 7200,
        expiry_skew_seconds: int = 60,
        now: Callable[[], datetime] = utc_now,
    ) -> None:
        self._config = config
        self._http = http_client
        self._base_url = base_url.rstrip("/")
        self._token_ttl_seconds = token_ttl_seconds
        self._expiry_skew_seconds = expiry_skew_seconds
        self._now = now
        self._session: AuthSession | None = None
        self._auth_lock = asyncio.Lock()
        self._login_count = 0

    @property
    def config(self) -> TenantConfig:
        return self._config

    @property
    def session(self) -> AuthSession | None:
        return self._session

    @property
    def login_count(self) -> int:
        """Number of successful logins performed by this client."""
        return self._login_count

    async def authenticate(self) -> str:
        """Log in and replace the current session. Always calls the upstream.

        Returns:
            The new token.

        Raises:
            AuthenticationError: Non-2xx login response or no token in the body.
            TransportError: Network failure.
        """
        async with self._auth_lock:
            return await self._login()

    def invalidate_session(self) -> None:
        """Forget the cached token; the next request logs in again."""
        self._session = None

    async def _login(self) -> str:
        logger.info(
            "Authenticating tenant config %s (microsite %s)",
            self._config.config_id,
            self._config.microsite_id,
        )
        response = await self._send(
            "POST",
            AUTH_PATH,
            json={
                "username": self._config.username,
                "password": self._config.password.get_secret_value(),
                "micrositeId": self._config.microsite_id,
            },
        )
        if not response.is_success:
            logger.warning(
                "Authentication failed for tenant config %s: status=%d",
                self._config.config_id,
                response.status_code,
            )
            raise AuthenticationError(
                self._config.config_id, response.status_code, response.text
            )
        data = _json_or_none(response)
        token = data.get("token") if isinstance(data, dict) else None
        if not token:
            raise AuthenticationError(
                self._config.config_id, response.status_code, response.text
            )
        ttl = data.get("expirationInSeconds") or self._token_ttl_seconds
        obtained_at = self._now()
        self._session = AuthSession(
            config_id=self._config.config_id,
            token=token,
            obtained_at=obtained_at,
            expires_at=expires_after(
                obtained_at, max(0, int(ttl) - self._expiry_skew_seconds)
            ),
        )
        self._login_count += 1
        return token

    async def _current_token(self) -> str:
        session = self._session
        if session is not None and session.is_valid(self._now()):
            return session.token
        async with self._auth_lock:
            # Another coroutine may have logged in while we waited for the lock
            session = self._session
            if session is not None and session.is_valid(self._now()):
                return session.token
            return await self._login()

    async def _send(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        url = f"{self._base_url}{path}"
        merged_headers = {"Accept": "application/json", **(headers or {})}
        try:
            return await self._http.request(
                method, url, params=params, json=json, headers=merged_headers
            )
        except httpx.TimeoutException as e:
            raise TransportError(self._config.config_id, f"timeout: {e}") from e
        except httpx.TransportError as e:
            raise TransportError(
                self._config.config_id, str(e) or e.__class__.__name__
            ) from e

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """Send an authenticated request, logging in first if needed.

        A 401 response drops the session that was used but is returned
        as-is (no retry).
        """
        token = await self._current_token()
        response = await self._send(
            method, path, params=params, json=json, headers={AUTH_TOKEN_HEADER: token}
        )
        if response.status_code == 401:
            session = self._session
            if session is not None and session.token == token:
                self._session = None
            logger.info(
                "Token rejected for tenant config %s; session dropped",
                self._config.config_id,
            )
        return response

    async def get_booking_by_reference(self, reference: str) -> dict[str, Any]:
        """Fetch one booking directly by its reference.

        Raises:
            NotFoundError: Non-2xx response or an empty body.
        """
        path = (
            f"{BOOKINGS_PATH}/{quote(self._config.microsite_id, safe='')}"
            f"/{quote(reference, safe='')}"
        )
        response = await self.request("GET", path)
        if not response.is_success:
            raise NotFoundError(
                self._config.config_id, reference, response.status_code, response.text
            )
        data = _json_or_none(response)
        if isinstance(data, dict) and ("bookedTrip" in data or "bookings" in data):
            trips = _extract_trips(data)
            data = trips[0] if trips else None
        if not isinstance(data, dict) or not data:
            raise NotFoundError(
                self._config.config_id, reference, response.status_code, response.text
            )
        return data

    async def get_all_bookings(self, booking_filter: BookingFilter) -> list[dict[str, Any]]:
        """List every booking in the filter's date window, page by page.

        Pages are requested until a short page, the reported totalResults,
        or max_pages is reached. Records are de-duplicated by id.

        Raises:
            UpstreamError: Any page answered with non-2xx.
        """
        path = f"{BOOKINGS_PATH}/{quote(self._config.microsite_id, safe='')}"
        bookings: list[dict[str, Any]] = []
        seen_ids: set[str] = set()
        first = 0
        for _ in range(booking_filter.max_pages):
            response = await self.request(
                "GET",
                path,
                params={
                    "from": booking_filter.from_date,
                    "to": booking_filter.to_date,
                    "first": first,
                    "limit": booking_filter.page_size,
                },
            )
            if not response.is_success:
                raise UpstreamError(
                    self._config.config_id, response.status_code, response.text, path
                )
            data = _json_or_none(response)
            page = _extract_trips(data)
            for booking in page:
                booking_id = booking.get("id")
                if booking_id is not None:
                    if str(booking_id) in seen_ids:
                        continue
                    seen_ids.add(str(booking_id))
                bookings.append(booking)
            first += booking_filter.page_size
            total = None
            if isinstance(data, dict):
                total = (data.get("pagination") or {}).get("totalResults")
            if len(page) < booking_filter.page_size:
                break
            if isinstance(total, int) and first >= total:
                break
        logger.debug(
            "Listed %d bookings for tenant config %s",
            len(bookings),
            self._config.config_id,
        )
        return bookings

    async def check_connection(self) -> dict[str, Any]:
        """Log in once and report the outcome; never raises for upstream failures."""
        started = time.perf_counter()
        try:
            await self.authenticate()
        except CompositorError as e:
            return {
                "config_id": self._config.config_id,
                "microsite_id": self._config.microsite_id,
                "success": False,
                "response_time_ms": elapsed_ms(started, time.perf_counter()),
                "error": e.message,
            }
        return {
            "config_id": self._config.config_id,
            "microsite_id": self._config.microsite_id,
            "success": True,
            "response_time_ms": elapsed_ms(started, time.perf_counter()),
            "error": None,
        }
