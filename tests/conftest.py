"""Pytest configuration and fixtures for roadbook.

HTTP tests run against create_app() with services built from a fake tenant
environment and an httpx.MockTransport standing in for Travel Compositor.
No network access is needed.
"""

import asyncio
import json
from collections import defaultdict
from typing import Any

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from roadbook.core.config import Settings
from roadbook.core.constants import AUTH_PATH, AUTH_TOKEN_HEADER, BOOKINGS_PATH
from roadbook.core.container import ServiceContainer, build_services
from roadbook.main import create_app

TENANT_ENV: dict[str, str] = {
    "TRAVEL_COMPOSITOR_USERNAME": "alice.agent",
    "TRAVEL_COMPOSITOR_PASSWORD": "secret-one",
    "TRAVEL_COMPOSITOR_MICROSITE_ID": "site-one",
    "TRAVEL_COMPOSITOR_USERNAME_2": "bob.agent",
    "TRAVEL_COMPOSITOR_PASSWORD_2": "secret-two",
    "TRAVEL_COMPOSITOR_MICROSITE_ID_2": "site-two",
    "TRAVEL_COMPOSITOR_USERNAME_3": "carol.agent",
    "TRAVEL_COMPOSITOR_PASSWORD_3": "secret-three",
    "TRAVEL_COMPOSITOR_MICROSITE_ID_3": "site-three",
}

BOOKING_9263: dict[str, Any] = {
    "id": 9263,
    "bookingReference": "RRP-9263",
    "status": "CONFIRMED",
    "startDate": "2025-06-01",
    "endDate": "2025-06-14",
    "contactPerson": {"name": "Jane", "lastName": "Doe"},
    "pricebreakdown": {"totalPrice": {"microsite": {"amount": 2450.5, "currency": "EUR"}}},
    "hotelservice": [{"locationName": "Lisbon"}, {"locationName": "Porto"}],
}


class FakeCompositor:
    """In-memory Travel Compositor: bookings per microsite, counted logins.

    Tokens look like "token-<microsite>-<n>"; a booking request with another
    microsite's token (or none) gets a 401.
    """

    def __init__(self, bookings: dict[str, list[dict[str, Any]]] | None = None) -> None:
        self.bookings = bookings if bookings is not None else {}
        self.logins: defaultdict[str, int] = defaultdict(int)
        self.rejected_tokens = 0
        self.fail_login: set[str] = set()
        self.delays: dict[str, float] = {}

    async def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path.endswith(AUTH_PATH):
            body = json.loads(request.content)
            microsite = body["micrositeId"]
            if microsite in self.fail_login:
                return httpx.Response(401, json={"message": "Invalid credentials"})
            self.logins[microsite] += 1
            return httpx.Response(
                200,
                json={
                    "token": f"token-{microsite}-{self.logins[microsite]}",
                    "expirationInSeconds": 7200,
                },
            )

        parts = path.split(BOOKINGS_PATH + "/", 1)[1].split("/")
        microsite = parts[0]
        token = request.headers.get(AUTH_TOKEN_HEADER, "")
        if not token.startswith(f"token-{microsite}-"):
            self.rejected_tokens += 1
            return httpx.Response(401, json={"message": "Invalid token"})
        if microsite in self.delays:
            await asyncio.sleep(self.delays[microsite])
        items = self.bookings.get(microsite, [])

        if len(parts) == 2:
            reference = parts[1]
            for booking in items:
                if reference in (str(booking.get("id")), booking.get("bookingReference")):
                    return httpx.Response(200, json=booking)
            return httpx.Response(404, json={"message": "Booking not found"})

        first = int(request.url.params.get("first", "0"))
        limit = int(request.url.params.get("limit", "50"))
        return httpx.Response(
            200,
            json={
                "bookedTrip": items[first:first + limit],
                "pagination": {"totalResults": len(items)},
            },
        )


@pytest.fixture
def settings() -> Settings:
    return Settings(search_timeout_ms=5_000, cache_backend="memory")


@pytest.fixture
def compositor() -> FakeCompositor:
    """Three microsites; only site-two holds RRP-9263."""
    return FakeCompositor(
        {
            "site-one": [{"id": 1001, "bookingReference": "RRP-1001"}],
            "site-two": [BOOKING_9263],
            "site-three": [],
        }
    )


@pytest.fixture
async def services(settings: Settings, compositor: FakeCompositor) -> ServiceContainer:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(compositor.handler))
    container = build_services(settings, http_client, environ=TENANT_ENV)
    yield container
    await http_client.aclose()


@pytest.fixture
async def client(services: ServiceContainer) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI) with fake upstream services."""
    app = create_app()
    app.state.services = services
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
