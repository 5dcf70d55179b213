"""Smoke tests for health and app wiring."""

import httpx
from httpx import ASGITransport, AsyncClient

from roadbook.core.container import build_services
from roadbook.core.lifespan import create_lifespan
from roadbook.infrastructure.cache import MemoryCache
from roadbook.main import create_app


async def test_health_returns_ok(client: AsyncClient) -> None:
    """GET /api/v1/health returns 200 and status ok."""
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


async def test_ready_counts_configured_tenants(client: AsyncClient) -> None:
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "tenants": 3}


async def test_ready_is_503_without_tenants(settings) -> None:
    app = create_app()
    async with httpx.AsyncClient() as http:
        app.state.services = build_services(settings, http, environ={})
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            response = await ac.get("/api/v1/health/ready")
            lookup = await ac.post("/api/v1/bookings/lookup", json={"bookingId": "RRP-1"})
    assert response.status_code == 503
    assert response.json()["status"] == "not_ready"
    assert lookup.status_code == 503
    assert lookup.json()["error"] == "NO_TENANTS_CONFIGURED"


async def test_lifespan_builds_services_and_closes_http_client() -> None:
    app = create_app()
    async with create_lifespan(app):
        services = app.state.services
        assert isinstance(services.cache, MemoryCache)
        assert services.http_client.is_closed is False
    assert services.http_client.is_closed is True
