"""Booking lookup API tests (camelCase contract, caching, error mapping)."""

from httpx import AsyncClient


async def test_lookup_finds_booking_in_second_tenant(client: AsyncClient) -> None:
    response = await client.post("/api/v1/bookings/lookup", json={"bookingId": "RRP-9263"})
    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["foundInMicrosite"] == "2"
    assert data["cached"] is False
    assert data["booking"]["bookingReference"] == "RRP-9263"
    assert data["summary"]["clientName"] == "Jane Doe"
    assert data["summary"]["totalPrice"] == 2450.5
    assert data["summary"]["destinations"] == ["Lisbon", "Porto"]
    assert [a["configId"] for a in data["attempts"]] == [1, 2, 3]
    assert data["attempts"][0]["micrositeId"] == "site-one"
    assert data["attempts"][1]["success"] is True
    assert isinstance(data["totalTimeMs"], int)


async def test_second_lookup_is_served_from_cache(client: AsyncClient) -> None:
    await client.post("/api/v1/bookings/lookup", json={"bookingId": "RRP-9263"})
    response = await client.post("/api/v1/bookings/lookup", json={"bookingId": "rrp-9263"})
    assert response.status_code == 200
    assert response.json()["cached"] is True

    stats = (await client.get("/api/v1/cache/stats")).json()
    assert stats["hits"] == 1
    assert stats["size"] == 1


async def test_lookup_can_bypass_cache(client: AsyncClient) -> None:
    await client.post("/api/v1/bookings/lookup", json={"bookingId": "RRP-9263"})
    response = await client.post(
        "/api/v1/bookings/lookup",
        json={"bookingId": "RRP-9263", "useCache": False, "timeoutMs": 2000},
    )
    assert response.json()["cached"] is False


async def test_lookup_not_found_is_404_with_attempts(client: AsyncClient) -> None:
    response = await client.post("/api/v1/bookings/lookup", json={"bookingId": "RRP-0000"})
    assert response.status_code == 404
    data = response.json()
    assert data["success"] is False
    assert data["booking"] is None
    assert data["foundInMicrosite"] is None
    assert len(data["attempts"]) == 3
    assert all(a["method"] == "listing" for a in data["attempts"])


async def test_lookup_requires_booking_id(client: AsyncClient) -> None:
    response = await client.post("/api/v1/bookings/lookup", json={})
    assert response.status_code == 422
    assert response.json()["error"] == "VALIDATION_ERROR"


async def test_lookup_rejects_blank_booking_id(client: AsyncClient) -> None:
    response = await client.post("/api/v1/bookings/lookup", json={"bookingId": "   "})
    assert response.status_code == 400
    assert response.json()["error"] == "VALIDATION_ERROR"


async def test_lookup_reports_tenant_login_failure(client: AsyncClient, compositor) -> None:
    compositor.fail_login.add("site-one")
    response = await client.post("/api/v1/bookings/lookup", json={"bookingId": "RRP-9263"})
    assert response.status_code == 200
    attempt = response.json()["attempts"][0]
    assert attempt["success"] is False
    assert "Authentication failed" in attempt["error"]


async def test_get_booking_in_one_tenant(client: AsyncClient) -> None:
    response = await client.get("/api/v1/bookings/RRP-9263", params={"configId": 2})
    assert response.status_code == 200
    data = response.json()
    assert data["foundInMicrosite"] == "2"
    assert len(data["attempts"]) == 1


async def test_get_booking_missing_in_tenant_is_404(client: AsyncClient) -> None:
    response = await client.get("/api/v1/bookings/RRP-9263", params={"configId": 1})
    assert response.status_code == 404
    body = response.json()
    assert body["error"] == "BOOKING_NOT_FOUND"
    assert body["details"]["booking_id"] == "RRP-9263"


async def test_get_booking_in_unconfigured_tenant_is_400(client: AsyncClient) -> None:
    response = await client.get("/api/v1/bookings/RRP-9263", params={"configId": 4})
    assert response.status_code == 400
    assert response.json()["error"] == "CONFIGURATION_ERROR"


async def test_lookup_with_flat_price_breakdown_returns_summary(
    client: AsyncClient, compositor
) -> None:
    compositor.bookings["site-one"].append(
        {"id": 7777, "bookingReference": "RRP-7777", "pricebreakdown": {"totalPrice": 99}}
    )
    for _ in range(2):
        response = await client.post("/api/v1/bookings/lookup", json={"bookingId": "RRP-7777"})
        assert response.status_code == 200
        data = response.json()
        assert data["foundInMicrosite"] == "1"
        assert data["summary"]["totalPrice"] is None
        assert data["summary"]["clientName"] is None
    assert data["cached"] is True
