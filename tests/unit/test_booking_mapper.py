"""Tests for booking id matching and typed field extraction."""

import pytest

from roadbook.application.services.booking_mapper import (
    booking_matches,
    find_booking,
    normalize_booking_id,
    to_booking_record,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("RRP-9263", "9263"),
        (" rrp-9263 ", "9263"),
        ("RRP9263", "9263"),
        (9263, "9263"),
        ("TRIP-12", "TRIP-12"),
    ],
)
def test_normalize_booking_id(value: object, expected: str) -> None:
    assert normalize_booking_id(value) == expected


@pytest.mark.parametrize(
    "field", ["id", "bookingId", "reservationId", "bookingReference", "reference",
              "customBookingReference", "tripId"],
)
def test_booking_matches_any_identifier_field(field: str) -> None:
    assert booking_matches({field: "RRP-9263"}, "rrp-9263")


def test_numeric_id_matches_prefixed_reference() -> None:
    assert booking_matches({"id": 9263}, "RRP-9263")


def test_no_substring_match() -> None:
    assert not booking_matches({"id": 92631, "bookingReference": "RRP-92631"}, "RRP-9263")


def test_blank_target_never_matches() -> None:
    assert not booking_matches({"id": ""}, "  ")


def test_find_booking_returns_first_match() -> None:
    bookings = [{"id": 1}, {"id": 2, "tripId": "X-9"}, {"id": 3, "tripId": "x-9"}]
    assert find_booking(bookings, "x-9") == {"id": 2, "tripId": "X-9"}
    assert find_booking(bookings, "missing") is None


def test_to_booking_record_extracts_typed_fields() -> None:
    raw = {
        "id": 9263,
        "bookingReference": "RRP-9263",
        "customBookingReference": "AGENT-1",
        "status": "CONFIRMED",
        "startDate": "2025-06-01",
        "endDate": "2025-06-14",
        "contactPerson": {"name": "Jane", "lastName": "Doe"},
        "pricebreakdown": {"totalPrice": {"microsite": {"amount": "2450.50", "currency": "EUR"}}},
        "hotelservice": [
            {"locationName": "Lisbon"},
            {"destinationName": "Porto"},
            {"locationName": "Lisbon"},
        ],
    }
    record = to_booking_record(raw)
    assert record.raw is raw
    assert record.id == "9263"
    assert record.reference == "RRP-9263"
    assert record.custom_reference == "AGENT-1"
    assert record.total_price == 2450.5
    assert record.currency == "EUR"
    assert record.client_name == "Jane Doe"
    assert record.destinations == ("Lisbon", "Porto")
    assert record.summary()["destinations"] == ["Lisbon", "Porto"]


def test_to_booking_record_tolerates_unexpected_shapes() -> None:
    record = to_booking_record(
        {"pricebreakdown": {"totalPrice": {"microsite": "n/a"}}, "hotelservice": ["x"], "client": "ACME"}
    )
    assert record.id is None
    assert record.total_price is None
    assert record.client_name == "ACME"
    assert record.destinations == ()


@pytest.mark.parametrize(
    "pricebreakdown",
    [99, "2450.50", None, [], [{"totalPrice": 1}], {"totalPrice": 2450.5}, {"totalPrice": "EUR"},
     {"totalPrice": [1, 2]}, {"totalPrice": {"microsite": [1]}}],
)
def test_irregular_pricebreakdown_falls_back_to_flat_price(pricebreakdown: object) -> None:
    record = to_booking_record(
        {"id": 1, "pricebreakdown": pricebreakdown, "totalPrice": 10, "currency": "USD"}
    )
    assert record.total_price == 10.0
    assert record.currency == "USD"


@pytest.mark.parametrize("total_price", [{"amount": 1}, [1], "n/a", "nan", "inf", True])
def test_unusable_flat_price_is_none(total_price: object) -> None:
    assert to_booking_record({"totalPrice": total_price}).total_price is None


@pytest.mark.parametrize(
    "field, value",
    [
        ("contactPerson", "Jane Doe"),
        ("contactPerson", ["Jane", "Doe"]),
        ("contactPerson", 7),
        ("client", ["ACME"]),
        ("client", {"name": ["ACME"]}),
        ("client", True),
        ("hotelservice", "Lisbon"),
        ("hotelservice", 3),
        ("hotelservice", {"locationName": "Lisbon"}),
        ("hotelservice", [{"locationName": ["Lisbon"]}, None, "Porto"]),
        ("destination", ["Lisbon"]),
    ],
)
def test_irregular_nested_shapes_yield_empty_fields(field: str, value: object) -> None:
    record = to_booking_record({"id": 5, field: value})
    assert record.id == "5"
    assert record.client_name is None
    assert record.destinations == ()
    assert record.summary()["destinations"] == []


def test_client_name_from_nested_client_object() -> None:
    assert to_booking_record({"client": {"name": "ACME"}}).client_name == "ACME"


def test_non_dict_listing_entries_never_match() -> None:
    assert not booking_matches(["RRP-1"], "RRP-1")  # type: ignore[arg-type]
    assert find_booking(["RRP-1", {"id": 1}], "RRP-1") == {"id": 1}  # type: ignore[list-item]
