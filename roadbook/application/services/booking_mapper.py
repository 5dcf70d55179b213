"""Pure mapping between raw Travel Compositor payloads and typed booking fields.

All guessing about upstream field names happens here: which keys carry a
booking identifier, and where dates, price and client live.
"""

from __future__ import annotations

import math
import re
from collections.abc import Iterable
from typing import Any

from roadbook.core.constants import BOOKING_ID_FIELDS, BOOKING_ID_PREFIX
from roadbook.domain.entities import BookingRecord

_PREFIX_RE = re.compile(rf"^{BOOKING_ID_PREFIX}-?", re.IGNORECASE)


def normalize_booking_id(value: Any) -> str:
    """Uppercase, trimmed identifier with any leading "RRP"/"RRP-" removed.

    Example: " rrp-9263 " -> "9263".
    """
    return _PREFIX_RE.sub("", str(value).strip().upper())


def booking_matches(booking: dict[str, Any], booking_id: str) -> bool:
    """True if any identifier field equals booking_id after normalization."""
    if not isinstance(booking, dict):
        return False
    target = normalize_booking_id(booking_id)
    if not target:
        return False
    for name in BOOKING_ID_FIELDS:
        value = booking.get(name)
        if value is None or value == "":
            continue
        if normalize_booking_id(value) == target:
            return True
    return False


def find_booking(bookings: Iterable[dict[str, Any]], booking_id: str) -> dict[str, Any] | None:
    """Return the first listed booking matching booking_id, or None."""
    for booking in bookings:
        if booking_matches(booking, booking_id):
            return booking
    return None


def _str_or_none(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def _float_or_none(value: Any) -> float | None:
    if isinstance(value, bool) or value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _dig(node: Any, *path: str) -> Any:
    """Follow nested dict keys; None as soon as a level is missing or not a dict."""
    for key in path:
        if not isinstance(node, dict):
            return None
        node = node.get(key)
    return node


def _microsite_price(node: Any) -> tuple[float | None, str | None]:
    """Read pricebreakdown.totalPrice.microsite.{amount,currency} from a node."""
    price = _dig(node, "pricebreakdown", "totalPrice", "microsite")
    if not isinstance(price, dict):
        return None, None
    return _float_or_none(price.get("amount")), _str_or_none(price.get("currency"))


def _client_name(raw: dict[str, Any]) -> str | None:
    contact = raw.get("contactPerson")
    if isinstance(contact, dict):
        parts = [contact.get("name"), contact.get("lastName")]
        name = " ".join(str(p).strip() for p in parts if p).strip()
        if name:
            return name
    client = raw.get("client")
    if isinstance(client, dict):
        client = client.get("name")
    if isinstance(client, (str, int, float)) and not isinstance(client, bool):
        return _str_or_none(client)
    return None


def _destinations(raw: dict[str, Any]) -> tuple[str, ...]:
    names: list[str] = []
    hotels = raw.get("hotelservice")
    if not isinstance(hotels, list):
        hotels = []
    for hotel in hotels:
        if not isinstance(hotel, dict):
            continue
        for key in ("locationName", "destinationName"):
            value = hotel.get(key)
            if isinstance(value, str) and value and value not in names:
                names.append(value)
    destination = raw.get("destination")
    if isinstance(destination, str) and destination and destination not in names:
        names.append(destination)
    return tuple(names)


def to_booking_record(raw: dict[str, Any]) -> BookingRecord:
    """Extract the typed fields from a raw booking payload. Never raises on shape."""
    total_price, currency = _microsite_price(raw)
    if total_price is None:
        total_price = _float_or_none(raw.get("totalPrice"))
    if currency is None:
        currency = _str_or_none(raw.get("currency"))
    return BookingRecord(
        raw=raw,
        id=_str_or_none(raw.get("id")),
        reference=_str_or_none(raw.get("bookingReference") or raw.get("reference")),
        custom_reference=_str_or_none(raw.get("customBookingReference")),
        status=_str_or_none(raw.get("status")),
        start_date=_str_or_none(raw.get("startDate")),
        end_date=_str_or_none(raw.get("endDate")),
        total_price=total_price,
        currency=currency,
        client_name=_client_name(raw),
        destinations=_destinations(raw),
    )
