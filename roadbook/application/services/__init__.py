"""Application services."""

from roadbook.application.services.booking_mapper import (
    booking_matches,
    find_booking,
    normalize_booking_id,
    to_booking_record,
)
from roadbook.application.services.booking_resolver import MultiTenantBookingResolver

__all__ = [
    "MultiTenantBookingResolver",
    "booking_matches",
    "find_booking",
    "normalize_booking_id",
    "to_booking_record",
]
