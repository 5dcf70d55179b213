"""Use cases."""

from roadbook.application.use_cases.booking_lookup import BookingLookupService

__all__ = ["BookingLookupService"]
