"""Domain entities: tenant credentials, auth sessions and booking records."""

from roadbook.domain.entities.booking import AuthSession, BookingRecord, TenantConfig

__all__ = ["AuthSession", "BookingRecord", "TenantConfig"]
