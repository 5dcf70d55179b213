"""Domain layer: entities and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from roadbook.domain.entities import AuthSession, BookingRecord, TenantConfig
from roadbook.domain.exceptions import (
    BookingNotFoundException,
    ConfigurationError,
    NoTenantsConfiguredError,
    RoadbookException,
    ValidationException,
)

__all__ = [
    "AuthSession",
    "BookingNotFoundException",
    "BookingRecord",
    "ConfigurationError",
    "NoTenantsConfiguredError",
    "RoadbookException",
    "TenantConfig",
    "ValidationException",
]
