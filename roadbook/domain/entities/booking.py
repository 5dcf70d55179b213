"""Tenant and booking domain entities.

TenantConfig and AuthSession describe one Travel Compositor microsite and
its login state. BookingRecord keeps the upstream payload opaque and exposes
a few typed fields extracted once, at the boundary.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from pydantic import SecretStr

from roadbook.domain.exceptions import ValidationException


@dataclass(frozen=True)
class TenantConfig:
    """Credentials for one microsite slot. Immutable for the process lifetime."""

    config_id: int
    microsite_id: str
    username: str
    password: SecretStr

    def __post_init__(self) -> None:
        if self.config_id < 1:
            raise ValidationException("config_id must be at least 1", field="config_id")
        if not self.microsite_id:
            raise ValidationException("microsite_id is required", field="microsite_id")

    @property
    def masked_username(self) -> str:
        """First three characters of the username followed by ***."""
        return f"{self.username[:3]}***"


@dataclass
class AuthSession:
    """Token obtained from one tenant's login exchange."""

    config_id: int
    token: str
    obtained_at: datetime
    expires_at: datetime | None = None

    def is_valid(self, now: datetime) -> bool:
        """Return True while the token has not reached its expiry."""
        return self.expires_at is None or now < self.expires_at


@dataclass(frozen=True)
class BookingRecord:
    """Upstream booking payload plus the typed fields the service relies on.

    The raw mapping is never validated; all typed fields are optional.
    Build instances with roadbook.application.services.booking_mapper.
    """

    raw: dict[str, Any]
    id: str | None = None
    reference: str | None = None
    custom_reference: str | None = None
    status: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    total_price: float | None = None
    currency: str | None = None
    client_name: str | None = None
    destinations: tuple[str, ...] = field(default_factory=tuple)

    def summary(self) -> dict[str, Any]:
        """Typed fields as a plain dict (no raw payload)."""
        return {
            "id": self.id,
            "reference": self.reference,
            "custom_reference": self.custom_reference,
            "status": self.status,
            "start_date": self.start_date,
            "end_date": self.end_date,
            "total_price": self.total_price,
            "currency": self.currency,
            "client_name": self.client_name,
            "destinations": list(self.destinations),
        }
