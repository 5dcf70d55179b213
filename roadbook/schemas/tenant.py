"""Tenant (credential slot) API schemas."""

from pydantic import Field

from roadbook.schemas.booking import CamelModel


class TenantSlotResponse(CamelModel):
    """One credential slot; the username is masked and the password never shown."""

    config_id: int
    configured: bool
    microsite_id: str | None = None
    username: str | None = None
    missing: list[str] = Field(default_factory=list)


class TenantListResponse(CamelModel):
    """Response for GET /tenants."""

    configured: list[int]
    slots: list[TenantSlotResponse]


class ConnectionCheckResponse(CamelModel):
    """Response for POST /tenants/{config_id}/check."""

    config_id: int
    microsite_id: str
    success: bool
    response_time_ms: int
    error: str | None = None


class SessionsClearedResponse(CamelModel):
    """Response for POST /tenants/sessions/clear."""

    cleared: int
