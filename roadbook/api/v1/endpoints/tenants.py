"""Tenant API: configured credential slots, login checks and session reset."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path

from roadbook.api.v1.dependencies import get_client_pool, get_registry
from roadbook.infrastructure.travel_compositor import (
    CredentialRegistry,
    TravelCompositorClientPool,
)
from roadbook.schemas.tenant import (
    ConnectionCheckResponse,
    SessionsClearedResponse,
    TenantListResponse,
    TenantSlotResponse,
)

router = APIRouter()


@router.get("", response_model=TenantListResponse)
def list_tenants(
    registry: Annotated[CredentialRegistry, Depends(get_registry)],
) -> TenantListResponse:
    """List every credential slot; secrets are never returned."""
    return TenantListResponse(
        configured=registry.list_available_configs(),
        slots=[TenantSlotResponse(**slot) for slot in registry.describe()],
    )


@router.post("/sessions/clear", response_model=SessionsClearedResponse)
def clear_sessions(
    pool: Annotated[TravelCompositorClientPool, Depends(get_client_pool)],
) -> SessionsClearedResponse:
    """Drop every cached upstream login; the next request logs in again."""
    return SessionsClearedResponse(cleared=pool.clear_sessions())


@router.post("/{config_id}/check", response_model=ConnectionCheckResponse)
async def check_tenant(
    config_id: Annotated[int, Path(ge=1)],
    pool: Annotated[TravelCompositorClientPool, Depends(get_client_pool)],
) -> ConnectionCheckResponse:
    """Log in to one tenant and report whether it worked and how long it took."""
    client = pool.get(config_id)
    return ConnectionCheckResponse(**await client.check_connection())
