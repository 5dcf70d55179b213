"""Health check endpoints, used for liveness and readiness probes."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from roadbook.api.v1.dependencies import get_registry
from roadbook.core.config import get_settings
from roadbook.infrastructure.travel_compositor import CredentialRegistry
from roadbook.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse(version=get_settings().app_version)


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "No tenant configured", "model": ReadinessErrorResponse}},
)
def readiness_check(
    registry: Annotated[CredentialRegistry, Depends(get_registry)],
) -> ReadinessResponse | JSONResponse:
    """Return 200 when at least one tenant slot is configured, else 503."""
    configured = registry.list_available_configs()
    if configured:
        return ReadinessResponse(tenants=len(configured))
    return JSONResponse(
        status_code=503,
        content=ReadinessErrorResponse(
            message="No Travel Compositor credentials are configured",
        ).model_dump(),
    )
