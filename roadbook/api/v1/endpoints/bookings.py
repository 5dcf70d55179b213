"""Booking lookup API: thin routes delegating to the lookup service and resolver."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from roadbook.api.v1.dependencies import get_lookup_service, get_resolver
from roadbook.application.services.booking_resolver import MultiTenantBookingResolver
from roadbook.application.use_cases.booking_lookup import BookingLookupService
from roadbook.core.limiter import limit_lookup
from roadbook.domain.exceptions import BookingNotFoundException
from roadbook.schemas.booking import LookupRequest, LookupResponse

router = APIRouter()


@router.post(
    "/lookup",
    response_model=LookupResponse,
    responses={404: {"description": "Not found in any tenant", "model": LookupResponse}},
)
@limit_lookup
async def lookup_booking(
    request: Request,
    body: LookupRequest,
    lookup_svc: Annotated[BookingLookupService, Depends(get_lookup_service)],
):
    """Find which tenant holds a booking and return it with per-tenant diagnostics.

    Not found is a 404 carrying the same body (success=false) so callers
    still see every attempt.
    """
    result = await lookup_svc.lookup(
        body.booking_id, timeout_ms=body.timeout_ms, use_cache=body.use_cache
    )
    response = LookupResponse.from_result(result)
    if not result.found:
        return JSONResponse(status_code=404, content=response.model_dump(by_alias=True))
    return response


@router.get("/{reference}", response_model=LookupResponse)
async def get_booking_in_tenant(
    reference: str,
    resolver: Annotated[MultiTenantBookingResolver, Depends(get_resolver)],
    config_id: Annotated[int, Query(alias="configId", ge=1)] = 1,
):
    """Look a booking up in one tenant only (direct lookup, then listing scan)."""
    result = await resolver.search_tenant(config_id=config_id, booking_id=reference)
    if not result.found:
        raise BookingNotFoundException(reference, attempts=len(result.attempts))
    return LookupResponse.from_result(result)
