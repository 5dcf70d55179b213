"""Presentation-layer dependency injection.

Services are built once by the lifespan (roadbook.core.container) and stored
on app.state.services; routes depend only on these accessors.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from roadbook.application.services.booking_resolver import MultiTenantBookingResolver
from roadbook.application.use_cases.booking_lookup import BookingLookupService
from roadbook.core.container import ServiceContainer
from roadbook.infrastructure.cache import CacheProtocol
from roadbook.infrastructure.travel_compositor import (
    CredentialRegistry,
    TravelCompositorClientPool,
)


def get_services(request: Request) -> ServiceContainer:
    """Return the container created at startup."""
    return request.app.state.services


ServicesDep = Annotated[ServiceContainer, Depends(get_services)]


def get_lookup_service(services: ServicesDep) -> BookingLookupService:
    return services.lookup


def get_resolver(services: ServicesDep) -> MultiTenantBookingResolver:
    return services.resolver


def get_registry(services: ServicesDep) -> CredentialRegistry:
    return services.registry


def get_client_pool(services: ServicesDep) -> TravelCompositorClientPool:
    return services.clients


def get_cache(services: ServicesDep) -> CacheProtocol:
    return services.cache
