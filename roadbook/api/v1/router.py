"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from roadbook.api.v1.dependencies.
"""

from fastapi import APIRouter

from roadbook.api.v1.endpoints import bookings, cache, health, tenants

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(bookings.router, prefix="/bookings", tags=["bookings"])
api_router.include_router(tenants.router, prefix="/tenants", tags=["tenants"])
api_router.include_router(cache.router, prefix="/cache", tags=["cache"])
