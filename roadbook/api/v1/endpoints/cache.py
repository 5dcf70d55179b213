"""Cache administration API."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response

from roadbook.api.v1.dependencies import get_cache, get_services
from roadbook.core.container import ServiceContainer
from roadbook.infrastructure.cache import CacheProtocol
from roadbook.schemas.cache import CacheStatsResponse

router = APIRouter()


@router.get("/stats", response_model=CacheStatsResponse)
async def cache_stats(
    services: Annotated[ServiceContainer, Depends(get_services)],
) -> CacheStatsResponse:
    """Hits, misses, hit rate and size of the lookup cache."""
    stats = await services.cache.stats()
    return CacheStatsResponse(
        backend=services.settings.cache_backend,
        available=services.cache.is_available(),
        **stats.to_dict(),
    )


@router.delete("", status_code=204)
async def clear_cache(
    cache: Annotated[CacheProtocol, Depends(get_cache)],
) -> Response:
    """Remove every cached lookup and reset the counters."""
    await cache.clear()
    return Response(status_code=204)
