"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic. Used by main.py; no business
logic here, only wiring of infrastructure (HTTP client, services, cache,
telemetry).
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import FastAPI

from roadbook.core.config import get_settings
from roadbook.core.container import build_services, run_cache_sweep
from roadbook.infrastructure.cache import MemoryCache

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: telemetry (if enabled), shared HTTP client, services,
    cache connect (Redis) or sweep task (memory). Shutdown runs in reverse.
    """
    settings = get_settings()

    # ---- Startup ----
    if settings.telemetry_enabled:
        from roadbook.shared.telemetry.telemetry import TelemetryConfig, set_telemetry

        telemetry = TelemetryConfig(
            service_name=settings.app_name,
            service_version=settings.app_version,
            enabled=True,
            environment=settings.telemetry_environment,
        )
        telemetry.setup_telemetry(
            exporter_type=settings.telemetry_exporter,
            otlp_endpoint=settings.telemetry_otlp_endpoint,
            sample_rate=settings.telemetry_sample_rate,
        )
        set_telemetry(telemetry)
        telemetry.instrument_fastapi(app)
        telemetry.instrument_httpx()
        if settings.cache_backend == "redis":
            telemetry.instrument_redis()
        logger.info("Telemetry initialized")

    # Shared HTTP client for every tenant (connection reuse)
    http_client = httpx.AsyncClient(timeout=settings.http_timeout_seconds)
    services = build_services(settings, http_client)
    app.state.services = services

    connect = getattr(services.cache, "connect", None)
    if connect is not None:
        await connect()

    sweep_task = None
    if isinstance(services.cache, MemoryCache) and settings.cache_sweep_interval_seconds:
        sweep_task = asyncio.create_task(
            run_cache_sweep(services.cache, settings.cache_sweep_interval_seconds)
        )
        logger.info(
            "Cache sweep every %ss", settings.cache_sweep_interval_seconds
        )

    yield

    # ---- Shutdown ----
    if sweep_task is not None:
        sweep_task.cancel()
        try:
            await sweep_task
        except asyncio.CancelledError:
            pass
        logger.info("Cache sweep task stopped")

    disconnect = getattr(services.cache, "disconnect", None)
    if disconnect is not None:
        await disconnect()
        logger.info("Cache disconnected")

    await http_client.aclose()
    logger.info("Upstream HTTP client closed")

    from roadbook.shared.telemetry.telemetry import get_telemetry, set_telemetry

    telemetry_instance = get_telemetry()
    if telemetry_instance is not None:
        telemetry_instance.shutdown()
        set_telemetry(None)
        logger.info("Telemetry shutdown complete")
