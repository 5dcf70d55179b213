"""Application configuration (settings and environment).

Single source of truth for service configuration. Uses pydantic-settings
with .env support. Tenant credentials are NOT settings: they are read from
the raw environment by the credential registry (numbered slots).
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings have defaults; validate_settings rejects inconsistent
    combinations (unknown cache backend, non-positive timeouts).
    """

    # App
    app_name: str = "roadbook"
    app_version: str = "1.0.0"
    debug: bool = False

    # Travel Compositor upstream
    compositor_base_url: str = "https://online.travelcompositor.com/resources"
    compositor_max_slots: int = 4
    http_timeout_seconds: float = 30.0
    # Fallback used when expirationInSeconds is absent from the login response
    token_default_ttl_seconds: int = 7200
    token_expiry_skew_seconds: int = 60

    # Multi-tenant search
    search_timeout_ms: int = 30_000
    listing_page_size: int = 50
    listing_max_pages: int = 20
    listing_years_back: int = 1
    listing_years_forward: int = 1

    # Response cache: "memory" (in-process) or "redis"
    cache_backend: str = "memory"
    cache_ttl_ms: int = 5 * 60 * 1000
    cache_max_entries: int | None = None  # None = unbounded
    cache_sweep_interval_seconds: int | None = None  # None = lazy eviction only

    # Redis (cache_backend == "redis")
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: SecretStr | None = None

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:8080"

    # Rate limit for POST /bookings/lookup (slowapi limit string)
    lookup_rate_limit: str = "60/minute"

    # OpenTelemetry
    telemetry_enabled: bool = False
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_settings(self) -> "Settings":
        """Validate cache backend, upstream URL and numeric limits."""
        if self.cache_backend not in ("memory", "redis"):
            raise ValueError(
                f"cache_backend must be 'memory' or 'redis', got: {self.cache_backend!r}"
            )
        if not self.compositor_base_url:
            raise ValueError("COMPOSITOR_BASE_URL must not be empty.")
        if self.compositor_max_slots < 1:
            raise ValueError("compositor_max_slots must be at least 1")
        if self.search_timeout_ms <= 0:
            raise ValueError("search_timeout_ms must be positive")
        if self.cache_ttl_ms <= 0:
            raise ValueError("cache_ttl_ms must be positive")
        if self.cache_max_entries is not None and self.cache_max_entries < 1:
            raise ValueError("cache_max_entries must be at least 1 when set")
        if self.listing_page_size < 1 or self.listing_max_pages < 1:
            raise ValueError("listing_page_size and listing_max_pages must be at least 1")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
