"""Cache key builders. Single place for key format.

Key components must not contain CACHE_KEY_SEP to avoid ambiguous or
colliding keys.
"""

from roadbook.core.constants import CACHE_KEY_SEP, CACHE_PREFIX_BOOKING


def _validate_key_component(value: str, name: str) -> None:
    """Raise ValueError if value is blank or contains the cache key separator."""
    if not value:
        raise ValueError(f"Cache key component {name!r} must not be empty")
    if CACHE_KEY_SEP in value:
        raise ValueError(
            f"Cache key component {name!r} must not contain separator {CACHE_KEY_SEP!r}"
        )


def booking_lookup_key(booking_id: str) -> str:
    """Cache key for a multi-tenant lookup result (booking id is case-insensitive)."""
    normalized = booking_id.strip().upper()
    _validate_key_component(normalized, "booking_id")
    return f"{CACHE_PREFIX_BOOKING}{CACHE_KEY_SEP}{normalized}"
