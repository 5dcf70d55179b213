"""Rate limiter instance for SlowAPI.

Shared so both main (app.state.limiter) and route modules can use the same
instance without circular imports. Limits are keyed by client address.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from roadbook.core.config import get_settings

limiter = Limiter(key_func=get_remote_address)


def _lookup_limit() -> str:
    return get_settings().lookup_rate_limit


# Resolved per request so LOOKUP_RATE_LIMIT changes apply after get_settings.cache_clear()
limit_lookup = limiter.limit(_lookup_limit)
