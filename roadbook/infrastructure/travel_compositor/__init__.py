"""Travel Compositor integration: credentials, tenant clients and the client pool."""

from roadbook.infrastructure.travel_compositor.client import (
    BookingFilter,
    TravelCompositorClient,
)
from roadbook.infrastructure.travel_compositor.credentials import (
    CredentialRegistry,
    slot_env_names,
)
from roadbook.infrastructure.travel_compositor.pool import TravelCompositorClientPool

__all__ = [
    "BookingFilter",
    "CredentialRegistry",
    "TravelCompositorClient",
    "TravelCompositorClientPool",
    "slot_env_names",
]
