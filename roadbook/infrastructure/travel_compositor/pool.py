"""Process-wide pool of tenant clients (one per configured slot)."""

from __future__ import annotations

import httpx

from roadbook.infrastructure.travel_compositor.client import TravelCompositorClient
from roadbook.infrastructure.travel_compositor.credentials import CredentialRegistry
from roadbook.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class TravelCompositorClientPool:
    """Creates tenant clients lazily and keeps them for the pool's lifetime.

    Keeping one client per tenant means concurrent searches share its
    AuthSession (and its login lock) instead of logging in per request.
    """

    def __init__(
        self,
        registry: CredentialRegistry,
        http_client: httpx.AsyncClient,
        base_url: str,
        *,
        token_ttl_seconds: int = 7200,
        expiry_skew_seconds: int = 60,
    ) -> None:
        self._registry = registry
        self._http = http_client
        self._base_url = base_url
        self._token_ttl_seconds = token_ttl_seconds
        self._expiry_skew_seconds = expiry_skew_seconds
        self._clients: dict[int, TravelCompositorClient] = {}

    def get(self, config_id: int) -> TravelCompositorClient:
        """Return the client for a slot, creating it on first use.

        Raises:
            ConfigurationError: If the slot is not configured.
        """
        client = self._clients.get(config_id)
        if client is None:
            client = TravelCompositorClient(
                self._registry.get_config(config_id),
                self._http,
                self._base_url,
                token_ttl_seconds=self._token_ttl_seconds,
                expiry_skew_seconds=self._expiry_skew_seconds,
            )
            self._clients[config_id] = client
        return client

    def clear_sessions(self) -> int:
        """Drop every cached login; returns how many sessions were dropped."""
        cleared = 0
        for client in self._clients.values():
            if client.session is not None:
                client.invalidate_session()
                cleared += 1
        logger.info("Cleared %d tenant sessions", cleared)
        return cleared
