"""Infrastructure exceptions for the Travel Compositor upstream.

Upstream errors extend RoadbookException so presentation can map them
to HTTP responses consistently. Every non-2xx response keeps its status
code and raw body; network failures are TransportError.
"""

from roadbook.domain.exceptions import RoadbookException

# Upstream bodies can be whole HTML error pages
_BODY_PREVIEW_CHARS = 500


def _preview(body: str) -> str:
    return body[:_BODY_PREVIEW_CHARS]


class CompositorError(RoadbookException):
    """Base exception for Travel Compositor operations."""


class UpstreamError(CompositorError):
    """Upstream answered with an unexpected non-2xx status."""

    def __init__(
        self,
        config_id: int,
        status_code: int,
        body: str,
        path: str,
        error_code: str = "UPSTREAM_ERROR",
        message: str | None = None,
    ) -> None:
        self.config_id = config_id
        self.status_code = status_code
        self.body = body
        super().__init__(
            message or f"Upstream returned {status_code} for {path}",
            error_code,
            {
                "config_id": config_id,
                "status_code": status_code,
                "path": path,
                "body": _preview(body),
            },
        )


class AuthenticationError(UpstreamError):
    """Upstream rejected the tenant's credentials (or returned no token)."""

    def __init__(self, config_id: int, status_code: int, body: str) -> None:
        super().__init__(
            config_id,
            status_code,
            body,
            path="/authentication/authenticate",
            error_code="AUTHENTICATION_ERROR",
            message=f"Authentication failed for tenant config {config_id}: {status_code}",
        )


class NotFoundError(UpstreamError):
    """Direct booking lookup returned non-2xx."""

    def __init__(self, config_id: int, reference: str, status_code: int, body: str) -> None:
        self.reference = reference
        super().__init__(
            config_id,
            status_code,
            body,
            path=f"/booking/getBookings/.../{reference}",
            error_code="UPSTREAM_NOT_FOUND",
            message=f"Booking {reference} not found in tenant config {config_id}",
        )


class TransportError(CompositorError):
    """Network failure talking to the upstream (timeout, DNS, connection)."""

    def __init__(self, config_id: int, reason: str) -> None:
        self.config_id = config_id
        self.reason = reason
        super().__init__(
            f"Transport error for tenant config {config_id}: {reason}",
            "TRANSPORT_ERROR",
            {"config_id": config_id, "reason": reason},
        )
