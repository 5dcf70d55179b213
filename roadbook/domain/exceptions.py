"""Domain exceptions for the Roadbook service.

Defines domain-level exceptions independent of infrastructure concerns.
Presentation layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class RoadbookException(Exception):
    """Base exception for all Roadbook application errors.

    All custom exceptions inherit from this class so handlers can map them
    to JSON responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. config_id, status_code).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON error body used by the exception handlers."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(RoadbookException):
    """Raised when input validation fails (e.g. blank booking id)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class ConfigurationError(RoadbookException):
    """Raised when a credential slot is unknown or incomplete."""

    def __init__(self, config_id: int, missing: list[str] | None = None) -> None:
        """Initialize with the slot and the environment variables it lacks.

        Args:
            config_id: Credential slot number (1..N).
            missing: Names of the missing environment variables, if any.
        """
        missing = missing or []
        if missing:
            message = f"Tenant config {config_id} is incomplete"
        else:
            message = f"Tenant config {config_id} does not exist"
        super().__init__(
            message,
            "CONFIGURATION_ERROR",
            {"config_id": config_id, "missing": missing},
        )


class NoTenantsConfiguredError(RoadbookException):
    """Raised when a search is requested but no tenant slot is complete."""

    def __init__(self) -> None:
        super().__init__(
            "No Travel Compositor credentials are configured",
            "NO_TENANTS_CONFIGURED",
        )


class BookingNotFoundException(RoadbookException):
    """Raised by the API when a lookup finished without a match in any tenant."""

    def __init__(self, booking_id: str, attempts: int) -> None:
        super().__init__(
            f"Booking not found: {booking_id}",
            "BOOKING_NOT_FOUND",
            {"booking_id": booking_id, "attempts": attempts},
        )
