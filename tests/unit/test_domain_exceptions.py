"""Tests for domain and upstream exceptions (error_code, message, details)."""

from roadbook.domain.exceptions import (
    BookingNotFoundException,
    ConfigurationError,
    NoTenantsConfiguredError,
    RoadbookException,
    ValidationException,
)
from roadbook.infrastructure.exceptions import (
    AuthenticationError,
    CompositorError,
    NotFoundError,
    TransportError,
    UpstreamError,
)


def test_roadbook_exception_default_error_code() -> None:
    """Base RoadbookException uses class name as error_code when not provided."""
    exc = RoadbookException("Something failed")
    assert exc.error_code == "RoadbookException"
    assert exc.details == {}
    assert exc.to_dict() == {
        "error": "RoadbookException",
        "message": "Something failed",
        "details": {},
    }


def test_validation_exception() -> None:
    exc = ValidationException("Invalid", field="booking_id")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details == {"field": "booking_id"}


def test_configuration_error_lists_missing_variables() -> None:
    exc = ConfigurationError(2, ["TRAVEL_COMPOSITOR_PASSWORD_2"])
    assert exc.error_code == "CONFIGURATION_ERROR"
    assert exc.message == "Tenant config 2 is incomplete"
    assert exc.details == {"config_id": 2, "missing": ["TRAVEL_COMPOSITOR_PASSWORD_2"]}


def test_no_tenants_configured() -> None:
    assert NoTenantsConfiguredError().error_code == "NO_TENANTS_CONFIGURED"


def test_booking_not_found() -> None:
    exc = BookingNotFoundException("RRP-1", attempts=3)
    assert exc.error_code == "BOOKING_NOT_FOUND"
    assert exc.details == {"booking_id": "RRP-1", "attempts": 3}


def test_upstream_error_keeps_status_and_body_preview() -> None:
    exc = UpstreamError(1, 500, "x" * 2000, "/booking/getBookings/site")
    assert isinstance(exc, CompositorError)
    assert exc.status_code == 500
    assert len(exc.body) == 2000
    assert len(exc.details["body"]) == 500
    assert exc.details["path"] == "/booking/getBookings/site"


def test_upstream_subclasses_have_own_codes() -> None:
    assert AuthenticationError(1, 401, "no").error_code == "AUTHENTICATION_ERROR"
    not_found = NotFoundError(1, "RRP-1", 404, "")
    assert not_found.error_code == "UPSTREAM_NOT_FOUND"
    assert not_found.reference == "RRP-1"
    transport = TransportError(3, "timeout")
    assert transport.error_code == "TRANSPORT_ERROR"
    assert transport.details == {"config_id": 3, "reason": "timeout"}
