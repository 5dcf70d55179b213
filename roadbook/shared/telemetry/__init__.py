"""Shared telemetry: logging setup and tracing helpers.

TelemetryConfig lives in roadbook.shared.telemetry.telemetry and is imported
lazily at startup so the SDK/exporters load only when tracing is enabled.
"""

from roadbook.shared.telemetry.logging import get_logger, setup_logging
from roadbook.shared.telemetry.tracing import add_span_attributes, add_span_event, traced

__all__ = [
    "add_span_attributes",
    "add_span_event",
    "get_logger",
    "setup_logging",
    "traced",
]
