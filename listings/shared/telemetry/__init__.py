"""Logging and tracing setup."""

from listings.shared.telemetry.logging import RequestIdFilter, setup_logging
from listings.shared.telemetry.telemetry import (
    TelemetryConfig,
    get_telemetry,
    get_tracer,
    set_telemetry,
)

__all__ = [
    "RequestIdFilter",
    "TelemetryConfig",
    "get_telemetry",
    "get_tracer",
    "set_telemetry",
    "setup_logging",
]
