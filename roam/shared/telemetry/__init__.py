"""Shared telemetry: logging setup, OpenTelemetry config, and tracing helpers."""

from roam.shared.telemetry.logging import setup_logging
from roam.shared.telemetry.telemetry import (
    TelemetryConfig,
    build_exporter,
    get_telemetry,
    set_telemetry,
)
from roam.shared.telemetry.tracing import add_span_attributes, traced

__all__ = [
    "setup_logging",
    "TelemetryConfig",
    "build_exporter",
    "get_telemetry",
    "set_telemetry",
    "traced",
    "add_span_attributes",
]
