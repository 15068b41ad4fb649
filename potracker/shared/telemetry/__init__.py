"""Shared telemetry: logging setup, OpenTelemetry config, and tracing helpers."""

from potracker.shared.telemetry.logging import setup_logging
from potracker.shared.telemetry.tracing import add_span_attributes, traced

__all__ = [
    "setup_logging",
    "add_span_attributes",
    "traced",
]
