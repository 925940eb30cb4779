"""Telemetry and logging subsystem package."""
from .events import TelemetryEvent
from .logging_setup import configure_logging
from .storage import TelemetryStorage, default_storage

__all__ = [
    "TelemetryEvent",
    "configure_logging",
    "TelemetryStorage",
    "default_storage",
]
