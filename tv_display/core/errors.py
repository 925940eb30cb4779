"""Error hierarchy shared by the display subsystems.

Centralizing exception types lets the runner distinguish between collaborator
failures (keep the last good data and retry on the next poll) and programming
errors. ``DataNotReady``, ``EmptyCollection`` and ``IndexOutOfRange`` describe
conditions the rotation engine recovers from on its own; they are exposed so
callers that dereference collections directly can use the same vocabulary.
"""
from __future__ import annotations


class CoreError(Exception):
    """Base class for all custom exceptions in the application."""


class DataFeedError(CoreError):
    """Raised for failures while fetching or parsing dashboard data."""


class DataNotReady(CoreError):
    """Raised when no rate snapshot has been received yet."""


class EmptyCollection(CoreError):
    """Raised when a media or promo collection has no active items."""


class IndexOutOfRange(CoreError):
    """Raised when a rotation index points past the end of its collection."""


class RotationError(CoreError):
    """Raised when the rotation engine is driven with invalid input."""


class TelemetryError(CoreError):
    """Raised for telemetry/logging persistence issues."""
