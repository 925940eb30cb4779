"""Top-level package for the jewellery shop TV rate display.

The package exposes the subsystems (config, core, data_feed, rotation,
telemetry) that together drive the public display: rates fetched from the
dashboard API are rotated with promotional media by the rotation engine and
rendered by an external presentation layer.
"""

__all__: list[str] = []
