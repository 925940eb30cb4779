"""Typed configuration models for the TV display.

The config subsystem relies on pydantic to validate the YAML file and to
provide strongly-typed objects to the rest of the runtime: where the
dashboard API lives, how often each collection is polled, which timezone the
clock uses and where logs go.
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, PositiveFloat, PositiveInt, field_validator


class DashboardApiConfig(BaseModel):
    """Location of the dashboard HTTP API and client retry knobs."""

    base_url: str = Field("http://localhost:5000", min_length=1)
    timeout_sec: PositiveFloat = 5.0
    max_retries: PositiveInt = 3
    backoff_base_sec: float = Field(0.25, ge=0)

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


class PollingConfig(BaseModel):
    """Refresh cadence of every collection fed into the rotation engine.

    Each source is polled on its own interval, independent of the others.
    ``tick_sec`` is the granularity of the wall-clock loop and therefore of
    the on-screen clock.
    """

    rates_interval_sec: PositiveFloat = 30
    settings_interval_sec: PositiveFloat = 30
    media_interval_sec: PositiveFloat = 30
    promos_interval_sec: PositiveFloat = 30
    banner_interval_sec: PositiveFloat = 30
    tick_sec: PositiveFloat = 1


class DisplayConfig(BaseModel):
    """Settings of the physical display that never come from the API."""

    timezone: str = Field("Asia/Kolkata")


class TelemetryConfig(BaseModel):
    """Logging/telemetry switches."""

    log_level: str = Field("INFO")
    logs_dir: str = Field("data/logs")
    log_backup_days: PositiveInt = 14
    console: bool = True
    record_transitions: bool = True


class AppConfig(BaseModel):
    """Runtime config composed of API, polling, display and telemetry sections."""

    dashboard: DashboardApiConfig = Field(default_factory=DashboardApiConfig)
    polling: PollingConfig = Field(default_factory=PollingConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)
    telemetry: TelemetryConfig = Field(default_factory=TelemetryConfig)

    model_config = ConfigDict(frozen=True)
