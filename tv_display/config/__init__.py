"""Configuration loading and validation package."""

from .loader import load_app_config, resolve_config_path
from .models import AppConfig, DashboardApiConfig, DisplayConfig, PollingConfig, TelemetryConfig

__all__ = [
    "AppConfig",
    "DashboardApiConfig",
    "DisplayConfig",
    "PollingConfig",
    "TelemetryConfig",
    "load_app_config",
    "resolve_config_path",
]
