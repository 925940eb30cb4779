"""Dashboard data ingestion package.

Modules placed here talk to the dashboard HTTP API and transform its JSON rows
into the read-only records consumed by the rotation engine.
"""
from .dashboard_client import DashboardClient, DisplayDataSource
from .records import BannerSettings, DisplaySettings, MediaItem, PromoImage, RateSnapshot

__all__ = [
    "BannerSettings",
    "DashboardClient",
    "DisplayDataSource",
    "DisplaySettings",
    "MediaItem",
    "PromoImage",
    "RateSnapshot",
]
