"""Dashboard API client feeding the rotation engine.

The client covers the read endpoints the TV display polls:

* ``GET /api/rates/current`` for the active gold/silver rate snapshot;
* ``GET /api/settings/display`` for the display settings singleton;
* ``GET /api/media?active=true`` for the media items rotated with the rates;
* ``GET /api/promo?active=true`` for the promo slideshow;
* ``GET /api/banner`` for the footer banner.

Write endpoints (rate entry, uploads, media management) belong to the
dashboard and are not wrapped here.
"""
from __future__ import annotations

import logging
import time
from typing import Any, Mapping, Optional, Protocol, Sequence

import httpx

from tv_display.config.models import DashboardApiConfig
from tv_display.core.errors import DataFeedError

from .records import (
    BannerSettings,
    DisplaySettings,
    MediaItem,
    PromoImage,
    RateSnapshot,
    parse_media_list,
    parse_promo_list,
)

LOGGER = logging.getLogger(__name__)


class DisplayDataSource(Protocol):
    """Collaborators consumed by the display runner.

    Each method is polled on its own cadence. Implementations may raise
    :class:`DataFeedError`; the runner then keeps the last value it received.
    """

    def fetch_current_rate(self) -> RateSnapshot | None:
        ...

    def fetch_display_settings(self) -> DisplaySettings:
        ...

    def fetch_active_media(self) -> Sequence[MediaItem]:
        ...

    def fetch_active_promos(self) -> Sequence[PromoImage]:
        ...

    def fetch_banner_settings(self) -> BannerSettings | None:
        ...


class DashboardClient:
    """Synchronous REST client for the shop dashboard.

    Parameters
    ----------
    config:
        :class:`tv_display.config.models.DashboardApiConfig` with the base URL,
        timeout and retry settings.
    session:
        Optional pre-configured :class:`httpx.Client` (e.g. for tests with
        :class:`httpx.MockTransport`).

    Notes
    -----
    Retries use exponential backoff ``backoff_base * 2 ** attempt``. Temporary
    HTTP/network issues are logged as warnings and reported as
    :class:`DataFeedError` after the final attempt.
    """

    def __init__(
        self,
        config: DashboardApiConfig,
        session: httpx.Client | None = None,
    ) -> None:
        self._base_url = config.base_url
        self._client = session or httpx.Client(base_url=self._base_url, timeout=config.timeout_sec)
        self._max_retries = config.max_retries
        self._backoff_base = config.backoff_base_sec

    def close(self) -> None:
        """Close the underlying HTTP client."""

        self._client.close()

    def _get_json(self, path: str, *, params: Optional[Mapping[str, Any]] = None) -> Any:
        """Perform a GET with retry/backoff and return the decoded JSON body."""

        url_path = path if path.startswith("/") else f"/{path}"
        attempt = 0
        last_error: Exception | None = None
        while attempt < self._max_retries:
            try:
                response = self._client.get(url_path, params=dict(params or {}))
                response.raise_for_status()
                return response.json()
            except (httpx.HTTPError, ValueError) as exc:
                last_error = exc
                LOGGER.warning(
                    "Dashboard GET %s failed (attempt %s/%s): %s",
                    url_path,
                    attempt + 1,
                    self._max_retries,
                    exc,
                )
                attempt += 1
                if attempt < self._max_retries:
                    time.sleep(self._backoff_base * (2 ** (attempt - 1)))
        raise DataFeedError(f"GET {url_path} failed after {self._max_retries} attempts: {last_error}") from last_error

    # ------------------------------------------------------------------
    # Display collections
    # ------------------------------------------------------------------
    def fetch_current_rate(self) -> RateSnapshot | None:
        """Return the active rate snapshot, ``None`` if no rates were entered yet."""

        payload = self._get_json("/api/rates/current")
        if not payload:
            return None
        return RateSnapshot.from_dict(_expect_mapping(payload, "rates"))

    def fetch_display_settings(self) -> DisplaySettings:
        """Return the authoritative display settings (defaults when none exist)."""

        payload = self._get_json("/api/settings/display")
        if not payload:
            return DisplaySettings.defaults()
        return DisplaySettings.from_dict(_expect_mapping(payload, "settings"))

    def fetch_active_media(self) -> tuple[MediaItem, ...]:
        """Return active media items ordered by ``order_index``."""

        payload = self._get_json("/api/media", params={"active": "true"})
        return parse_media_list(payload)

    def fetch_active_promos(self) -> tuple[PromoImage, ...]:
        """Return active promo images ordered by ``order_index``."""

        payload = self._get_json("/api/promo", params={"active": "true"})
        return parse_promo_list(payload)

    def fetch_banner_settings(self) -> BannerSettings | None:
        """Return the footer banner settings, ``None`` when no banner exists."""

        payload = self._get_json("/api/banner")
        if not payload:
            return None
        return BannerSettings.from_dict(_expect_mapping(payload, "banner"))


def _expect_mapping(payload: Any, label: str) -> Mapping[str, Any]:
    if not isinstance(payload, Mapping):
        raise DataFeedError(f"Unexpected {label} payload type: {type(payload).__name__}")
    return payload


__all__ = ["DashboardClient", "DisplayDataSource"]
