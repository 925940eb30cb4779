"""Datamodels describing rotation state and rendering directives.

The rotation engine publishes exactly one directive at a time. A directive is
pure data: :class:`RatesDirective` when the rate board is up (with the current
promo image embedded), :class:`MediaDirective` while a media item fills the
screen, and :class:`NotReadyDirective` until the first rate snapshot arrives.
:class:`RotationState` is the inspection/telemetry view of the engine's
transient counters.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Union

from tv_display.core.enums import DisplayMode
from tv_display.core.time_utils import format_clock
from tv_display.data_feed.records import BannerSettings, DisplaySettings, MediaItem, PromoImage, RateSnapshot

from .transitions import TransitionProfile


@dataclass(frozen=True, slots=True)
class NotReadyDirective:
    """Show a loading screen; no rate snapshot has been received yet."""

    current_time: datetime
    mode: DisplayMode = DisplayMode.NOT_READY

    def to_dict(self) -> Dict[str, Any]:
        return {"mode": self.mode.value, "current_time": self.current_time.isoformat()}


@dataclass(frozen=True, slots=True)
class RatesDirective:
    """Render the rate board, the promo slideshow and the footer banner."""

    rate_snapshot: RateSnapshot
    settings: DisplaySettings
    banner_settings: BannerSettings | None
    current_promo_image: PromoImage | None
    promo_transition: TransitionProfile | None
    current_time: datetime
    mode: DisplayMode = DisplayMode.RATES

    @property
    def clock_lines(self) -> tuple[str, str]:
        return format_clock(self.current_time)

    def to_dict(self) -> Dict[str, Any]:
        date_line, time_line = self.clock_lines
        return {
            "mode": self.mode.value,
            "rate_snapshot": self.rate_snapshot.as_dict(),
            "settings": self.settings.as_dict(),
            "banner_settings": self.banner_settings.as_dict() if self.banner_settings else None,
            "current_promo_image": self.current_promo_image.as_dict() if self.current_promo_image else None,
            "promo_transition": self.promo_transition.to_dict() if self.promo_transition else None,
            "clock": {"date": date_line, "time": time_line},
        }


@dataclass(frozen=True, slots=True)
class MediaDirective:
    """Render one media item full screen."""

    media_item: MediaItem
    mode: DisplayMode = DisplayMode.MEDIA

    def to_dict(self) -> Dict[str, Any]:
        return {"mode": self.mode.value, "media_item": self.media_item.as_dict()}


Directive = Union[NotReadyDirective, RatesDirective, MediaDirective]


@dataclass(frozen=True, slots=True)
class RotationState:
    """Snapshot of the engine's counters for telemetry and inspection.

    ``current_media_index`` is the item shown while in media mode and the
    next item to show while the rates are up.
    """

    mode: DisplayMode
    showing_rates: bool
    current_media_index: int
    current_promo_index: int
    media_count: int
    promo_count: int
    phase_elapsed_sec: float
    promo_elapsed_sec: float
    current_time: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mode": self.mode.value,
            "showing_rates": self.showing_rates,
            "current_media_index": self.current_media_index,
            "current_promo_index": self.current_promo_index,
            "media_count": self.media_count,
            "promo_count": self.promo_count,
            "phase_elapsed_sec": round(self.phase_elapsed_sec, 3),
            "promo_elapsed_sec": round(self.promo_elapsed_sec, 3),
            "current_time": self.current_time.isoformat(),
        }


__all__ = [
    "Directive",
    "MediaDirective",
    "NotReadyDirective",
    "RatesDirective",
    "RotationState",
]
