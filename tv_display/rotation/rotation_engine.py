"""Rotation engine deciding what the TV display shows and for how long.

``DisplayRotationEngine`` owns three logical timers:

* the rates/media cycle, alternating the rate board with one media item at a
  time (each item dwells for its own ``duration_seconds``);
* the promo slideshow, advancing the promo image inside the rate board;
* the clock tick refreshing the header time once per second.

All timers are driven by :meth:`DisplayRotationEngine.advance`, which consumes
elapsed seconds in event order so the engine is fully deterministic. The
production runner feeds it wall-clock deltas; tests feed it exact numbers.
Collections are replaced wholesale by the ``update_*`` methods whenever a poll
returns fresh data; an in-flight dwell keeps its elapsed time across polls.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Sequence, Tuple, TypeVar

from tv_display.core.enums import DisplayMode
from tv_display.core.errors import DataNotReady, EmptyCollection, IndexOutOfRange, RotationError
from tv_display.core.time_utils import now_utc
from tv_display.data_feed.records import BannerSettings, DisplaySettings, MediaItem, PromoImage, RateSnapshot

from .models import Directive, MediaDirective, NotReadyDirective, RatesDirective, RotationState
from .transitions import transition_profile

LOGGER = logging.getLogger(__name__)

_EPSILON = 1e-9
T = TypeVar("T")


def select_item(items: Sequence[T], index: int) -> T:
    """Return ``items[index]`` or raise the matching rotation error."""

    if not items:
        raise EmptyCollection("collection has no active items")
    if index < 0 or index >= len(items):
        raise IndexOutOfRange(f"index {index} outside collection of {len(items)}")
    return items[index]


class DisplayRotationEngine:
    """Single-threaded state machine behind the public display."""

    def __init__(
        self,
        *,
        clock: Callable[[], datetime] | None = None,
        clock_tick_sec: float = 1.0,
    ) -> None:
        if clock_tick_sec <= 0:
            raise RotationError("clock_tick_sec must be positive")
        self._clock = clock or now_utc
        self._clock_tick_sec = clock_tick_sec
        self._rate_snapshot: RateSnapshot | None = None
        self._settings = DisplaySettings.defaults()
        self._banner: BannerSettings | None = None
        self._media: Tuple[MediaItem, ...] = tuple()
        self._promos: Tuple[PromoImage, ...] = tuple()
        self._showing_rates = True
        self._media_index = 0
        self._promo_index = 0
        self._phase_elapsed = 0.0
        self._promo_elapsed = 0.0
        self._clock_elapsed = 0.0
        self._current_time = self._clock()
        self._transitions = 0

    # ------------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------------
    def update_rate_snapshot(self, snapshot: RateSnapshot | None) -> None:
        if snapshot is None and self._rate_snapshot is not None:
            LOGGER.info("Rate snapshot withdrawn; display not ready")
        self._rate_snapshot = snapshot

    def update_settings(self, settings: DisplaySettings | None) -> None:
        self._settings = settings or DisplaySettings.defaults()
        self._sync_media_cycle()

    def update_media(self, items: Sequence[MediaItem]) -> None:
        self._media = tuple(items)
        if self._media_index >= len(self._media):
            self._media_index = 0
        self._sync_media_cycle()

    def update_promos(self, items: Sequence[PromoImage]) -> None:
        self._promos = tuple(items)
        if self._promo_index >= len(self._promos):
            self._promo_index = 0
        if len(self._promos) <= 1:
            self._promo_elapsed = 0.0

    def update_banner(self, banner: BannerSettings | None) -> None:
        self._banner = banner

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------
    @property
    def showing_rates(self) -> bool:
        return self._showing_rates

    @property
    def current_media_index(self) -> int:
        return self._media_index

    @property
    def current_promo_index(self) -> int:
        return self._promo_index

    @property
    def current_time(self) -> datetime:
        return self._current_time

    @property
    def transitions(self) -> int:
        """Number of rates/media switches performed so far."""

        return self._transitions

    @property
    def mode(self) -> DisplayMode:
        if self._rate_snapshot is None:
            return DisplayMode.NOT_READY
        if self._showing_rates:
            return DisplayMode.RATES
        return DisplayMode.MEDIA

    @property
    def state(self) -> RotationState:
        return RotationState(
            mode=self.mode,
            showing_rates=self._showing_rates,
            current_media_index=self._media_index,
            current_promo_index=self._promo_index,
            media_count=len(self._media),
            promo_count=len(self._promos),
            phase_elapsed_sec=self._phase_elapsed,
            promo_elapsed_sec=self._promo_elapsed,
            current_time=self._current_time,
        )

    def directive(self) -> Directive:
        """Return what should be rendered right now."""

        try:
            snapshot = self._require_snapshot()
        except DataNotReady:
            return NotReadyDirective(current_time=self._current_time)

        if not self._showing_rates:
            media = self._current_media()
            if media is not None:
                return MediaDirective(media_item=media)

        promo = self._current_promo()
        return RatesDirective(
            rate_snapshot=snapshot,
            settings=self._settings,
            banner_settings=self._banner,
            current_promo_image=promo,
            promo_transition=transition_profile(promo.transition_effect) if promo else None,
            current_time=self._current_time,
        )

    # ------------------------------------------------------------------
    # Scheduling
    # ------------------------------------------------------------------
    def advance(self, elapsed_seconds: float) -> Directive:
        """Let ``elapsed_seconds`` pass and fire every transition that falls due.

        Transitions inside the window are applied in time order; when the
        promo slideshow and the rates/media cycle fall due at the same instant
        the promo advances first, since it was due while the rates were still
        on screen. Returns the directive in force at the end of the window.
        """

        if elapsed_seconds < 0:
            raise RotationError(f"elapsed_seconds must be >= 0, got {elapsed_seconds}")
        remaining = float(elapsed_seconds)
        self._tick_clock(remaining)

        while True:
            phase_due = self._time_to_phase_end() if self._media_cycle_active() else None
            promo_due = self._time_to_promo_end() if self._promo_cycle_active() else None
            pending = [due for due in (phase_due, promo_due) if due is not None]
            if not pending:
                break
            step = min(pending)
            if step > remaining + _EPSILON:
                if phase_due is not None:
                    self._phase_elapsed += remaining
                if promo_due is not None:
                    self._promo_elapsed += remaining
                break
            if phase_due is not None:
                self._phase_elapsed += step
            if promo_due is not None:
                self._promo_elapsed += step
            remaining = max(0.0, remaining - step)
            if promo_due is not None and promo_due <= step + _EPSILON:
                self._advance_promo()
            if phase_due is not None and phase_due <= step + _EPSILON:
                self._advance_phase()

        return self.directive()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _require_snapshot(self) -> RateSnapshot:
        if self._rate_snapshot is None:
            raise DataNotReady("no rate snapshot received yet")
        return self._rate_snapshot

    def _media_cycle_eligible(self) -> bool:
        return bool(self._settings.show_media) and len(self._media) > 0

    def _media_cycle_active(self) -> bool:
        return self._rate_snapshot is not None and self._media_cycle_eligible()

    def _promo_cycle_active(self) -> bool:
        return self._rate_snapshot is not None and self._showing_rates and len(self._promos) > 1

    def _sync_media_cycle(self) -> None:
        if self._media_cycle_eligible():
            return
        if not self._showing_rates:
            LOGGER.info("Media rotation disabled or empty; returning to rates")
        self._showing_rates = True
        self._phase_elapsed = 0.0

    def _time_to_phase_end(self) -> float:
        if self._showing_rates:
            dwell = self._settings.rates_dwell_seconds()
        else:
            media = self._current_media()
            dwell = media.dwell_seconds() if media else 0.0
        return max(0.0, dwell - self._phase_elapsed)

    def _time_to_promo_end(self) -> float:
        promo = self._current_promo()
        dwell = promo.dwell_seconds() if promo else 0.0
        return max(0.0, dwell - self._promo_elapsed)

    def _advance_phase(self) -> None:
        self._phase_elapsed = 0.0
        self._transitions += 1
        if self._showing_rates:
            self._current_media()  # snaps a stale index before it is shown
            self._showing_rates = False
            LOGGER.debug("Rates -> media", extra={"media_index": self._media_index})
            return
        self._media_index = (self._media_index + 1) % len(self._media)
        self._showing_rates = True
        LOGGER.debug("Media -> rates", extra={"next_media_index": self._media_index})

    def _advance_promo(self) -> None:
        self._promo_elapsed = 0.0
        self._promo_index = (self._promo_index + 1) % len(self._promos)

    def _current_media(self) -> MediaItem | None:
        try:
            return select_item(self._media, self._media_index)
        except EmptyCollection:
            return None
        except IndexOutOfRange:
            LOGGER.debug("Media index %s out of range; resetting", self._media_index)
            self._media_index = 0
            return self._media[0]

    def _current_promo(self) -> PromoImage | None:
        try:
            return select_item(self._promos, self._promo_index)
        except EmptyCollection:
            return None
        except IndexOutOfRange:
            LOGGER.debug("Promo index %s out of range; resetting", self._promo_index)
            self._promo_index = 0
            return self._promos[0]

    def _tick_clock(self, elapsed: float) -> None:
        self._clock_elapsed += elapsed
        if self._clock_elapsed + _EPSILON >= self._clock_tick_sec:
            ticks = int((self._clock_elapsed + _EPSILON) // self._clock_tick_sec)
            self._clock_elapsed = max(0.0, self._clock_elapsed - ticks * self._clock_tick_sec)
            self._current_time = self._clock()


__all__ = ["DisplayRotationEngine", "select_item"]
