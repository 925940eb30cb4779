"""Wall-clock adapter driving the rotation engine in production.

``DisplayRunner`` owns the polling timers (one per collection, each on its own
cadence) and feeds measured elapsed time into
:meth:`DisplayRotationEngine.advance`. Fetches run on a worker pool so a slow
or retrying dashboard never holds up the tick; finished results are handed to
the engine on the tick thread. A failed poll leaves the engine on the last
value it received for that collection. Mode changes and failed polls are
logged and recorded as telemetry events.
"""
from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, List

from tv_display.config.models import PollingConfig
from tv_display.core.enums import DisplayMode
from tv_display.core.errors import DataFeedError, TelemetryError
from tv_display.core.time_utils import now_utc
from tv_display.data_feed.dashboard_client import DisplayDataSource
from tv_display.telemetry.events import TelemetryEvent
from tv_display.telemetry.storage import TelemetryStorage

from .models import Directive, MediaDirective
from .rotation_engine import DisplayRotationEngine

_EPSILON = 1e-9


@dataclass(slots=True)
class _Poller:
    """Recurring fetch of one collection."""

    name: str
    interval_sec: float
    fetch: Callable[[], Any]
    apply: Callable[[Any], None]
    due_in_sec: float = 0.0
    pending: Future | None = None


class DisplayRunner:
    """Poll the data source and advance the engine from wall-clock time."""

    def __init__(
        self,
        engine: DisplayRotationEngine,
        source: DisplayDataSource,
        polling: PollingConfig,
        *,
        telemetry: TelemetryStorage | None = None,
        logger: logging.Logger | None = None,
        monotonic: Callable[[], float] = time.monotonic,
        executor: Executor | None = None,
    ) -> None:
        self._engine = engine
        self._source = source
        self._tick_sec = float(polling.tick_sec)
        self._telemetry = telemetry
        self._logger = logger or logging.getLogger(__name__)
        self._monotonic = monotonic
        self._stop_event = threading.Event()
        self._pollers: List[_Poller] = [
            _Poller("rates", polling.rates_interval_sec, source.fetch_current_rate, engine.update_rate_snapshot),
            _Poller("settings", polling.settings_interval_sec, source.fetch_display_settings, engine.update_settings),
            _Poller("media", polling.media_interval_sec, source.fetch_active_media, engine.update_media),
            _Poller("promos", polling.promos_interval_sec, source.fetch_active_promos, engine.update_promos),
            _Poller("banner", polling.banner_interval_sec, source.fetch_banner_settings, engine.update_banner),
        ]
        # one worker per collection; a hanging fetch never delays the others
        self._executor = executor or ThreadPoolExecutor(
            max_workers=len(self._pollers), thread_name_prefix="display-poll"
        )
        self._last_mode: DisplayMode = engine.mode
        self._failures: dict[str, int] = {}

    @property
    def engine(self) -> DisplayRotationEngine:
        return self._engine

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()

    @property
    def failures(self) -> dict[str, int]:
        """Consecutive failed polls per collection."""

        return dict(self._failures)

    def step(self, elapsed_seconds: float) -> Directive | None:
        """Advance the engine by ``elapsed_seconds`` then handle the polls.

        Polls that fell due are submitted to the worker pool; every fetch that
        has finished by now is applied to the engine. A fetch still in flight
        is not submitted again. Returns the directive in force afterwards, or
        ``None`` once stopped.
        """

        if self.stopped:
            return None
        self._engine.advance(elapsed_seconds)
        self._collect()
        for poller in self._pollers:
            poller.due_in_sec -= elapsed_seconds
            if poller.due_in_sec <= _EPSILON and poller.pending is None:
                poller.pending = self._executor.submit(poller.fetch)
                poller.due_in_sec = poller.interval_sec
        self._collect()
        directive = self._engine.directive()
        self._record_mode_change(directive)
        return directive

    def run(self) -> None:
        """Block until :meth:`stop` is called, ticking every ``tick_sec``."""

        self._logger.info("Display runner started", extra={"tick_sec": self._tick_sec})
        self.step(0.0)
        last = self._monotonic()
        while not self._stop_event.wait(self._tick_sec):
            now = self._monotonic()
            self.step(max(0.0, now - last))
            last = now
        self._logger.info("Display runner stopped")

    def stop(self) -> None:
        """Cancel every timer and wait for in-flight fetches; later :meth:`step` calls do nothing."""

        if self._stop_event.is_set():
            return
        self._stop_event.set()
        self._pollers.clear()
        self._executor.shutdown(wait=True, cancel_futures=True)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _collect(self) -> None:
        for poller in self._pollers:
            future = poller.pending
            if future is None or not future.done():
                continue
            poller.pending = None
            try:
                value = future.result()
            except DataFeedError as exc:
                self._poll_failed(poller, exc)
                continue
            self._failures.pop(poller.name, None)
            poller.apply(value)

    def _poll_failed(self, poller: _Poller, exc: DataFeedError) -> None:
        count = self._failures.get(poller.name, 0) + 1
        self._failures[poller.name] = count
        self._logger.warning(
            "Poll of %s failed; keeping last known data: %s",
            poller.name,
            exc,
            extra={"source": poller.name, "consecutive_failures": count},
        )
        self._record_event(
            "poll_failed",
            {"source": poller.name, "consecutive_failures": count, "error": str(exc)},
        )

    def _record_mode_change(self, directive: Directive) -> None:
        mode = directive.mode
        if mode is self._last_mode:
            return
        payload: dict[str, Any] = {"from": self._last_mode.value, "to": mode.value}
        if isinstance(directive, MediaDirective):
            payload["media_item_id"] = directive.media_item.id
            payload["media_name"] = directive.media_item.name
        self._last_mode = mode
        self._logger.info("Display mode changed", extra=payload)
        self._record_event("display_transition", payload)

    def _record_event(self, event_type: str, payload: dict[str, Any]) -> None:
        if self._telemetry is None:
            return
        event = TelemetryEvent(
            timestamp=now_utc(),
            event_type=event_type,
            payload=payload,
            context=self._engine.state.to_dict(),
        )
        try:
            self._telemetry.append_event(event)
        except TelemetryError as exc:  # pragma: no cover - telemetry path
            self._logger.warning("Failed to record %s event: %s", event_type, exc)


__all__ = ["DisplayRunner"]
