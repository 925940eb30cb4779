from __future__ import annotations

from concurrent.futures import Executor, Future
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Sequence

import pytest

from tv_display.core.enums import MediaType, TransitionEffect
from tv_display.core.errors import DataFeedError
from tv_display.core.types import RecordId
from tv_display.data_feed.records import BannerSettings, DisplaySettings, MediaItem, PromoImage, RateSnapshot
from tv_display.rotation.rotation_engine import DisplayRotationEngine


class FakeClock:
    """Wall clock that moves one second per call."""

    def __init__(self, start: datetime) -> None:
        self.now = start
        self.calls = 0

    def __call__(self) -> datetime:
        self.calls += 1
        self.now = self.now + timedelta(seconds=1)
        return self.now


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock(datetime(2026, 10, 19, 9, 0, tzinfo=timezone.utc))


@pytest.fixture
def rate_snapshot() -> RateSnapshot:
    return RateSnapshot(
        id=RecordId(1),
        gold_24k_sale=7_250.0,
        gold_24k_purchase=7_100.0,
        gold_22k_sale=6_650.0,
        gold_22k_purchase=6_500.0,
        gold_18k_sale=5_450.0,
        gold_18k_purchase=5_300.0,
        silver_per_kg_sale=92_000.0,
        silver_per_kg_purchase=90_500.0,
    )


@pytest.fixture
def settings_factory() -> Callable[..., DisplaySettings]:
    def _factory(**overrides: object) -> DisplaySettings:
        return DisplaySettings(**overrides)  # type: ignore[arg-type]

    return _factory


@pytest.fixture
def media_factory() -> Callable[..., tuple[MediaItem, ...]]:
    def _factory(*durations: int | None) -> tuple[MediaItem, ...]:
        return tuple(
            MediaItem(
                id=RecordId(index + 1),
                name=f"media-{index + 1}",
                file_url=f"/uploads/media/{index + 1}.jpg",
                media_type=MediaType.IMAGE,
                duration_seconds=duration,
                order_index=index,
            )
            for index, duration in enumerate(durations)
        )

    return _factory


@pytest.fixture
def promo_factory() -> Callable[..., tuple[PromoImage, ...]]:
    def _factory(*durations: int | None, effect: TransitionEffect = TransitionEffect.FADE) -> tuple[PromoImage, ...]:
        return tuple(
            PromoImage(
                id=RecordId(index + 1),
                name=f"promo-{index + 1}",
                image_url=f"/uploads/promo/{index + 1}.png",
                duration_seconds=duration,
                transition_effect=effect,
                order_index=index,
            )
            for index, duration in enumerate(durations)
        )

    return _factory


@pytest.fixture
def engine(fake_clock: FakeClock) -> DisplayRotationEngine:
    return DisplayRotationEngine(clock=fake_clock)


class FakeDataSource:
    """In-memory stand-in for the dashboard API."""

    def __init__(self) -> None:
        self.rate: RateSnapshot | None = None
        self.settings: DisplaySettings = DisplaySettings.defaults()
        self.media: Sequence[MediaItem] = tuple()
        self.promos: Sequence[PromoImage] = tuple()
        self.banner: BannerSettings | None = None
        self.failing: set[str] = set()
        self.calls: dict[str, int] = {}

    def _record(self, name: str) -> None:
        self.calls[name] = self.calls.get(name, 0) + 1
        if name in self.failing:
            raise DataFeedError(f"{name} unavailable")

    def fetch_current_rate(self) -> RateSnapshot | None:
        self._record("rates")
        return self.rate

    def fetch_display_settings(self) -> DisplaySettings:
        self._record("settings")
        return self.settings

    def fetch_active_media(self) -> Sequence[MediaItem]:
        self._record("media")
        return self.media

    def fetch_active_promos(self) -> Sequence[PromoImage]:
        self._record("promos")
        return self.promos

    def fetch_banner_settings(self) -> BannerSettings | None:
        self._record("banner")
        return self.banner


@pytest.fixture
def fake_source() -> FakeDataSource:
    return FakeDataSource()


class InlineExecutor(Executor):
    """Executor running each fetch on the calling thread, so polls settle within one step."""

    def submit(self, fn: Callable[..., Any], /, *args: Any, **kwargs: Any) -> Future:
        future: Future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as exc:
            future.set_exception(exc)
        return future


@pytest.fixture
def inline_executor() -> InlineExecutor:
    return InlineExecutor()
