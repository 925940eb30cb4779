"""Read-only records served by the dashboard API.

Every record is a flat snapshot refreshed by polling. The parsers accept the
JSON objects returned by the dashboard and apply the same column defaults the
dashboard database uses, so a partially populated row still yields a usable
record. Only the eight rate prices are mandatory.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping, Sequence, Tuple, TypeVar

from tv_display.core.enums import MediaType, Orientation, TransitionEffect
from tv_display.core.errors import DataFeedError
from tv_display.core.types import JSONLike, RecordId

DEFAULT_MEDIA_DURATION_SEC = 30
DEFAULT_PROMO_DURATION_SEC = 5
DEFAULT_RATES_DISPLAY_DURATION_SEC = 15
DEFAULT_REFRESH_INTERVAL_SEC = 30
DEFAULT_BANNER_HEIGHT = 120

RATE_PRICE_FIELDS: Tuple[str, ...] = (
    "gold_24k_sale",
    "gold_24k_purchase",
    "gold_22k_sale",
    "gold_22k_purchase",
    "gold_18k_sale",
    "gold_18k_purchase",
    "silver_per_kg_sale",
    "silver_per_kg_purchase",
)


@dataclass(frozen=True, slots=True)
class RateSnapshot:
    """Gold (24K/22K/18K) and silver sale/purchase prices."""

    id: RecordId | None
    gold_24k_sale: float
    gold_24k_purchase: float
    gold_22k_sale: float
    gold_22k_purchase: float
    gold_18k_sale: float
    gold_18k_purchase: float
    silver_per_kg_sale: float
    silver_per_kg_purchase: float
    is_active: bool = True
    created_date: str | None = None

    @classmethod
    def from_dict(cls, payload: JSONLike) -> "RateSnapshot":
        missing = [name for name in RATE_PRICE_FIELDS if payload.get(name) is None]
        if missing:
            raise DataFeedError(f"Rate snapshot is missing prices: {', '.join(missing)}")
        try:
            prices = {name: float(payload[name]) for name in RATE_PRICE_FIELDS}
        except (TypeError, ValueError) as exc:
            raise DataFeedError(f"Rate snapshot has a non-numeric price: {exc}") from exc
        return cls(
            id=_record_id(payload),
            is_active=_as_bool(payload.get("is_active"), True),
            created_date=payload.get("created_date"),
            **prices,
        )

    def as_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {name: getattr(self, name) for name in RATE_PRICE_FIELDS}
        data["id"] = self.id
        data["created_date"] = self.created_date
        return data


@dataclass(frozen=True, slots=True)
class DisplaySettings:
    """Singleton appearance and rotation settings of the TV display."""

    id: RecordId | None = None
    orientation: Orientation = Orientation.HORIZONTAL
    background_color: str = "#FFF8E1"
    text_color: str = "#212529"
    rate_number_font_size: str = "text-4xl"
    show_media: bool = True
    rates_display_duration: int = DEFAULT_RATES_DISPLAY_DURATION_SEC
    refresh_interval: int = DEFAULT_REFRESH_INTERVAL_SEC
    created_date: str | None = None

    @classmethod
    def defaults(cls) -> "DisplaySettings":
        """Settings used while the dashboard has not provided any."""

        return cls()

    @classmethod
    def from_dict(cls, payload: JSONLike) -> "DisplaySettings":
        orientation_raw = payload.get("orientation") or Orientation.HORIZONTAL.value
        try:
            orientation = Orientation(orientation_raw)
        except ValueError:
            orientation = Orientation.HORIZONTAL
        return cls(
            id=_record_id(payload),
            orientation=orientation,
            background_color=payload.get("background_color") or "#FFF8E1",
            text_color=payload.get("text_color") or "#212529",
            rate_number_font_size=payload.get("rate_number_font_size") or "text-4xl",
            show_media=_as_bool(payload.get("show_media"), True),
            rates_display_duration=_as_int(payload.get("rates_display_duration"), DEFAULT_RATES_DISPLAY_DURATION_SEC),
            refresh_interval=_as_int(payload.get("refresh_interval"), DEFAULT_REFRESH_INTERVAL_SEC),
            created_date=payload.get("created_date"),
        )

    @property
    def is_vertical(self) -> bool:
        return self.orientation is Orientation.VERTICAL

    def rates_dwell_seconds(self) -> float:
        """Seconds the rates view stays up before the next media item."""

        if self.rates_display_duration and self.rates_display_duration > 0:
            return float(self.rates_display_duration)
        return float(DEFAULT_RATES_DISPLAY_DURATION_SEC)

    def as_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "orientation": self.orientation.value,
            "background_color": self.background_color,
            "text_color": self.text_color,
            "rate_number_font_size": self.rate_number_font_size,
            "show_media": self.show_media,
            "rates_display_duration": self.rates_display_duration,
            "refresh_interval": self.refresh_interval,
        }


@dataclass(frozen=True, slots=True)
class MediaItem:
    """Uploaded image or video shown full screen between rate screens."""

    id: RecordId | None
    name: str
    file_url: str
    media_type: MediaType
    duration_seconds: int | None = DEFAULT_MEDIA_DURATION_SEC
    order_index: int = 0
    is_active: bool = True
    file_size: int | None = None
    mime_type: str | None = None
    created_date: str | None = None

    @classmethod
    def from_dict(cls, payload: JSONLike) -> "MediaItem":
        media_type_raw = payload.get("media_type") or payload.get("type") or MediaType.IMAGE.value
        try:
            media_type = MediaType(media_type_raw)
        except ValueError as exc:
            raise DataFeedError(f"Unsupported media type: {media_type_raw}") from exc
        return cls(
            id=_record_id(payload),
            name=str(payload.get("name") or ""),
            file_url=str(payload.get("file_url") or ""),
            media_type=media_type,
            duration_seconds=_as_optional_int(payload.get("duration_seconds")),
            order_index=_as_int(payload.get("order_index"), 0),
            is_active=_as_bool(payload.get("is_active"), True),
            file_size=_as_optional_int(payload.get("file_size")),
            mime_type=payload.get("mime_type"),
            created_date=payload.get("created_date"),
        )

    def dwell_seconds(self) -> float:
        """Seconds this item stays on screen (30 when unset)."""

        if self.duration_seconds and self.duration_seconds > 0:
            return float(self.duration_seconds)
        return float(DEFAULT_MEDIA_DURATION_SEC)

    def as_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "file_url": self.file_url,
            "media_type": self.media_type.value,
            "duration_seconds": self.duration_seconds,
            "order_index": self.order_index,
        }


@dataclass(frozen=True, slots=True)
class PromoImage:
    """Promotional image cycled inside the rates view."""

    id: RecordId | None
    name: str
    image_url: str
    duration_seconds: int | None = DEFAULT_PROMO_DURATION_SEC
    transition_effect: TransitionEffect = TransitionEffect.FADE
    order_index: int = 0
    is_active: bool = True
    file_size: int | None = None
    created_date: str | None = None

    @classmethod
    def from_dict(cls, payload: JSONLike) -> "PromoImage":
        return cls(
            id=_record_id(payload),
            name=str(payload.get("name") or ""),
            image_url=str(payload.get("image_url") or ""),
            duration_seconds=_as_optional_int(payload.get("duration_seconds")),
            transition_effect=TransitionEffect.from_value(payload.get("transition_effect")),
            order_index=_as_int(payload.get("order_index"), 0),
            is_active=_as_bool(payload.get("is_active"), True),
            file_size=_as_optional_int(payload.get("file_size")),
            created_date=payload.get("created_date"),
        )

    def dwell_seconds(self) -> float:
        """Seconds this image stays up in the slideshow (5 when unset)."""

        if self.duration_seconds and self.duration_seconds > 0:
            return float(self.duration_seconds)
        return float(DEFAULT_PROMO_DURATION_SEC)

    def as_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "image_url": self.image_url,
            "duration_seconds": self.duration_seconds,
            "transition_effect": self.transition_effect.value,
            "order_index": self.order_index,
        }


@dataclass(frozen=True, slots=True)
class BannerSettings:
    """Optional footer banner rendered under the rates view."""

    id: RecordId | None = None
    banner_image_url: str | None = None
    banner_height: int = DEFAULT_BANNER_HEIGHT
    is_active: bool = True
    created_date: str | None = None

    @classmethod
    def from_dict(cls, payload: JSONLike) -> "BannerSettings":
        return cls(
            id=_record_id(payload),
            banner_image_url=payload.get("banner_image_url") or None,
            banner_height=_as_int(payload.get("banner_height"), DEFAULT_BANNER_HEIGHT),
            is_active=_as_bool(payload.get("is_active"), True),
            created_date=payload.get("created_date"),
        )

    @property
    def has_image(self) -> bool:
        return bool(self.banner_image_url)

    def as_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "banner_image_url": self.banner_image_url,
            "banner_height": self.banner_height,
        }


_Ordered = TypeVar("_Ordered", MediaItem, PromoImage)


def active_in_order(items: Iterable[_Ordered]) -> Tuple[_Ordered, ...]:
    """Keep active items and order them by ``order_index`` (stable)."""

    active = [item for item in items if item.is_active]
    active.sort(key=lambda item: item.order_index)
    return tuple(active)


def parse_media_list(payload: Sequence[JSONLike] | None) -> Tuple[MediaItem, ...]:
    """Convert the ``/api/media`` list into active, ordered :class:`MediaItem` objects."""

    if not payload:
        return tuple()
    if not isinstance(payload, Sequence):
        raise DataFeedError("Media payload must be a list")
    return active_in_order(_parse_entry(MediaItem.from_dict, entry, "media") for entry in payload)


def parse_promo_list(payload: Sequence[JSONLike] | None) -> Tuple[PromoImage, ...]:
    """Convert the ``/api/promo`` list into active, ordered :class:`PromoImage` objects."""

    if not payload:
        return tuple()
    if not isinstance(payload, Sequence):
        raise DataFeedError("Promo payload must be a list")
    return active_in_order(_parse_entry(PromoImage.from_dict, entry, "promo") for entry in payload)


def _parse_entry(parser: Callable[[JSONLike], _Ordered], entry: Any, label: str) -> _Ordered:
    if not isinstance(entry, Mapping):
        raise DataFeedError(f"Unexpected {label} entry type: {type(entry).__name__}")
    try:
        return parser(entry)
    except (TypeError, ValueError, AttributeError) as exc:
        raise DataFeedError(f"Malformed {label} entry {entry.get('id')!r}: {exc}") from exc


def _record_id(payload: JSONLike) -> RecordId | None:
    value = payload.get("id")
    if value is None:
        return None
    try:
        return RecordId(int(value))
    except (TypeError, ValueError) as exc:
        raise DataFeedError(f"Record id must be an integer, got {value!r}") from exc


def _as_bool(value: Any, default: bool) -> bool:
    # sqlite rows come back as 0/1
    if value is None:
        return default
    return bool(value)


def _as_int(value: Any, default: int) -> int:
    if value is None or value == "":
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _as_optional_int(value: Any) -> int | None:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


__all__ = [
    "BannerSettings",
    "DisplaySettings",
    "MediaItem",
    "PromoImage",
    "RateSnapshot",
    "active_in_order",
    "parse_media_list",
    "parse_promo_list",
]
