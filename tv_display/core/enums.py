"""Enumerations shared across display subsystems.

The values match the strings stored by the dashboard API so records can be
parsed without translation tables.
"""
from __future__ import annotations

from enum import Enum


class Orientation(str, Enum):
    """Physical orientation of the TV screen."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class MediaType(str, Enum):
    """Kind of uploaded media shown between rate screens."""

    IMAGE = "image"
    VIDEO = "video"


class TransitionEffect(str, Enum):
    """Animation applied when the promo slideshow changes image."""

    FADE = "fade"
    SLIDE_LEFT = "slide-left"
    SLIDE_RIGHT = "slide-right"
    ZOOM_IN = "zoom-in"
    ZOOM_OUT = "zoom-out"
    FLIP_X = "flip-x"
    FLIP_Y = "flip-y"
    ROTATE_IN = "rotate-in"
    ROTATE_OUT = "rotate-out"
    BOUNCE = "bounce"

    @classmethod
    def from_value(cls, value: str | None) -> "TransitionEffect":
        """Map raw effect names to enum members, falling back to ``FADE``."""

        for member in cls:
            if member.value == value:
                return member
        return cls.FADE


class DisplayMode(str, Enum):
    """What the display is rendering right now."""

    RATES = "rates"
    MEDIA = "media"
    NOT_READY = "not-ready"
