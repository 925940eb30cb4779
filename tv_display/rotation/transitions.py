"""Animation profiles for promo slideshow transitions.

Each :class:`TransitionEffect` maps to the property keyframes the presentation
layer animates when a promo image enters (``initial`` → ``animate``) and leaves
(``exit``). Profiles are pure data and never influence rotation timing.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Tuple

from tv_display.core.enums import TransitionEffect

TRANSITION_DURATION_SEC = 0.8
DEFAULT_EASE = "easeInOut"
BOUNCE_EASE: Tuple[float, float, float, float] = (0.34, 1.56, 0.64, 1.0)


@dataclass(frozen=True, slots=True)
class TransitionProfile:
    """Keyframes and easing for one transition effect."""

    effect: TransitionEffect
    initial: Mapping[str, Any]
    animate: Mapping[str, Any]
    exit: Mapping[str, Any]
    duration_sec: float = TRANSITION_DURATION_SEC
    ease: str | Tuple[float, float, float, float] = field(default=DEFAULT_EASE)

    def to_dict(self) -> Dict[str, Any]:
        ease = list(self.ease) if isinstance(self.ease, tuple) else self.ease
        return {
            "effect": self.effect.value,
            "initial": dict(self.initial),
            "animate": dict(self.animate),
            "exit": dict(self.exit),
            "duration": self.duration_sec,
            "ease": ease,
        }


_KEYFRAMES: Dict[TransitionEffect, Tuple[Mapping[str, Any], Mapping[str, Any], Mapping[str, Any]]] = {
    TransitionEffect.FADE: ({"opacity": 0}, {"opacity": 1}, {"opacity": 0}),
    TransitionEffect.SLIDE_LEFT: ({"x": "100%"}, {"x": 0}, {"x": "-100%"}),
    TransitionEffect.SLIDE_RIGHT: ({"x": "-100%"}, {"x": 0}, {"x": "100%"}),
    TransitionEffect.ZOOM_IN: (
        {"scale": 0.8, "opacity": 0},
        {"scale": 1, "opacity": 1},
        {"scale": 0.8, "opacity": 0},
    ),
    TransitionEffect.ZOOM_OUT: (
        {"scale": 1.2, "opacity": 0},
        {"scale": 1, "opacity": 1},
        {"scale": 1.2, "opacity": 0},
    ),
    TransitionEffect.FLIP_X: (
        {"rotateX": -90, "opacity": 0},
        {"rotateX": 0, "opacity": 1},
        {"rotateX": 90, "opacity": 0},
    ),
    TransitionEffect.FLIP_Y: (
        {"rotateY": -90, "opacity": 0},
        {"rotateY": 0, "opacity": 1},
        {"rotateY": 90, "opacity": 0},
    ),
    TransitionEffect.ROTATE_IN: (
        {"rotate": -90, "scale": 0.8, "opacity": 0},
        {"rotate": 0, "scale": 1, "opacity": 1},
        {"rotate": 90, "scale": 0.8, "opacity": 0},
    ),
    TransitionEffect.ROTATE_OUT: (
        {"rotate": 90, "scale": 0.8, "opacity": 0},
        {"rotate": 0, "scale": 1, "opacity": 1},
        {"rotate": -90, "scale": 0.8, "opacity": 0},
    ),
    TransitionEffect.BOUNCE: (
        {"scale": 0.5, "opacity": 0},
        {"scale": 1, "opacity": 1},
        {"scale": 0.5, "opacity": 0},
    ),
}


def transition_profile(effect: TransitionEffect | str | None) -> TransitionProfile:
    """Return the animation profile for ``effect`` (unknown names fall back to fade)."""

    if not isinstance(effect, TransitionEffect):
        effect = TransitionEffect.from_value(effect)
    initial, animate, exit_ = _KEYFRAMES[effect]
    ease: str | Tuple[float, float, float, float] = BOUNCE_EASE if effect is TransitionEffect.BOUNCE else DEFAULT_EASE
    return TransitionProfile(effect=effect, initial=initial, animate=animate, exit=exit_, ease=ease)


__all__ = ["TransitionProfile", "transition_profile"]
