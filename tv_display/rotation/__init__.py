"""Display rotation package."""
from .models import Directive, MediaDirective, NotReadyDirective, RatesDirective, RotationState
from .rotation_engine import DisplayRotationEngine
from .runner import DisplayRunner
from .transitions import TransitionProfile, transition_profile

__all__ = [
    "Directive",
    "DisplayRotationEngine",
    "DisplayRunner",
    "MediaDirective",
    "NotReadyDirective",
    "RatesDirective",
    "RotationState",
    "TransitionProfile",
    "transition_profile",
]
