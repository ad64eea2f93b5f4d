"""Tweening engine used to drive the menu's child elements."""

from fabmenu.animation.easing import Easing, EasingFunc, get_easing, interpolate
from fabmenu.animation.tween import Tween, TweenState
from fabmenu.animation.engine import Tweener
from fabmenu.animation.sequence import Sequence, SequenceState

__all__ = [
    # Easing
    "Easing",
    "EasingFunc",
    "get_easing",
    "interpolate",
    # Tweens
    "Tween",
    "TweenState",
    "Tweener",
    # Sequencing
    "Sequence",
    "SequenceState",
]
