"""Easing curves for tweens.

Every curve maps normalized time t (0.0 to 1.0) to normalized progress.
Each family is defined once as its "in" curve; the "out" and "in-out"
variants are derived from it, so all three share the same endpoints.

Curves can be looked up by ``Easing`` member, by snake name
(``"ease_out_expo"``) or by dotted name (``"expo.out"``, ``"power2.inOut"``,
``"back.out(1.7)"``).
"""

from enum import Enum
from functools import lru_cache
from typing import Callable
import math
import re

# Type alias for easing functions
EasingFunc = Callable[[float], float]


class Easing(Enum):
    """Available easing curves."""

    LINEAR = "linear"

    EASE_IN_QUAD = "quad.in"
    EASE_OUT_QUAD = "quad.out"
    EASE_IN_OUT_QUAD = "quad.inOut"

    EASE_IN_CUBIC = "cubic.in"
    EASE_OUT_CUBIC = "cubic.out"
    EASE_IN_OUT_CUBIC = "cubic.inOut"

    EASE_IN_QUART = "quart.in"
    EASE_OUT_QUART = "quart.out"
    EASE_IN_OUT_QUART = "quart.inOut"

    EASE_IN_QUINT = "quint.in"
    EASE_OUT_QUINT = "quint.out"
    EASE_IN_OUT_QUINT = "quint.inOut"

    EASE_IN_SINE = "sine.in"
    EASE_OUT_SINE = "sine.out"
    EASE_IN_OUT_SINE = "sine.inOut"

    EASE_IN_EXPO = "expo.in"
    EASE_OUT_EXPO = "expo.out"
    EASE_IN_OUT_EXPO = "expo.inOut"

    EASE_IN_CIRC = "circ.in"
    EASE_OUT_CIRC = "circ.out"
    EASE_IN_OUT_CIRC = "circ.inOut"

    EASE_IN_BACK = "back.in"
    EASE_OUT_BACK = "back.out"
    EASE_IN_OUT_BACK = "back.inOut"

    EASE_IN_ELASTIC = "elastic.in"
    EASE_OUT_ELASTIC = "elastic.out"
    EASE_IN_OUT_ELASTIC = "elastic.inOut"

    EASE_IN_BOUNCE = "bounce.in"
    EASE_OUT_BOUNCE = "bounce.out"
    EASE_IN_OUT_BOUNCE = "bounce.inOut"


def linear(t: float) -> float:
    """No easing."""
    return t


def _power_in(exponent: int) -> EasingFunc:
    def curve(t: float) -> float:
        return t ** exponent
    return curve


def _sine_in(t: float) -> float:
    return 1 - math.cos((t * math.pi) / 2)


def _expo_in(t: float) -> float:
    return 0.0 if t == 0 else pow(2, 10 * t - 10)


def _circ_in(t: float) -> float:
    return 1 - math.sqrt(1 - t * t)


def _back_in(overshoot: float = 1.70158) -> EasingFunc:
    def curve(t: float) -> float:
        return t * t * ((overshoot + 1) * t - overshoot)
    return curve


def _elastic_in(amplitude: float = 1.0, period: float = 0.3) -> EasingFunc:
    amplitude = max(1.0, amplitude)
    shift = period / (2 * math.pi) * math.asin(1 / amplitude)

    def curve(t: float) -> float:
        if t in (0, 1):
            return float(t)
        t -= 1
        return -(amplitude * pow(2, 10 * t) * math.sin((t - shift) * (2 * math.pi) / period))
    return curve


def _bounce_out(t: float) -> float:
    n1 = 7.5625
    d1 = 2.75
    if t < 1 / d1:
        return n1 * t * t
    if t < 2 / d1:
        t -= 1.5 / d1
        return n1 * t * t + 0.75
    if t < 2.5 / d1:
        t -= 2.25 / d1
        return n1 * t * t + 0.9375
    t -= 2.625 / d1
    return n1 * t * t + 0.984375


def _bounce_in(t: float) -> float:
    return 1 - _bounce_out(1 - t)


def _out(curve_in: EasingFunc) -> EasingFunc:
    """Mirror an "in" curve so it decelerates instead."""
    def curve(t: float) -> float:
        return 1 - curve_in(1 - t)
    return curve


def _in_out(curve_in: EasingFunc) -> EasingFunc:
    """Accelerate through the first half, decelerate through the second."""
    def curve(t: float) -> float:
        if t < 0.5:
            return curve_in(2 * t) / 2
        return 1 - curve_in(2 * (1 - t)) / 2
    return curve


# Family name -> factory building the "in" curve from optional parameters
_FAMILIES: dict[str, Callable[..., EasingFunc]] = {
    "quad": lambda: _power_in(2),
    "cubic": lambda: _power_in(3),
    "quart": lambda: _power_in(4),
    "quint": lambda: _power_in(5),
    "sine": lambda: _sine_in,
    "expo": lambda: _expo_in,
    "circ": lambda: _circ_in,
    "back": _back_in,
    "elastic": _elastic_in,
    "bounce": lambda: _bounce_in,
}

# powerN follows the tweening convention: power1 is quadratic
_ALIASES: dict[str, str] = {
    "power1": "quad",
    "power2": "cubic",
    "power3": "quart",
    "power4": "quint",
}

_DIRECTIONS: dict[str, Callable[[EasingFunc], EasingFunc]] = {
    "in": lambda curve: curve,
    "out": _out,
    "inout": _in_out,
}

_DOTTED = re.compile(r"^(?P<family>[a-z]+\d?)(?:\.(?P<direction>[a-z]+))?(?:\((?P<params>[^)]*)\))?$")
_SNAKE = re.compile(r"^ease_(?P<direction>in_out|in|out)_(?P<family>[a-z]+\d?)$")


def _parse(name: str) -> tuple[str, str, tuple[float, ...]]:
    """Split an easing name into (family, direction, params)."""
    key = name.strip().lower().replace(" ", "")
    if key in ("linear", "none"):
        return "linear", "in", ()

    match = _SNAKE.match(key)
    if match:
        return match["family"], match["direction"].replace("_", ""), ()

    match = _DOTTED.match(key)
    if not match:
        raise ValueError(f"Unknown easing function: {name}")

    params: tuple[float, ...] = ()
    if match["params"]:
        try:
            params = tuple(float(p) for p in match["params"].split(",") if p)
        except ValueError:
            raise ValueError(f"Invalid easing parameters in: {name}") from None

    # A bare family name ("power2") eases out, like most tweening engines
    return match["family"], match["direction"] or "out", params


@lru_cache(maxsize=128)
def _build(name: str) -> EasingFunc:
    family, direction, params = _parse(name)
    if family == "linear":
        return linear

    family = _ALIASES.get(family, family)
    factory = _FAMILIES.get(family)
    wrap = _DIRECTIONS.get(direction)
    if factory is None or wrap is None:
        raise ValueError(f"Unknown easing function: {name}")

    try:
        curve_in = factory(*params)
    except TypeError:
        raise ValueError(f"Easing '{family}' does not take parameters: {name}") from None
    return wrap(curve_in)


def get_easing(easing: Easing | str | EasingFunc) -> EasingFunc:
    """Get an easing function by enum, name, or pass a callable through.

    Raises:
        ValueError: If the easing name is not recognized
    """
    if isinstance(easing, Easing):
        return _build(easing.value)
    if isinstance(easing, str):
        return _build(easing)
    if callable(easing):
        return easing
    raise ValueError(f"Unknown easing function: {easing!r}")


def interpolate(start: float, end: float, t: float, easing: Easing | str = Easing.LINEAR) -> float:
    """Interpolate between two values with an easing curve, clamping t to [0, 1]."""
    eased_t = get_easing(easing)(max(0.0, min(1.0, t)))
    return start + (end - start) * eased_t
