"""Shared test fixtures for fabmenu tests."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Callable

import pytest

from fabmenu.animation.engine import Tweener
from fabmenu.config.settings import MotionSettings
from fabmenu.core.events import EventBus
from fabmenu.menu.element import MenuChild, make_children
from fabmenu.menu.fab import FabMenu
from fabmenu.menu.layout import ArcConfig


@dataclass
class Box:
    """Plain tween target."""

    x: float = 0.0
    y: float = 0.0
    opacity: float = 1.0


@dataclass
class RecordedHandle:
    """Handle returned by RecordingPrimitive."""

    target: Any
    props: dict[str, float]
    duration: float
    delay: float
    ease: Any
    on_complete: Callable[[], None] | None = None
    active: bool = True

    @property
    def is_active(self) -> bool:
        return self.active

    @property
    def properties(self) -> frozenset[str]:
        return frozenset(self.props)


@dataclass
class RecordingPrimitive:
    """Tween primitive without overwrite support that records every call."""

    supports_overwrite: bool = False
    animations: list[RecordedHandle] = field(default_factory=list)
    killed: list[RecordedHandle] = field(default_factory=list)
    sets: list[tuple[Any, dict[str, Any]]] = field(default_factory=list)

    def animate(self, target, props, *, duration, delay=0.0, ease="linear", on_complete=None):
        handle = RecordedHandle(target, dict(props), duration, delay, ease, on_complete)
        self.animations.append(handle)
        return handle

    def set(self, target, **props):
        self.sets.append((target, props))
        for prop, value in props.items():
            setattr(target, prop, value)

    def kill(self, handle):
        was_active = handle.active
        handle.active = False
        self.killed.append(handle)
        return was_active


@pytest.fixture
def box() -> Box:
    return Box()


@pytest.fixture
def tweener() -> Tweener:
    return Tweener()


@pytest.fixture
def event_bus() -> EventBus:
    return EventBus()


@pytest.fixture
def motion() -> MotionSettings:
    """Reference timings, independent of the environment."""
    return MotionSettings(
        expand_duration=0.5,
        collapse_duration=0.3,
        expand_step=0.1,
        collapse_step=0.1,
        expand_ease="expo.out",
        collapse_ease="expo.in",
        expand_rotation=360.0,
        collapse_reversed=False,
    )


@pytest.fixture
def arc() -> ArcConfig:
    return ArcConfig.centered(radius=100.0, arc_span=math.pi / 1.5)


@pytest.fixture
def children() -> tuple[MenuChild, ...]:
    return make_children(4, ["A", "B", "C", "D"])


@pytest.fixture
def recording() -> RecordingPrimitive:
    return RecordingPrimitive()


@pytest.fixture
def broken_primitive() -> RecordingPrimitive:
    """Claims overwrite support but never supersedes anything."""
    return RecordingPrimitive(supports_overwrite=True)


@pytest.fixture
def menu(children, arc, motion, tweener, event_bus) -> FabMenu:
    fab = FabMenu(children, arc, motion, tweener, event_bus=event_bus)
    yield fab
    fab.close()
