"""Radial action menu: layout, stagger, choreography and the FAB component."""

from fabmenu.menu.errors import AnimationOverrideFailure, ConfigurationError, FabMenuError
from fabmenu.menu.layout import ArcConfig, angle_for, position, positions
from fabmenu.menu.stagger import delay_for, stagger_index
from fabmenu.menu.element import MenuChild, make_children
from fabmenu.menu.dispatcher import ChoreographyDispatcher, MotionRequest, TweenPrimitive
from fabmenu.menu.fab import FabMenu

__all__ = [
    # Errors
    "FabMenuError",
    "ConfigurationError",
    "AnimationOverrideFailure",
    # Layout
    "ArcConfig",
    "angle_for",
    "position",
    "positions",
    # Stagger
    "delay_for",
    "stagger_index",
    # Elements
    "MenuChild",
    "make_children",
    # Choreography
    "ChoreographyDispatcher",
    "MotionRequest",
    "TweenPrimitive",
    # Component
    "FabMenu",
]
