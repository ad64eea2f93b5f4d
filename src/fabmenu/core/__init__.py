"""Core framework components for the radial menu."""

from .state import MenuState, MenuStateMachine, label_for
from .events import EventBus, Event, EventType

__all__ = ["MenuState", "MenuStateMachine", "label_for", "EventBus", "Event", "EventType"]
