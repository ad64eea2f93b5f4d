"""
Event bus for the radial menu.

Two delivery paths:
    emit(): immediate and synchronous. Frame ticks and the notifications
        FabMenu sends (state changes, activations, settle) go this way.
    post() + drain(): input events (toggles, child presses) are collected
        while the window reads its input and delivered once per frame,
        before the tick. drain() also awaits coroutine handlers.

A failing handler is logged; delivery to the remaining handlers continues.
"""

from collections import defaultdict, deque
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Awaitable, Callable
import inspect
import logging
import time

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Menu event types."""
    # Input
    FAB_TOGGLE = auto()
    CHILD_PRESSED = auto()

    # Menu notifications
    MENU_STATE_CHANGED = auto()
    CHILD_ACTIVATED = auto()
    ANIMATION_START = auto()
    ANIMATION_END = auto()

    # Frame loop
    TICK = auto()
    SHUTDOWN = auto()


@dataclass
class Event:
    """
    One message on the bus.

    Attributes:
        type: EventType member or a custom string
        data: Payload
        source: Who sent it ("mouse", "keyboard", "fab", ...)
        timestamp: Creation time
    """
    type: EventType | str
    data: dict[str, Any] = field(default_factory=dict)
    source: str = "system"
    timestamp: float = field(default_factory=time.time)


Handler = Callable[[Event], None] | Callable[[Event], Awaitable[None]]


class EventBus:
    """Pub/sub between the input layer, the menu and its observers."""

    def __init__(self, history_limit: int = 100) -> None:
        self._handlers: dict[EventType | str, list[Handler]] = defaultdict(list)
        self._watchers: list[Handler] = []
        self._pending: deque[Event] = deque()
        self._history: deque[Event] = deque(maxlen=history_limit)

    def subscribe(self, event_type: EventType | str, handler: Handler) -> Callable[[], None]:
        """
        Subscribe to one event type.

        Returns:
            Unsubscribe function (safe to call twice)
        """
        handlers = self._handlers[event_type]
        handlers.append(handler)

        def unsubscribe() -> None:
            if handler in handlers:
                handlers.remove(handler)

        return unsubscribe

    def subscribe_all(self, handler: Handler) -> Callable[[], None]:
        """Subscribe to every event; returns the unsubscribe function."""
        self._watchers.append(handler)

        def unsubscribe() -> None:
            if handler in self._watchers:
                self._watchers.remove(handler)

        return unsubscribe

    @property
    def pending(self) -> int:
        """Posted events not yet drained."""
        return len(self._pending)

    def emit(self, event: Event) -> None:
        """Deliver now to synchronous handlers; coroutine handlers need post()."""
        self._history.append(event)
        for handler in self._targets(event):
            if inspect.iscoroutinefunction(handler):
                logger.warning(f"Async handler {handler.__qualname__} skipped on emit of {event.type}")
                continue
            self._call(handler, event)

    def post(self, event: Event) -> None:
        """Queue an event for the next drain()."""
        self._pending.append(event)

    async def drain(self) -> int:
        """
        Deliver every posted event in order, including ones posted meanwhile.

        Returns:
            Number of events delivered
        """
        delivered = 0
        while self._pending:
            event = self._pending.popleft()
            self._history.append(event)
            for handler in self._targets(event):
                result = self._call(handler, event)
                if inspect.isawaitable(result):
                    try:
                        await result
                    except Exception as e:
                        logger.error(f"Error in async handler for {event.type}: {e}")
            delivered += 1
        return delivered

    def get_history(self, event_type: EventType | str | None = None, limit: int = 10) -> list[Event]:
        """Most recent delivered events, oldest first."""
        history = list(self._history)
        if event_type is not None:
            history = [e for e in history if e.type == event_type]
        return history[-limit:]

    def clear_history(self) -> None:
        self._history.clear()

    def _targets(self, event: Event) -> list[Handler]:
        # Copy so handlers can unsubscribe during delivery
        return [*self._handlers.get(event.type, ()), *self._watchers]

    def _call(self, handler: Handler, event: Event) -> Any:
        try:
            return handler(event)
        except Exception as e:
            logger.error(f"Error in handler for {event.type}: {e}")
            return None


def toggle_event(source: str = "fab") -> Event:
    """Request to flip the menu."""
    return Event(EventType.FAB_TOGGLE, source=source)


def press_event(index: int, source: str = "mouse") -> Event:
    """Request to activate child ``index``."""
    return Event(EventType.CHILD_PRESSED, data={"index": index}, source=source)


def tick_event(delta: float, frame: int) -> Event:
    """Frame tick carrying the elapsed seconds."""
    return Event(EventType.TICK, data={"delta": delta, "frame": frame})
