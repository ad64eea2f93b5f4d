"""
Expandable radial action menu.

A FabMenu owns one state machine, one choreography dispatcher and a fixed,
ordered tuple of children. Every toggle flips the state and immediately
dispatches the animations for the new state; toggles are never ignored
or queued, and requests for the newest state supersede in-flight ones.
"""

from typing import TYPE_CHECKING, Any, Callable, Sequence
import logging

from fabmenu.core.events import Event, EventBus, EventType
from fabmenu.core.state import MenuState, MenuStateMachine
from fabmenu.menu.dispatcher import ChoreographyDispatcher, Motion, MotionRequest, TweenPrimitive
from fabmenu.menu.element import MenuChild, make_children
from fabmenu.menu.layout import ArcConfig

if TYPE_CHECKING:
    from fabmenu.config.settings import Settings

logger = logging.getLogger(__name__)


class FabMenu:
    """
    Floating action button with children fanned out along an arc.

    Args:
        children: Child elements, captured in order; the count is fixed
        arc: Arc geometry
        motion: Durations, stagger steps and easing per direction
        tweener: Tween engine that animates the children
        event_bus: Optional bus; toggles arrive as FAB_TOGGLE, presses as
            CHILD_PRESSED, and state changes, activations and settle
            notifications are emitted
    """

    def __init__(
        self,
        children: Sequence[MenuChild],
        arc: ArcConfig,
        motion: Motion,
        tweener: TweenPrimitive,
        event_bus: EventBus | None = None,
        expanded_label: str = "×",
        collapsed_label: str = "＋",
    ) -> None:
        self._children: tuple[MenuChild, ...] = tuple(children)
        self.arc = arc
        self.event_bus = event_bus

        self.state_machine = MenuStateMachine(
            expanded_label=expanded_label,
            collapsed_label=collapsed_label,
        )
        self.dispatcher = ChoreographyDispatcher(tweener, motion, on_settled=self._on_settled)
        self.last_requests: list[MotionRequest] = []

        self._unsubscribers: list[Callable[[], None]] = []
        if event_bus is not None:
            self._unsubscribers += [
                event_bus.subscribe(EventType.FAB_TOGGLE, self._on_toggle_event),
                event_bus.subscribe(EventType.CHILD_PRESSED, self._on_press_event),
            ]

        if not self._children:
            logger.warning("FabMenu created without children; toggles will only flip state")

        # Children start collapsed: hidden and not hittable
        for child in self._children:
            tweener.set(child, x=0.0, y=0.0, rotation=0.0, opacity=0.0, interactable=False)

        logger.info(f"FabMenu created with {len(self._children)} children")

    @classmethod
    def from_settings(
        cls,
        settings: "Settings",
        tweener: TweenPrimitive,
        event_bus: EventBus | None = None,
    ) -> "FabMenu":
        """Build a menu with children and geometry taken from settings."""
        menu = settings.menu
        return cls(
            make_children(menu.child_count, menu.child_labels),
            settings.arc_config(),
            settings.motion,
            tweener,
            event_bus=event_bus,
            expanded_label=menu.expanded_label,
            collapsed_label=menu.collapsed_label,
        )

    @property
    def children(self) -> tuple[MenuChild, ...]:
        return self._children

    @property
    def state(self) -> MenuState:
        return self.state_machine.state

    @property
    def is_expanded(self) -> bool:
        return self.state_machine.is_expanded

    @property
    def label(self) -> str:
        """Glyph currently shown on the toggle control."""
        return self.state_machine.label

    def toggle(self) -> MenuState:
        """
        Flip the menu and animate the children toward the new state.

        Returns:
            The new state
        """
        old_state = self.state
        new_state = self.state_machine.toggle()
        self.last_requests = self.dispatcher.dispatch(self._children, new_state, self.arc)

        self._emit(Event(
            EventType.MENU_STATE_CHANGED,
            data={"from": old_state, "to": new_state, "label": self.label},
            source="fab",
        ))
        self._emit(Event(
            EventType.ANIMATION_START,
            data={"state": new_state, "requests": len(self.last_requests)},
            source="fab",
        ))
        return new_state

    def child_at(self, px: float, py: float) -> int | None:
        """Index of the interactable child under a point relative to the FAB center."""
        # Later children are drawn on top, so they win overlaps
        for index in reversed(range(len(self._children))):
            if self._children[index].hit_test(px, py):
                return index
        return None

    def activate(self, index: int) -> bool:
        """
        Activate a child.

        Returns:
            True if the child was interactable and the activation was emitted
        """
        if not 0 <= index < len(self._children):
            logger.warning(f"Activation of unknown child {index} ignored")
            return False

        child = self._children[index]
        if not child.interactable:
            logger.warning(f"Activation of non-interactable child {index} ignored")
            return False

        logger.info(f"Child activated: {index} ({child.label})")
        self._emit(Event(
            EventType.CHILD_ACTIVATED,
            data={"index": index, "label": child.label},
            source="fab",
        ))
        return True

    def close(self) -> None:
        """Detach from the event bus."""
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()

    def snapshot(self) -> list[dict[str, Any]]:
        """Current visual values of every child."""
        return [
            {
                "label": c.label,
                "x": c.x,
                "y": c.y,
                "rotation": c.rotation,
                "opacity": c.opacity,
                "interactable": c.interactable,
            }
            for c in self._children
        ]

    def _on_toggle_event(self, event: Event) -> None:
        self.toggle()

    def _on_press_event(self, event: Event) -> None:
        self.activate(event.data["index"])

    def _on_settled(self, state: MenuState) -> None:
        self._emit(Event(EventType.ANIMATION_END, data={"state": state}, source="fab"))

    def _emit(self, event: Event) -> None:
        if self.event_bus is not None:
            self.event_bus.emit(event)
