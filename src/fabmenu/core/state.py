"""
State machine for the radial menu.

States:
    COLLAPSED: Children hidden at the FAB center (initial)
    EXPANDED: Children fanned out along the arc

Only the toggle handler changes the state. Animation progress is never
stored here; a toggle mid-animation simply flips the state again.
"""

from enum import Enum, auto
from typing import Callable
import logging

logger = logging.getLogger(__name__)

EXPANDED_LABEL = "×"
COLLAPSED_LABEL = "＋"


class MenuState(Enum):
    """Menu states."""
    COLLAPSED = auto()
    EXPANDED = auto()

    @property
    def opposite(self) -> "MenuState":
        return MenuState.EXPANDED if self is MenuState.COLLAPSED else MenuState.COLLAPSED


StateListener = Callable[[MenuState, MenuState], None]


def label_for(
    state: MenuState,
    expanded_label: str = EXPANDED_LABEL,
    collapsed_label: str = COLLAPSED_LABEL,
) -> str:
    """Glyph shown on the toggle control for a state."""
    return expanded_label if state is MenuState.EXPANDED else collapsed_label


class MenuStateMachine:
    """
    Holds the menu state and flips it on every toggle.

    There is no debounce: each toggle request flips the state, even if the
    previous transition's animations are still running.
    """

    def __init__(
        self,
        initial_state: MenuState = MenuState.COLLAPSED,
        expanded_label: str = EXPANDED_LABEL,
        collapsed_label: str = COLLAPSED_LABEL,
    ) -> None:
        self._state = initial_state
        self._initial_state = initial_state
        self._expanded_label = expanded_label
        self._collapsed_label = collapsed_label
        self._toggle_count = 0
        self._listeners: list[StateListener] = []
        logger.info(f"MenuStateMachine initialized with state: {initial_state.name}")

    @property
    def state(self) -> MenuState:
        """Get current state."""
        return self._state

    @property
    def is_expanded(self) -> bool:
        return self._state is MenuState.EXPANDED

    @property
    def label(self) -> str:
        """Glyph for the toggle control in the current state."""
        return label_for(self._state, self._expanded_label, self._collapsed_label)

    @property
    def toggle_count(self) -> int:
        """Number of toggles handled since creation or the last reset."""
        return self._toggle_count

    def toggle(self) -> MenuState:
        """
        Flip the state unconditionally.

        Returns:
            The new state
        """
        self._toggle_count += 1
        return self._set(self._state.opposite)

    def transition(self, to_state: MenuState) -> bool:
        """
        Move to an explicit state.

        Returns:
            True if the state changed, False if already there
        """
        if to_state is self._state:
            logger.debug(f"Already {to_state.name}, ignoring transition")
            return False
        self._set(to_state)
        return True

    def _set(self, to_state: MenuState) -> MenuState:
        old_state = self._state
        self._state = to_state

        logger.info(f"State transition: {old_state.name} -> {to_state.name}")

        # Notify listeners
        for listener in self._listeners:
            try:
                listener(old_state, to_state)
            except Exception as e:
                logger.error(f"Error in state listener: {e}")

        return to_state

    def add_listener(self, callback: StateListener) -> None:
        """Add a state change listener."""
        self._listeners.append(callback)

    def remove_listener(self, callback: StateListener) -> None:
        """Remove a state change listener."""
        if callback in self._listeners:
            self._listeners.remove(callback)

    def reset(self) -> None:
        """Reset to the initial state without notifying listeners."""
        self._state = self._initial_state
        self._toggle_count = 0
        logger.info(f"MenuStateMachine reset to {self._initial_state.name}")
