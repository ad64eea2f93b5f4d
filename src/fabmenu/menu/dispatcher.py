"""Choreography for expanding and collapsing the menu children.

The dispatcher turns a target state into one tween request per child:
arc position from the layout, start delay from the stagger schedule and
direction-specific duration and easing from the motion settings.

Interruption policy: a request for a child always supersedes whatever that
child is still animating. When the tween primitive overwrites conflicting
properties itself, the dispatcher relies on it; otherwise it kills the
child's previous tween before issuing the new one. Either way a previous
tween that survives is an AnimationOverrideFailure.
"""

from dataclasses import dataclass, field
from functools import partial
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional, Protocol, Sequence
import logging

from fabmenu.core.state import MenuState
from fabmenu.menu.errors import AnimationOverrideFailure
from fabmenu.menu.layout import ArcConfig, position
from fabmenu.menu.stagger import delay_for, stagger_index

logger = logging.getLogger(__name__)


class TweenHandle(Protocol):
    """What the dispatcher needs from an issued animation."""

    @property
    def is_active(self) -> bool: ...

    @property
    def properties(self) -> frozenset[str]: ...


class TweenPrimitive(Protocol):
    """Minimal tween engine contract."""

    @property
    def supports_overwrite(self) -> bool: ...

    def animate(
        self,
        target: Any,
        props: dict[str, float],
        *,
        duration: float,
        delay: float = 0.0,
        ease: Any = "linear",
        on_complete: Optional[Callable[[], None]] = None,
    ) -> TweenHandle: ...

    def set(self, target: Any, **props: Any) -> None: ...

    def kill(self, handle: Any) -> bool: ...


class Motion(Protocol):
    """Timing and easing per direction (see config.settings.MotionSettings)."""

    expand_duration: float
    collapse_duration: float
    expand_step: float
    collapse_step: float
    expand_ease: str
    collapse_ease: str
    expand_rotation: float
    collapse_reversed: bool


@dataclass(frozen=True)
class MotionRequest:
    """One animation request for one child."""

    index: int
    target_state: MenuState
    props: Mapping[str, float] = field(default_factory=dict, hash=False)
    duration: float = 0.0
    delay: float = 0.0
    ease: str = "linear"
    interactable: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "props", MappingProxyType(dict(self.props)))


class ChoreographyDispatcher:
    """Issues per-child tween requests for menu state changes.

    ``on_settled`` is called with the target state once every child of the
    most recent dispatch has finished; superseded dispatches never report.
    """

    def __init__(
        self,
        primitive: TweenPrimitive,
        motion: Motion,
        on_settled: Optional[Callable[[MenuState], None]] = None,
    ) -> None:
        self.primitive = primitive
        self.motion = motion
        self.on_settled = on_settled

        self._handles: dict[int, Any] = {}
        self._generation = 0
        self._pending = 0

    @property
    def in_flight(self) -> int:
        """Children of the latest dispatch that have not finished."""
        return self._pending

    def handle_for(self, child: Any) -> Any:
        """The most recent tween issued for ``child``, if any."""
        return self._handles.get(id(child))

    def plan(
        self,
        children: Sequence[Any],
        target_state: MenuState,
        cfg: ArcConfig,
    ) -> list[MotionRequest]:
        """Build the requests for a state change without issuing them."""
        count = len(children)
        requests = []

        for i in range(count):
            if target_state is MenuState.EXPANDED:
                dx, dy = position(i, count, cfg)
                requests.append(MotionRequest(
                    index=i,
                    target_state=target_state,
                    props={"opacity": 1.0, "x": dx, "y": dy, "rotation": self.motion.expand_rotation},
                    duration=self.motion.expand_duration,
                    delay=delay_for(i, self.motion.expand_step),
                    ease=self.motion.expand_ease,
                    interactable=True,
                ))
            else:
                order = stagger_index(i, count, self.motion.collapse_reversed)
                requests.append(MotionRequest(
                    index=i,
                    target_state=target_state,
                    props={"opacity": 0.0, "x": 0.0, "y": 0.0, "rotation": 0.0},
                    duration=self.motion.collapse_duration,
                    delay=delay_for(order, self.motion.collapse_step),
                    ease=self.motion.collapse_ease,
                    interactable=False,
                ))

        return requests

    def dispatch(
        self,
        children: Sequence[Any],
        target_state: MenuState,
        cfg: ArcConfig,
    ) -> list[MotionRequest]:
        """Animate every child toward ``target_state``.

        Returns:
            The issued requests in index order (empty for no children)
        """
        self._generation += 1
        if not children:
            self._pending = 0
            logger.debug(f"Dispatch to {target_state.name} with no children, nothing to do")
            return []

        requests = self.plan(children, target_state, cfg)
        self._pending = len(requests)

        for child, request in zip(children, requests):
            self._issue(child, request)

        logger.debug(
            f"Dispatched {len(requests)} requests to {target_state.name} "
            f"(generation {self._generation})"
        )
        return requests

    def _issue(self, child: Any, request: MotionRequest) -> None:
        previous = self._handles.get(id(child))

        if previous is not None and previous.is_active and not self.primitive.supports_overwrite:
            self.primitive.kill(previous)

        # Interactivity changes with the request, not when the tween starts
        self.primitive.set(child, interactable=request.interactable)

        handle = self.primitive.animate(
            child,
            dict(request.props),
            duration=request.duration,
            delay=request.delay,
            ease=request.ease,
            on_complete=partial(self._child_settled, self._generation, request.target_state),
        )
        self._handles[id(child)] = handle

        if previous is not None and previous.is_active and previous.properties & set(request.props):
            raise AnimationOverrideFailure(request.index, previous)

    def _child_settled(self, generation: int, target_state: MenuState) -> None:
        if generation != self._generation:
            return
        self._pending -= 1
        if self._pending == 0:
            logger.debug(f"All children settled at {target_state.name}")
            if self.on_settled:
                self.on_settled(target_state)
