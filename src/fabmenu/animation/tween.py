"""Single-target property tweens.

A Tween drives a set of numeric attributes on one target object from their
start values to their end values over ``duration`` seconds, after waiting
``delay`` seconds. Start values of a "to" tween are read from the target
when the tween actually starts (after the delay), so a tween issued while
another one is still moving the target picks up wherever the target is.

Tweens do not advance themselves; a Tweener calls ``advance()`` once per
frame.
"""

from enum import Enum, auto
from typing import Any, Callable
import logging

from fabmenu.animation.easing import Easing, EasingFunc, get_easing

logger = logging.getLogger(__name__)

Callback = Callable[[], None]


class TweenState(Enum):
    """Tween lifecycle state."""

    PENDING = auto()   # waiting out its delay
    RUNNING = auto()
    PAUSED = auto()
    COMPLETE = auto()
    KILLED = auto()


class Tween:
    """An animation of one target's numeric attributes.

    Attributes:
        target: Object whose attributes are written
        duration: Length of one iteration in seconds
        delay: Seconds to wait before the first iteration
        repeat: Extra iterations after the first (-1 repeats forever)
        yoyo: Alternate direction on every repeat
        repeat_delay: Pause between iterations in seconds
    """

    def __init__(
        self,
        target: Any,
        end_values: dict[str, float],
        duration: float = 0.5,
        delay: float = 0.0,
        ease: Easing | str | EasingFunc = Easing.EASE_OUT_QUAD,
        repeat: int = 0,
        yoyo: bool = False,
        repeat_delay: float = 0.0,
        start_values: dict[str, float] | None = None,
        on_start: Callback | None = None,
        on_update: Callback | None = None,
        on_repeat: Callback | None = None,
        on_complete: Callback | None = None,
        name: str | None = None,
    ) -> None:
        if duration < 0:
            raise ValueError(f"Tween duration must be >= 0, got {duration}")
        if delay < 0:
            raise ValueError(f"Tween delay must be >= 0, got {delay}")
        if repeat < -1:
            raise ValueError(f"Tween repeat must be >= -1, got {repeat}")
        for prop, value in end_values.items():
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise TypeError(f"Cannot tween non-numeric property '{prop}'={value!r}; use set()")

        self.target = target
        self.duration = float(duration)
        self.delay = float(delay)
        self.repeat = repeat
        self.yoyo = yoyo
        self.repeat_delay = float(repeat_delay)
        self.name = name or f"{type(target).__name__}:{','.join(end_values)}"

        self.on_start = on_start
        self.on_update = on_update
        self.on_repeat = on_repeat
        self.on_complete = on_complete

        self._ease = get_easing(ease)
        self._ends: dict[str, float] = dict(end_values)
        self._explicit_starts: dict[str, float] = dict(start_values or {})
        self._starts: dict[str, float] | None = None

        self._state = TweenState.PENDING
        self._paused_from = TweenState.PENDING
        self._elapsed = 0.0
        self._cycle = 0
        self._reversed = False
        self._engine: Any = None

    def __repr__(self) -> str:
        return f"Tween({self.name!r}, state={self._state.name}, props={sorted(self._ends)})"

    # Introspection
    @property
    def state(self) -> TweenState:
        return self._state

    @property
    def properties(self) -> frozenset[str]:
        """Attributes this tween still owns."""
        return frozenset(self._ends)

    @property
    def end_values(self) -> dict[str, float]:
        return dict(self._ends)

    @property
    def is_active(self) -> bool:
        """True while the tween can still write to its target."""
        return self._state in (TweenState.PENDING, TweenState.RUNNING, TweenState.PAUSED)

    @property
    def is_finished(self) -> bool:
        return self._state in (TweenState.COMPLETE, TweenState.KILLED)

    @property
    def reversed(self) -> bool:
        return self._reversed

    @property
    def total_duration(self) -> float:
        """Duration of all iterations, excluding the initial delay (inf if endless)."""
        if self.repeat == -1 and self.duration > 0:
            return float("inf")
        return self.duration * (self.repeat + 1) + self.repeat_delay * self.repeat

    @property
    def progress(self) -> float:
        """Progress of the current iteration (0.0 to 1.0)."""
        if self.duration <= 0:
            return 1.0 if self._state is TweenState.COMPLETE else 0.0
        local = self._elapsed - self.delay - self._cycle * (self.duration + self.repeat_delay)
        return max(0.0, min(1.0, local / self.duration))

    # Playback control
    def pause(self) -> "Tween":
        if self._state in (TweenState.PENDING, TweenState.RUNNING):
            self._paused_from = self._state
            self._state = TweenState.PAUSED
        return self

    def resume(self) -> "Tween":
        if self._state is TweenState.PAUSED:
            self._state = self._paused_from
        return self

    def play(self) -> "Tween":
        """Resume playing forward."""
        self._reversed = False
        return self.resume()

    def reverse(self) -> "Tween":
        """Flip the playing direction from the current position."""
        self._reversed = not self._reversed
        if self._state is TweenState.COMPLETE:
            # The last frame may have run past the end
            if self.repeat != -1:
                self._elapsed = min(self._elapsed, self.delay + self.total_duration)
            self._state = TweenState.RUNNING
            self._reattach()
        return self

    def restart(self) -> "Tween":
        """Play again from the beginning, delay included."""
        if self._state is TweenState.KILLED:
            return self
        self._elapsed = 0.0
        self._cycle = 0
        self._reversed = False
        self._state = TweenState.PENDING
        if self._starts is not None and self.duration > 0:
            self._render(0.0)
        self._reattach()
        return self

    def kill(self) -> "Tween":
        """Stop immediately without firing on_complete."""
        if self._state is not TweenState.KILLED:
            self._state = TweenState.KILLED
            logger.debug(f"Tween killed: {self.name}")
        return self

    def drop_properties(self, props: set[str] | frozenset[str]) -> frozenset[str]:
        """Give up ownership of some attributes; kills the tween when none remain.

        Returns:
            The attributes that were actually dropped
        """
        dropped = frozenset(props) & frozenset(self._ends)
        for prop in dropped:
            del self._ends[prop]
            self._explicit_starts.pop(prop, None)
            if self._starts is not None:
                self._starts.pop(prop, None)
        if dropped and not self._ends:
            self.kill()
        return dropped

    def render_start(self) -> None:
        """Write the explicit start values to the target right away."""
        for prop, value in self._explicit_starts.items():
            setattr(self.target, prop, value)

    # Frame update
    def advance(self, dt: float) -> None:
        """Advance the tween by dt seconds and write the target."""
        if self._state not in (TweenState.PENDING, TweenState.RUNNING):
            return

        self._elapsed += -dt if self._reversed else dt
        active = self._elapsed - self.delay

        if self._state is TweenState.PENDING:
            if active < 0:
                if self._reversed:
                    self._finish()
                return
            self._start()

        self._render(active)

    def _start(self) -> None:
        self._state = TweenState.RUNNING
        if self._starts is None:
            self._starts = {
                prop: self._explicit_starts.get(prop, float(getattr(self.target, prop)))
                for prop in self._ends
            }
        logger.debug(f"Tween started: {self.name}")
        if self.on_start:
            self.on_start()

    def _render(self, active: float) -> None:
        total = self.total_duration

        if self.duration <= 0 or (not self._reversed and active >= total):
            final = 1.0
            if self.yoyo and self.repeat > 0 and self.repeat % 2 == 1:
                final = 0.0
            self._cycle = max(self.repeat, 0)
            self._apply(final)
            self._finish()
            return

        if self._reversed and active <= 0:
            self._elapsed = self.delay
            self._cycle = 0
            self._apply(0.0)
            self._finish()
            return

        cycle_length = self.duration + self.repeat_delay
        cycle = int(active // cycle_length)
        if self.repeat >= 0:
            cycle = min(cycle, self.repeat)
        local = min(active - cycle * cycle_length, self.duration)

        if cycle > self._cycle and self.on_repeat:
            self.on_repeat()
        self._cycle = cycle

        t = local / self.duration
        if self.yoyo and cycle % 2 == 1:
            t = 1.0 - t
        self._apply(t)

    def _apply(self, t: float) -> None:
        starts = self._starts or {}
        if t >= 1.0:
            values = dict(self._ends)
        elif t <= 0.0:
            values = {prop: starts[prop] for prop in self._ends if prop in starts}
        else:
            eased = self._ease(t)
            values = {
                prop: starts[prop] + (end - starts[prop]) * eased
                for prop, end in self._ends.items()
                if prop in starts
            }
        for prop, value in values.items():
            setattr(self.target, prop, value)
        if self.on_update:
            self.on_update()

    def _finish(self) -> None:
        self._state = TweenState.COMPLETE
        logger.debug(f"Tween complete: {self.name}")
        if self.on_complete and not self._reversed:
            self.on_complete()

    def _reattach(self) -> None:
        if self._engine is not None:
            self._engine._track(self)
