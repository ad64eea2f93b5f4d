"""Tween engine for driving and overwriting property tweens."""

from typing import Any, Callable, Dict, List, Literal, Optional, Union
import logging

from fabmenu.animation.easing import Easing, EasingFunc
from fabmenu.animation.tween import Callback, Tween

logger = logging.getLogger(__name__)

OverwriteMode = Union[bool, Literal["auto"]]


class _DelayedCall:
    """Empty tween target for timer-only tweens."""


class Tweener:
    """Central tween management system.

    Owns every live tween, advances them from the frame loop and resolves
    conflicts when a new tween targets attributes that an older one is
    still animating.

    Overwrite modes:
        "auto": the new tween takes over the overlapping attributes; the old
            tween keeps animating the rest and is killed once it owns none.
        True: every live tween of the target is killed.
        False: tweens coexist; the caller must kill stale ones itself.

    Overwriting happens when the new tween is issued, not when its delay
    runs out, so a stale tween never writes again after being superseded.
    """

    def __init__(self, overwrite: OverwriteMode = "auto"):
        self.overwrite: OverwriteMode = overwrite
        self._tweens: List[Tween] = []
        self._paused = False
        self._global_speed = 1.0

        # Tween event callbacks
        self._on_tween_start: List[Callable[[Tween], None]] = []
        self._on_tween_end: List[Callable[[Tween], None]] = []

        logger.debug(f"Tweener initialized (overwrite={overwrite!r})")

    @property
    def supports_overwrite(self) -> bool:
        """Whether issuing a tween supersedes conflicting live tweens."""
        return self.overwrite is not False

    def animate(
        self,
        target: Any,
        props: Dict[str, float],
        *,
        duration: float = 0.5,
        delay: float = 0.0,
        ease: Union[Easing, str, EasingFunc] = Easing.EASE_OUT_QUAD,
        on_complete: Optional[Callback] = None,
        overwrite: Optional[OverwriteMode] = None,
        **options: Any,
    ) -> Tween:
        """Tween target attributes from their current values to ``props``.

        Args:
            target: Object whose attributes are animated
            props: Attribute name -> end value
            duration: Seconds per iteration
            delay: Seconds before the tween starts
            ease: Easing curve (enum, name or callable)
            on_complete: Called once when the tween finishes
            overwrite: Per-call override of the engine's overwrite mode
            **options: Extra Tween options (repeat, yoyo, on_update, ...)

        Returns:
            The Tween handle
        """
        tween = Tween(
            target,
            props,
            duration=duration,
            delay=delay,
            ease=ease,
            on_complete=on_complete,
            **options,
        )
        return self.add(tween, overwrite=overwrite)

    # GSAP-style alias
    to = animate

    def from_(
        self,
        target: Any,
        props: Dict[str, float],
        **kwargs: Any,
    ) -> Tween:
        """Tween from ``props`` back to the target's current values.

        The start values are written immediately.
        """
        ends = {prop: float(getattr(target, prop)) for prop in props}
        return self.from_to(target, props, ends, **kwargs)

    def from_to(
        self,
        target: Any,
        start_props: Dict[str, float],
        end_props: Dict[str, float],
        **kwargs: Any,
    ) -> Tween:
        """Tween between explicit start and end values.

        The start values are written immediately.
        """
        tween = self.animate(target, end_props, start_values=start_props, **kwargs)
        tween.render_start()
        return tween

    def delayed_call(self, delay: float, callback: Callback) -> Tween:
        """Call ``callback`` after ``delay`` seconds of engine time."""
        return self.add(Tween(_DelayedCall(), {}, duration=0.0, delay=delay, on_complete=callback))

    def set(self, target: Any, **props: Any) -> None:
        """Apply values immediately, superseding live tweens of those attributes."""
        self._resolve_overwrite(target, frozenset(props), "auto")
        for prop, value in props.items():
            setattr(target, prop, value)

    def add(self, tween: Tween, overwrite: Optional[OverwriteMode] = None) -> Tween:
        """Register an already built tween."""
        mode = self.overwrite if overwrite is None else overwrite
        self._resolve_overwrite(tween.target, tween.properties, mode)
        self._track(tween)

        # Notify listeners
        for callback in self._on_tween_start:
            callback(tween)

        logger.debug(
            f"Tween issued: {tween.name} (duration={tween.duration}, delay={tween.delay})"
        )
        return tween

    def kill(self, tween: Tween) -> bool:
        """Kill a tween.

        Returns:
            True if the tween was still active
        """
        if not tween.is_active:
            return False
        tween.kill()
        return True

    def kill_tweens_of(self, target: Any, *props: str) -> int:
        """Kill a target's tweens, or only their ownership of ``props``.

        Returns:
            Number of tweens affected
        """
        count = 0
        for tween in self.tweens_of(target):
            if props:
                if tween.drop_properties(frozenset(props)):
                    count += 1
            else:
                tween.kill()
                count += 1
        return count

    def kill_all(self) -> int:
        """Kill every live tween."""
        live = [t for t in self._tweens if t.is_active]
        for tween in live:
            tween.kill()
        return len(live)

    def tweens_of(self, target: Any) -> List[Tween]:
        """Live tweens animating ``target``."""
        return [t for t in self._tweens if t.target is target and t.is_active]

    def is_tweening(self, target: Any) -> bool:
        return bool(self.tweens_of(target))

    def pause_all(self) -> None:
        self._paused = True

    def resume_all(self) -> None:
        self._paused = False

    def update(self, dt: float) -> List[Tween]:
        """Advance all tweens.

        Args:
            dt: Time elapsed since last update in seconds

        Returns:
            Tweens that finished (completed or were killed) since the last update
        """
        if self._paused:
            return []

        # Apply global speed
        adjusted = dt * self._global_speed

        # Callbacks may issue new tweens, so iterate over a snapshot
        for tween in list(self._tweens):
            tween.advance(adjusted)

        finished = [t for t in self._tweens if t.is_finished]
        if finished:
            self._tweens = [t for t in self._tweens if not t.is_finished]
            for tween in finished:
                # Notify listeners
                for callback in self._on_tween_end:
                    callback(tween)
                logger.debug(f"Tween removed: {tween.name} ({tween.state.name})")

        return finished

    @property
    def global_speed(self) -> float:
        """Get the global speed multiplier."""
        return self._global_speed

    @global_speed.setter
    def global_speed(self, value: float) -> None:
        """Set the global speed multiplier."""
        self._global_speed = max(0.0, value)

    @property
    def tween_count(self) -> int:
        """Number of live tweens."""
        return sum(1 for t in self._tweens if t.is_active)

    # Event registration
    def on_tween_start(self, callback: Callable[[Tween], None]) -> None:
        """Register a callback for when tweens are issued."""
        self._on_tween_start.append(callback)

    def on_tween_end(self, callback: Callable[[Tween], None]) -> None:
        """Register a callback for when tweens are removed."""
        self._on_tween_end.append(callback)

    def _track(self, tween: Tween) -> None:
        tween._engine = self
        if tween not in self._tweens:
            self._tweens.append(tween)

    def _resolve_overwrite(
        self,
        target: Any,
        props: frozenset,
        mode: OverwriteMode,
    ) -> None:
        if mode is False:
            return

        for existing in self.tweens_of(target):
            if mode is True:
                existing.kill()
                logger.debug(f"Overwrote tween: {existing.name}")
                continue

            dropped = existing.drop_properties(props)
            if dropped:
                logger.debug(f"Overwrote {sorted(dropped)} of tween: {existing.name}")
