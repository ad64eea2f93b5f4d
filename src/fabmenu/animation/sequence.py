"""Sequential playback of tween stages.

A Sequence runs a list of stages one after another: each stage is a
factory that issues a tween on a Tweener, and the completion of that tween
starts the next stage. A looping sequence waits ``loop_delay`` seconds of
engine time and starts over from the first stage.
"""

from enum import Enum, auto
from typing import Callable, List, Optional
import logging

from fabmenu.animation.engine import Tweener
from fabmenu.animation.tween import Callback, Tween

logger = logging.getLogger(__name__)

# A stage issues one tween on the given engine and returns it
Stage = Callable[[Tweener], Tween]


class SequenceState(Enum):
    """Sequence playback state."""

    STOPPED = auto()
    PLAYING = auto()
    WAITING = auto()   # between loops
    FINISHED = auto()


class Sequence:
    """Ordered tween stages driven by completion.

    Attributes:
        name: Sequence identifier
        loop: Start over after the last stage
        loop_delay: Seconds to wait before starting over
        on_complete: Called when a non-looping sequence finishes
    """

    def __init__(
        self,
        engine: Tweener,
        stages: Optional[List[Stage]] = None,
        name: str = "sequence",
        loop: bool = False,
        loop_delay: float = 0.0,
        on_complete: Optional[Callback] = None,
    ) -> None:
        self.engine = engine
        self.stages: List[Stage] = list(stages or [])
        self.name = name
        self.loop = loop
        self.loop_delay = loop_delay
        self.on_complete = on_complete

        self._state = SequenceState.STOPPED
        self._index = 0
        self._current: Optional[Tween] = None
        self._stage_callback: Optional[Callback] = None
        self._loops = 0

    def add_stage(self, stage: Stage) -> "Sequence":
        """Append a stage.

        Returns:
            Self for method chaining
        """
        self.stages.append(stage)
        return self

    @property
    def state(self) -> SequenceState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state in (SequenceState.PLAYING, SequenceState.WAITING)

    @property
    def current_stage(self) -> int:
        """Index of the stage currently playing."""
        return self._index

    @property
    def loops_completed(self) -> int:
        return self._loops

    def start(self) -> "Sequence":
        """Start from the first stage, stopping any run in progress."""
        self.stop()
        if not self.stages:
            logger.warning(f"Sequence {self.name} has no stages")
            self._state = SequenceState.FINISHED
            return self

        self._state = SequenceState.PLAYING
        self._run(0)
        return self

    def stop(self) -> "Sequence":
        """Stop playback and kill the running stage."""
        if self._current is not None:
            self.engine.kill(self._current)
            self._current = None
        self._state = SequenceState.STOPPED
        self._index = 0
        return self

    def _run(self, index: int) -> None:
        self._index = index
        tween = self.stages[index](self.engine)

        # The stage's own completion callback runs before the next stage starts
        self._stage_callback = tween.on_complete
        tween.on_complete = self._on_stage_complete
        self._current = tween
        logger.debug(f"Sequence {self.name}: stage {index} started")

    def _on_stage_complete(self) -> None:
        finished = self._current
        if self._stage_callback:
            self._stage_callback()

        # The stage callback restarted or stopped the sequence
        if self._current is not finished:
            return
        self._current = None

        if self._state is not SequenceState.PLAYING:
            return

        if self._index + 1 < len(self.stages):
            self._run(self._index + 1)
            return

        self._loops += 1
        if self.loop:
            self._state = SequenceState.WAITING
            self._current = self.engine.delayed_call(self.loop_delay, self._on_loop_delay)
            return

        self._state = SequenceState.FINISHED
        logger.debug(f"Sequence {self.name} finished")
        if self.on_complete:
            self.on_complete()

    def _on_loop_delay(self) -> None:
        self._current = None
        if self._state is SequenceState.WAITING:
            self._state = SequenceState.PLAYING
            self._run(0)
