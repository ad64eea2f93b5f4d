"""Tests for tweens and the Tweener engine."""

from __future__ import annotations

import pytest

from fabmenu.animation.engine import Tweener
from fabmenu.animation.tween import Tween, TweenState


class TestTweenPlayback:
    """Tests for basic tween playback."""

    def test_linear_progress(self, tweener: Tweener, box) -> None:
        tween = tweener.animate(box, {"x": 100.0}, duration=1.0, ease="linear")

        tweener.update(0.5)
        assert box.x == pytest.approx(50.0)
        assert tween.state is TweenState.RUNNING
        assert tween.progress == pytest.approx(0.5)

        tweener.update(0.5)
        assert box.x == 100.0
        assert tween.state is TweenState.COMPLETE
        assert tweener.tween_count == 0

    def test_on_complete_called_once(self, tweener: Tweener, box) -> None:
        calls = []
        tweener.animate(box, {"x": 10.0}, duration=0.2, on_complete=lambda: calls.append(1))

        for _ in range(10):
            tweener.update(0.1)

        assert calls == [1]

    def test_lands_exactly_on_end_values(self, tweener: Tweener, box) -> None:
        tweener.animate(box, {"x": 33.3, "y": -7.1}, duration=0.3, ease="expo.out")
        for _ in range(7):
            tweener.update(0.05)
        assert (box.x, box.y) == (33.3, -7.1)

    def test_delay_holds_start(self, tweener: Tweener, box) -> None:
        tween = tweener.animate(box, {"x": 100.0}, duration=1.0, delay=0.5, ease="linear")

        tweener.update(0.25)
        assert box.x == 0.0
        assert tween.state is TweenState.PENDING

    def test_start_values_read_when_delay_ends(self, tweener: Tweener, box) -> None:
        tweener.animate(box, {"x": 100.0}, duration=1.0, delay=0.5, ease="linear")

        tweener.update(0.25)
        box.x = 20.0
        tweener.update(0.25)
        tweener.update(0.5)

        assert box.x == pytest.approx(60.0)

    def test_on_start_fires_after_delay(self, tweener: Tweener, box) -> None:
        started = []
        tweener.animate(box, {"x": 1.0}, duration=1.0, delay=0.3, on_start=lambda: started.append(1))

        tweener.update(0.2)
        assert started == []
        tweener.update(0.2)
        assert started == [1]

    def test_zero_duration_jumps(self, tweener: Tweener, box) -> None:
        tweener.animate(box, {"x": 5.0}, duration=0.0)
        tweener.update(0.0)
        assert box.x == 5.0

    def test_global_speed(self, tweener: Tweener, box) -> None:
        tweener.global_speed = 2.0
        tweener.animate(box, {"x": 100.0}, duration=1.0, ease="linear")
        tweener.update(0.25)
        assert box.x == pytest.approx(50.0)

    def test_global_speed_not_negative(self, tweener: Tweener) -> None:
        tweener.global_speed = -3.0
        assert tweener.global_speed == 0.0

    def test_pause_all(self, tweener: Tweener, box) -> None:
        tweener.animate(box, {"x": 100.0}, duration=1.0, ease="linear")
        tweener.pause_all()
        assert tweener.update(1.0) == []
        assert box.x == 0.0
        tweener.resume_all()
        tweener.update(1.0)
        assert box.x == 100.0


class TestTweenValidation:
    """Tests for rejected tween parameters."""

    def test_negative_duration(self, box) -> None:
        with pytest.raises(ValueError):
            Tween(box, {"x": 1.0}, duration=-1.0)

    def test_negative_delay(self, box) -> None:
        with pytest.raises(ValueError):
            Tween(box, {"x": 1.0}, delay=-0.1)

    def test_bad_repeat(self, box) -> None:
        with pytest.raises(ValueError):
            Tween(box, {"x": 1.0}, repeat=-2)

    def test_non_numeric_property(self, box) -> None:
        with pytest.raises(TypeError):
            Tween(box, {"x": "left"})

    def test_bool_property(self, box) -> None:
        with pytest.raises(TypeError):
            Tween(box, {"x": True})

    def test_unknown_ease(self, box) -> None:
        with pytest.raises(ValueError):
            Tween(box, {"x": 1.0}, ease="wobble.out")


class TestRepeatAndControls:
    """Tests for repeat, yoyo and handle controls."""

    def test_yoyo_returns_to_start(self, tweener: Tweener, box) -> None:
        repeats = []
        tween = tweener.animate(
            box, {"x": 100.0}, duration=1.0, ease="linear",
            repeat=1, yoyo=True, on_repeat=lambda: repeats.append(1),
        )

        tweener.update(1.5)
        assert box.x == pytest.approx(50.0)
        assert repeats == [1]

        tweener.update(0.5)
        assert box.x == 0.0
        assert tween.state is TweenState.COMPLETE

    def test_repeat_without_yoyo_restarts(self, tweener: Tweener, box) -> None:
        tweener.animate(box, {"x": 100.0}, duration=1.0, ease="linear", repeat=2)
        tweener.update(1.25)
        assert box.x == pytest.approx(25.0)
        tweener.update(2.0)
        assert box.x == 100.0

    def test_infinite_repeat_never_finishes(self, tweener: Tweener, box) -> None:
        tween = tweener.animate(box, {"y": -10.0}, duration=1.5, repeat=-1, yoyo=True, ease="sine.out")
        for _ in range(100):
            tweener.update(0.1)
        assert tween.is_active
        assert tweener.tween_count == 1

    def test_pause_and_resume(self, tweener: Tweener, box) -> None:
        tween = tweener.animate(box, {"x": 100.0}, duration=1.0, ease="linear")
        tweener.update(0.25)
        tween.pause()
        tweener.update(1.0)
        assert box.x == pytest.approx(25.0)
        assert tween.state is TweenState.PAUSED

        tween.resume()
        tweener.update(0.25)
        assert box.x == pytest.approx(50.0)

    def test_reverse_plays_back_to_start(self, tweener: Tweener, box) -> None:
        completed = []
        tween = tweener.animate(box, {"x": 100.0}, duration=1.0, ease="linear",
                                on_complete=lambda: completed.append(1))
        tweener.update(0.6)
        tween.reverse()
        tweener.update(0.2)
        assert box.x == pytest.approx(40.0)

        tweener.update(1.0)
        assert box.x == 0.0
        assert tween.state is TweenState.COMPLETE
        assert completed == []

    def test_reverse_after_complete(self, tweener: Tweener, box) -> None:
        tween = tweener.animate(box, {"x": 100.0}, duration=1.0, ease="linear")
        tweener.update(1.0)
        assert tweener.tween_count == 0

        tween.reverse()
        assert tweener.tween_count == 1
        tweener.update(0.5)
        assert box.x == pytest.approx(50.0)

    def test_reverse_after_overshooting_frame(self, tweener: Tweener, box) -> None:
        repeats = []
        tween = tweener.animate(box, {"x": 100.0}, duration=1.0, ease="linear",
                                on_repeat=lambda: repeats.append(1))
        for _ in range(4):
            tweener.update(0.3)
        assert box.x == 100.0

        tween.reverse()
        tweener.update(0.1)

        assert box.x == pytest.approx(90.0)
        assert repeats == []

    def test_reverse_yoyo_after_overshoot(self, tweener: Tweener, box) -> None:
        tween = tweener.animate(box, {"x": 100.0}, duration=1.0, ease="linear", repeat=1, yoyo=True)
        tweener.update(2.5)
        assert box.x == 0.0

        tween.reverse()
        tweener.update(0.1)
        assert box.x == pytest.approx(10.0)

    def test_restart(self, tweener: Tweener, box) -> None:
        tween = tweener.animate(box, {"x": 100.0}, duration=1.0, ease="linear")
        tweener.update(1.0)

        tween.restart()
        assert box.x == 0.0
        tweener.update(0.5)
        assert box.x == pytest.approx(50.0)

    def test_kill_skips_on_complete(self, tweener: Tweener, box) -> None:
        completed = []
        tween = tweener.animate(box, {"x": 100.0}, duration=1.0, on_complete=lambda: completed.append(1))
        assert tweener.kill(tween) is True
        assert tweener.kill(tween) is False

        finished = tweener.update(2.0)
        assert finished == [tween]
        assert completed == []
        assert box.x == 0.0

    def test_killed_tween_cannot_restart(self, tweener: Tweener, box) -> None:
        tween = tweener.animate(box, {"x": 100.0}, duration=1.0)
        tween.kill()
        tween.restart()
        assert tween.state is TweenState.KILLED


class TestOverwrite:
    """Tests for conflicting tweens on the same target."""

    def test_auto_takes_over_overlapping_properties(self, tweener: Tweener, box) -> None:
        first = tweener.animate(box, {"x": 100.0, "y": 100.0}, duration=1.0)
        second = tweener.animate(box, {"x": -50.0}, duration=1.0)

        assert first.is_active
        assert first.properties == {"y"}
        assert second.properties == {"x"}

    def test_auto_kills_tween_left_without_properties(self, tweener: Tweener, box) -> None:
        completed = []
        first = tweener.animate(box, {"x": 100.0}, duration=1.0, on_complete=lambda: completed.append(1))
        tweener.update(0.5)
        tweener.animate(box, {"x": 0.0}, duration=1.0, delay=0.5, ease="linear")

        assert first.state is TweenState.KILLED
        tweener.update(5.0)
        assert completed == []
        assert box.x == 0.0

    def test_overwrite_happens_at_issue_time(self, tweener: Tweener, box) -> None:
        tweener.animate(box, {"x": 100.0}, duration=1.0, ease="linear")
        tweener.update(0.5)
        tweener.animate(box, {"x": 0.0}, duration=1.0, delay=1.0, ease="linear")

        # The superseded tween no longer moves x while the new one waits
        tweener.update(0.5)
        assert box.x == pytest.approx(50.0)

    def test_overwrite_true_kills_everything(self, box) -> None:
        tweener = Tweener(overwrite=True)
        first = tweener.animate(box, {"x": 100.0, "y": 100.0}, duration=1.0)
        tweener.animate(box, {"opacity": 0.0}, duration=1.0)
        assert first.state is TweenState.KILLED

    def test_overwrite_false_coexists(self, box) -> None:
        tweener = Tweener(overwrite=False)
        assert tweener.supports_overwrite is False

        first = tweener.animate(box, {"x": 100.0}, duration=1.0)
        second = tweener.animate(box, {"x": 0.0}, duration=1.0)
        assert first.is_active and second.is_active
        assert len(tweener.tweens_of(box)) == 2

    def test_per_call_overwrite(self, tweener: Tweener, box) -> None:
        first = tweener.animate(box, {"x": 100.0}, duration=1.0)
        tweener.animate(box, {"x": 0.0}, duration=1.0, overwrite=False)
        assert first.is_active

    def test_other_targets_untouched(self, tweener: Tweener, box) -> None:
        other = type(box)()
        first = tweener.animate(other, {"x": 100.0}, duration=1.0)
        tweener.animate(box, {"x": 100.0}, duration=1.0)
        assert first.is_active

    def test_set_supersedes_and_applies(self, tweener: Tweener, box) -> None:
        tween = tweener.animate(box, {"x": 100.0, "y": 10.0}, duration=1.0)
        tweener.set(box, x=7.0)
        assert box.x == 7.0
        assert tween.properties == {"y"}

        tweener.update(2.0)
        assert box.x == 7.0
        assert box.y == 10.0

    def test_kill_tweens_of(self, tweener: Tweener, box) -> None:
        tween = tweener.animate(box, {"x": 100.0, "y": 10.0}, duration=1.0)
        assert tweener.kill_tweens_of(box, "y") == 1
        assert tween.properties == {"x"}
        assert tweener.kill_tweens_of(box) == 1
        assert not tweener.is_tweening(box)


class TestFromTo:
    """Tests for from_, from_to, set and delayed calls."""

    def test_from_to_renders_start_immediately(self, tweener: Tweener, box) -> None:
        tweener.from_to(box, {"x": 10.0}, {"x": 20.0}, duration=1.0, ease="linear")
        assert box.x == 10.0
        tweener.update(1.0)
        assert box.x == 20.0

    def test_from_animates_back_to_current(self, tweener: Tweener, box) -> None:
        box.x = 50.0
        tweener.from_(box, {"x": 0.0}, duration=1.0, ease="linear")
        assert box.x == 0.0
        tweener.update(0.5)
        assert box.x == pytest.approx(25.0)
        tweener.update(0.5)
        assert box.x == 50.0

    def test_set_non_numeric(self, tweener: Tweener) -> None:
        from fabmenu.menu.element import MenuChild

        child = MenuChild(interactable=True)
        tweener.set(child, interactable=False)
        assert child.interactable is False

    def test_delayed_call(self, tweener: Tweener) -> None:
        calls = []
        tweener.delayed_call(0.5, lambda: calls.append(1))
        tweener.update(0.4)
        assert calls == []
        tweener.update(0.1)
        assert calls == [1]

    def test_listeners(self, tweener: Tweener, box) -> None:
        started, ended = [], []
        tweener.on_tween_start(started.append)
        tweener.on_tween_end(ended.append)

        tween = tweener.animate(box, {"x": 1.0}, duration=0.1)
        tweener.update(0.2)

        assert started == [tween]
        assert ended == [tween]
