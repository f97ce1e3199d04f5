"""Playback controller state machine tests.

Timer ticks are driven by calling the tick slot directly so the tests stay
deterministic; the QTimer itself is only checked for being armed or not.
"""

from __future__ import annotations

from typing import List

import pytest

from arrayviz.arr_model import OperationRequest, Snapshot
from arrayviz.arr_steps import generate
from core.playback import PlaybackController


@pytest.fixture
def timeline():
    return generate(OperationRequest((5, 12, 8, 23, 16), "find", value=8))


@pytest.fixture
def controller(qapp) -> PlaybackController:
    return PlaybackController(interval_ms=500)


def test_initial_state_is_idle_and_empty(controller: PlaybackController) -> None:
    assert controller.length == 0
    assert controller.cursor == 0
    assert controller.playing is False
    assert controller.active_snapshot is None


def test_step_bounds_are_no_ops(controller, timeline) -> None:
    """Stepping past either end leaves the cursor alone and never raises."""
    controller.load_timeline(timeline)

    controller.step_backward()
    assert controller.cursor == 0

    for _ in range(len(timeline) + 3):
        controller.step_forward()
    assert controller.cursor == len(timeline) - 1

    controller.step_forward()
    assert controller.cursor == len(timeline) - 1
    assert controller.active_snapshot is timeline[-1]


def test_autoplay_self_terminates(controller, timeline) -> None:
    """After n-1 ticks playback stops on the last frame and stays there."""
    finished: List[bool] = []
    controller.finished.connect(lambda: finished.append(True))
    controller.load_timeline(timeline)

    controller.play()
    assert controller.playing and controller.timer_active

    for _ in range(len(timeline) - 1):
        controller._on_tick()

    assert controller.playing is False
    assert controller.timer_active is False
    assert controller.cursor == len(timeline) - 1
    assert finished == [True]

    controller._on_tick()
    controller._on_tick()
    assert controller.cursor == len(timeline) - 1
    assert finished == [True]


def test_load_timeline_resets_playback(controller, timeline) -> None:
    controller.load_timeline(timeline)
    controller.play()
    controller._on_tick()
    assert controller.cursor == 1

    replacement = generate(OperationRequest((1,), "pop"))
    controller.load_timeline(replacement)

    assert controller.playing is False
    assert controller.timer_active is False
    assert controller.cursor == 0
    assert controller.timeline == replacement


def test_pause_is_idempotent_and_keeps_cursor(controller, timeline) -> None:
    controller.load_timeline(timeline)
    controller.play()
    controller._on_tick()
    controller._on_tick()

    controller.pause()
    controller.pause()
    assert controller.playing is False
    assert controller.cursor == 2

    controller._on_tick()
    assert controller.cursor == 2


def test_reset_rewinds_but_keeps_timeline(controller, timeline) -> None:
    controller.load_timeline(timeline)
    controller.play()
    controller._on_tick()
    controller.reset()
    assert controller.cursor == 0
    assert controller.playing is False
    assert controller.length == len(timeline)


def test_play_rearms_a_single_timer(controller, timeline) -> None:
    controller.load_timeline(timeline)
    controller.play()
    controller.play()
    assert controller.timer_active
    controller._on_tick()
    assert controller.cursor == 1


def test_play_on_empty_or_finished_timeline_does_not_arm(controller) -> None:
    controller.play()
    assert controller.playing is False
    assert controller.timer_active is False

    controller.load_timeline([Snapshot((1,))])
    controller.play()
    assert controller.playing is False


def test_empty_timeline_has_nothing_to_display(controller) -> None:
    seen: List[object] = []
    controller.snapshotChanged.connect(seen.append)
    controller.load_timeline([])
    assert controller.active_snapshot is None
    assert seen == [None]


def test_set_speed_rearms_running_timer(controller, timeline) -> None:
    """The new period applies straight away while playing."""
    controller.load_timeline(timeline)
    controller.play()
    controller.set_speed(250)

    assert controller.interval_ms == 250
    assert controller._timer.interval() == 250
    assert controller.timer_active
    assert controller.playing


def test_set_speed_while_idle_only_changes_period(controller) -> None:
    controller.set_speed(750)
    assert controller.interval_ms == 750
    assert controller.timer_active is False


def test_set_speed_is_clamped(controller) -> None:
    controller.set_speed(1)
    assert controller.interval_ms == 100
    controller.set_speed(10_000_000)
    assert controller.interval_ms == 5000


def test_speed_multiplier_scales_base_interval(controller) -> None:
    controller.set_speed_multiplier(2.0)
    assert controller.interval_ms == 250
    controller.set_speed_multiplier(0.5)
    assert controller.interval_ms == 1000


def test_snapshot_signal_follows_cursor(controller, timeline) -> None:
    seen: List[object] = []
    controller.snapshotChanged.connect(seen.append)
    controller.load_timeline(timeline)
    controller.step_forward()
    controller.step_backward()
    assert seen == [timeline[0], timeline[1], timeline[0]]


def test_controllers_do_not_share_timers(qapp, timeline) -> None:
    first = PlaybackController(interval_ms=500)
    second = PlaybackController(interval_ms=500)
    first.load_timeline(timeline)
    second.load_timeline(timeline)

    first.play()
    assert first.timer_active and not second.timer_active
    first._on_tick()
    assert second.cursor == 0
