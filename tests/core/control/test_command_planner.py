"""Tests for the CommandPlanner decision table and speed quantization."""

from __future__ import annotations

import pytest

from core.control.command_planner import CommandPlanner, PlanResult
from core.control.commands import Command, CommandKind
from core.gestures.pose import Pose
from utils.config_sections import GestureConfig


@pytest.fixture()
def planner() -> CommandPlanner:
    return CommandPlanner()


@pytest.mark.parametrize("band", range(18))
@pytest.mark.parametrize("direction", [True, False])
def test_fist_always_stops_and_keeps_direction(planner, band, direction):
    assert planner.plan(Pose.FIST, band, direction) == PlanResult(Command.stop(), direction)


@pytest.mark.parametrize(
    "pose, direction, kind",
    [
        (Pose.WAVE_OUT, True, CommandKind.TURN_LEFT_FORWARD),
        (Pose.WAVE_OUT, False, CommandKind.TURN_LEFT_BACKWARD),
        (Pose.WAVE_IN, True, CommandKind.TURN_RIGHT_FORWARD),
        (Pose.WAVE_IN, False, CommandKind.TURN_RIGHT_BACKWARD),
    ],
)
def test_turns_follow_direction(planner, pose, direction, kind):
    result = planner.plan(pose, 12, direction)
    assert result.command == Command(kind)
    assert result.direction is direction


def test_fingers_spread_at_neutral_band_sends_nothing(planner):
    assert planner.pwm(10) == 0
    assert planner.plan(Pose.FINGERS_SPREAD, 10, True) == PlanResult(None, True)


def test_fingers_spread_band_15_is_speed_three(planner):
    assert planner.pwm(15) == pytest.approx(178.5)
    assert planner.plan(Pose.FINGERS_SPREAD, 15, True).command == Command.move(True, 3)


def test_fingers_spread_backward_uses_backward_family(planner):
    result = planner.plan(Pose.FINGERS_SPREAD, 15, False)
    assert result.command == Command(CommandKind.MOVE_BACKWARD, 3)
    assert result.direction is False


@pytest.mark.parametrize(
    "band, level",
    [
        (0, None),
        (9, None),
        (10, None),
        (11, 1),
        (12, 2),
        (13, 2),
        (14, 3),
        (15, 3),
        (16, 4),
        (17, 4),
    ],
)
def test_speed_levels_by_band(planner, band, level):
    assert planner.speed_level(band) == level


def test_band_reaching_full_duty_selects_nothing(planner):
    # 0.2 + (18 - 10) / 10 = 1.0 -> at the upper bound, outside every level
    assert planner.speed_level(18) is None


@pytest.mark.parametrize("direction", [True, False])
def test_double_tap_toggles_without_command(planner, direction):
    assert planner.plan(Pose.DOUBLE_TAP, 5, direction) == PlanResult(None, not direction)


@pytest.mark.parametrize("direction", [True, False])
def test_double_tap_latch_backward_mode_always_selects_backward(direction):
    planner = CommandPlanner(gestures=GestureConfig(double_tap_mode="latch_backward"))
    assert planner.plan(Pose.DOUBLE_TAP, 5, direction) == PlanResult(None, False)


def test_unknown_pose_stops(planner):
    assert planner.plan(Pose.UNKNOWN, 3, False) == PlanResult(Command.stop(), False)


def test_invalid_double_tap_mode_rejected():
    with pytest.raises(ValueError):
        CommandPlanner(gestures=GestureConfig(double_tap_mode="flip"))


def test_move_command_requires_valid_level():
    with pytest.raises(ValueError):
        Command(CommandKind.MOVE_FORWARD, 5)
    with pytest.raises(ValueError):
        Command(CommandKind.STOP, 1)
