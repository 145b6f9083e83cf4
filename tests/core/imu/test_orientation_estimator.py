"""Tests for quaternion to Euler conversion and orientation banding."""

from __future__ import annotations

import math

import pytest

from core.events import Quaternion
from core.imu.orientation_estimator import (
    OrientationEstimator,
    angle_to_band,
    pitch_to_band,
    quaternion_to_euler,
)


def pitch_quaternion(pitch: float) -> Quaternion:
    """Pure rotation about the y axis."""
    return Quaternion(w=math.cos(pitch / 2), x=0.0, y=math.sin(pitch / 2), z=0.0)


def test_identity_is_level():
    angles = quaternion_to_euler(Quaternion.identity())
    assert angles.roll == pytest.approx(0.0)
    assert angles.pitch == pytest.approx(0.0)
    assert angles.yaw == pytest.approx(0.0)


def test_pitch_rotation_recovers_angle():
    angles = quaternion_to_euler(pitch_quaternion(0.5))
    assert angles.pitch == pytest.approx(0.5)
    assert angles.roll == pytest.approx(0.0, abs=1e-9)


def test_asin_argument_is_clamped_for_non_unit_quaternion():
    # 2 * (w*y - z*x) = 2.0, outside the asin domain
    angles = quaternion_to_euler(Quaternion(w=1.0, x=0.0, y=1.0, z=0.0))
    assert angles.pitch == pytest.approx(math.pi / 2)


@pytest.mark.parametrize(
    "pitch, expected",
    [
        (-math.pi / 2, 0),
        (0.0, 9),
        (math.pi / 2, 17),
        (-10.0, 0),
        (10.0, 17),
    ],
)
def test_pitch_to_band(pitch, expected):
    assert pitch_to_band(pitch) == expected


def test_angle_to_band_covers_full_turn():
    assert angle_to_band(-math.pi) == 0
    assert angle_to_band(0.0) == 9
    assert angle_to_band(math.pi) == 17


def test_update_returns_and_stores_pitch_band():
    estimator = OrientationEstimator()
    band = estimator.update(pitch_quaternion(math.radians(75)))
    # (75 + 90) / 180 * 18 = 16.5
    assert band == 16
    assert estimator.pitch_band == 16
    assert estimator.bands.roll == 9


@pytest.mark.parametrize(
    "quat",
    [
        Quaternion(float("nan"), 0.0, 0.0, 0.0),
        Quaternion(float("nan"), float("nan"), float("nan"), float("nan")),
        Quaternion(float("inf"), 0.0, float("-inf"), 1.0),
        Quaternion(1e200, 1e200, -1e200, 1e200),
        Quaternion(0.0, 0.0, 0.0, 0.0),
        Quaternion(-3.0, 7.0, 12.0, -0.5),
    ],
)
def test_update_never_raises_and_stays_in_range(quat):
    estimator = OrientationEstimator()
    band = estimator.update(quat)
    assert 0 <= band <= 17
    for value in (estimator.bands.roll, estimator.bands.pitch, estimator.bands.yaw):
        assert 0 <= value <= 17


def test_reset_clears_bands():
    estimator = OrientationEstimator()
    estimator.update(pitch_quaternion(0.3))
    estimator.reset()
    assert estimator.pitch_band == 0
