"""
Orientation banding from armband quaternion samples.

This module converts the unit quaternion reported by the armband into Euler
angles and quantizes them into coarse integer bands. Only the pitch band
feeds the controller (as a speed proxy); roll and yaw bands are kept for the
console display.

Features:
- Standard quaternion to roll/pitch/yaw conversion
- asin argument clamped to [-1, 1] so slightly non-unit quaternions stay valid
- Non-finite samples degrade to a level pose instead of raising
- Bands always within [0, bands - 1]

Band layout (18 bands):
- pitch: [-pi/2, pi/2] mapped linearly, band 9 starts at a level wrist
- roll/yaw: [-pi, pi] mapped linearly

Usage:
    estimator = OrientationEstimator()
    pitch_band = estimator.update(Quaternion(w=1.0, x=0.0, y=0.0, z=0.0))
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

import numpy as np

from core.events import Quaternion
from utils.config_sections import OrientationConfig, load_orientation_config


@dataclass(frozen=True)
class EulerAngles:
    """Roll, pitch and yaw in radians."""

    roll: float
    pitch: float
    yaw: float


@dataclass(frozen=True)
class OrientationBands:
    """Quantized orientation, each value in [0, bands - 1]."""

    roll: int
    pitch: int
    yaw: int


def quaternion_to_euler(quat: Quaternion) -> EulerAngles:
    """Convert a quaternion to Euler angles.

    Non-finite components are replaced by 0 before use, which makes the
    conversion total: any input yields finite angles.
    """
    w, x, y, z = np.nan_to_num(
        np.array(quat.as_tuple(), dtype=np.float64), nan=0.0, posinf=0.0, neginf=0.0
    )

    # Overflow on huge components is expected here and resolved below
    with np.errstate(all="ignore"):
        roll = np.arctan2(2.0 * (w * x + y * z), 1.0 - 2.0 * (x * x + y * y))
        sin_pitch = np.nan_to_num(2.0 * (w * y - z * x), nan=0.0, posinf=1.0, neginf=-1.0)
        pitch = np.arcsin(np.clip(sin_pitch, -1.0, 1.0))
        yaw = np.arctan2(2.0 * (w * z + x * y), 1.0 - 2.0 * (y * y + z * z))

    return EulerAngles(
        roll=float(np.nan_to_num(roll)),
        pitch=float(np.nan_to_num(pitch)),
        yaw=float(np.nan_to_num(yaw)),
    )


def _to_band(angle: float, low: float, span: float, bands: int) -> int:
    if not math.isfinite(angle):
        angle = 0.0
    band = math.floor((angle - low) / span * bands)
    return max(0, min(bands - 1, band))


def pitch_to_band(pitch: float, bands: int = 18) -> int:
    """Map pitch in [-pi/2, pi/2] to an integer band in [0, bands - 1]."""
    return _to_band(pitch, -math.pi / 2.0, math.pi, bands)


def angle_to_band(angle: float, bands: int = 18) -> int:
    """Map roll or yaw in [-pi, pi] to an integer band in [0, bands - 1]."""
    return _to_band(angle, -math.pi, 2.0 * math.pi, bands)


class OrientationEstimator:
    """Keep the latest orientation bands derived from quaternion samples."""

    def __init__(self, config: Optional[OrientationConfig] = None) -> None:
        self.config = config or load_orientation_config()
        self.angles = EulerAngles(0.0, 0.0, 0.0)
        self.bands = OrientationBands(0, 0, 0)

    @property
    def pitch_band(self) -> int:
        return self.bands.pitch

    def update(self, quat: Quaternion) -> int:
        """Consume one sample and return the new pitch band."""
        angles = quaternion_to_euler(quat)
        n = self.config.bands
        self.angles = angles
        self.bands = OrientationBands(
            roll=angle_to_band(angles.roll, n),
            pitch=pitch_to_band(angles.pitch, n),
            yaw=angle_to_band(angles.yaw, n),
        )
        return self.bands.pitch

    def reset(self) -> None:
        """Forget the last sample (armband unpaired)."""
        self.angles = EulerAngles(0.0, 0.0, 0.0)
        self.bands = OrientationBands(0, 0, 0)


__all__ = [
    "EulerAngles",
    "OrientationBands",
    "OrientationEstimator",
    "angle_to_band",
    "pitch_to_band",
    "quaternion_to_euler",
]
