"""Decision table mapping actionable poses to vehicle commands."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional

from core.control.commands import Command
from core.gestures.pose import Pose
from utils.config_sections import (
    GestureConfig,
    SpeedConfig,
    load_gesture_config,
    load_speed_config,
)

log = logging.getLogger(__name__)

DOUBLE_TAP_MODES = ("toggle", "latch_backward")


@dataclass(frozen=True)
class PlanResult:
    """Outcome of one planning step.

    ``command`` is None when the pose only changes the direction flag or
    when the wrist pitch does not select any speed level.
    """

    command: Optional[Command]
    direction: bool


class CommandPlanner:
    """Maps (pose, pitch band, direction) to a command and the next direction.

    Precedence:
    1. doubleTap: direction update only
    2. fist: stop
    3. waveOut: turn left
    4. waveIn: turn right
    5. fingersSpread: move, speed from the pitch band
    6. anything else: stop
    """

    def __init__(
        self,
        *,
        speed: Optional[SpeedConfig] = None,
        gestures: Optional[GestureConfig] = None,
    ) -> None:
        self.speed = speed or load_speed_config()
        self.gestures = gestures or load_gesture_config()
        if self.gestures.double_tap_mode not in DOUBLE_TAP_MODES:
            raise ValueError(
                f"Unknown double tap mode '{self.gestures.double_tap_mode}', "
                f"expected one of {DOUBLE_TAP_MODES}"
            )

    # ------------------------------------------------------------------
    # decision table
    # ------------------------------------------------------------------

    def plan(self, pose: Pose, pitch_band: int, direction: bool) -> PlanResult:
        if pose is Pose.DOUBLE_TAP:
            new_direction = self._next_direction(direction)
            log.debug("doubleTap: direction %s -> %s", direction, new_direction)
            return PlanResult(None, new_direction)

        if pose is Pose.FIST:
            return PlanResult(Command.stop(), direction)
        if pose is Pose.WAVE_OUT:
            return PlanResult(Command.turn_left(direction), direction)
        if pose is Pose.WAVE_IN:
            return PlanResult(Command.turn_right(direction), direction)
        if pose is Pose.FINGERS_SPREAD:
            level = self.speed_level(pitch_band)
            if level is None:
                log.debug("fingersSpread at band %d selects no speed", pitch_band)
                return PlanResult(None, direction)
            return PlanResult(Command.move(direction, level), direction)

        return PlanResult(Command.stop(), direction)

    def _next_direction(self, direction: bool) -> bool:
        if self.gestures.double_tap_mode == "latch_backward":
            return False
        return not direction

    # ------------------------------------------------------------------
    # speed quantization
    # ------------------------------------------------------------------

    def duty_ratio(self, pitch_band: int) -> float:
        """Fraction of full PWM requested by the wrist pitch (0 when neutral)."""
        if pitch_band <= self.speed.neutral_band:
            return 0.0
        return self.speed.base_ratio + (pitch_band - self.speed.neutral_band) / self.speed.band_scale

    def pwm(self, pitch_band: int) -> float:
        return self.speed.pwm_max * self.duty_ratio(pitch_band)

    def speed_level(self, pitch_band: int) -> Optional[int]:
        """Speed level 1..levels, or None outside [base, base + levels * width)."""
        ratio = self.duty_ratio(pitch_band)
        # Rounded so 0.2 + 0.6 lands on the 0.8 boundary
        position = round((ratio - self.speed.base_ratio) / self.speed.level_width_ratio, 9)
        if position < 0 or position >= self.speed.levels:
            return None
        return int(math.floor(position)) + 1


__all__ = ["CommandPlanner", "DOUBLE_TAP_MODES", "PlanResult"]
