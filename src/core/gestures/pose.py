"""Symbolic gesture vocabulary delivered by the armband."""

from __future__ import annotations

from enum import Enum


class Pose(Enum):
    """Poses classified by the armband firmware."""

    REST = "rest"
    FIST = "fist"
    WAVE_IN = "waveIn"
    WAVE_OUT = "waveOut"
    FINGERS_SPREAD = "fingersSpread"
    DOUBLE_TAP = "doubleTap"
    UNKNOWN = "unknown"

    @property
    def is_active(self) -> bool:
        """True for poses that keep the armband unlocked while held."""
        return self not in (Pose.REST, Pose.UNKNOWN)

    @classmethod
    def parse(cls, name: str) -> "Pose":
        """Accept camelCase ("waveIn"), snake_case ("wave_in") or enum names."""
        key = name.strip().replace("_", "").lower()
        for pose in cls:
            if pose.value.lower() == key:
                return pose
        return cls.UNKNOWN


class Arm(Enum):
    LEFT = "left"
    RIGHT = "right"
    UNKNOWN = "unknown"

    @property
    def short_label(self) -> str:
        return {"left": "L", "right": "R"}.get(self.value, "?")


class XDirection(Enum):
    TOWARD_WRIST = "toward_wrist"
    TOWARD_ELBOW = "toward_elbow"
    UNKNOWN = "unknown"


__all__ = ["Arm", "Pose", "XDirection"]
