"""
Typed device events consumed by the gesture controller.

Every callback the armband SDK can deliver is represented by one frozen
dataclass. An event source returns them as a flat list per polling tick, in
receipt order, and the controller dispatches on the concrete type.

Event kinds:
- OrientationEvent: unit quaternion sample
- PoseEvent: symbolic pose classification
- ArmSyncEvent / ArmUnsyncEvent: armband recognized on / removed from an arm
- LockEvent / UnlockEvent: pose delivery locked / unlocked
- UnpairEvent: armband disconnected from the host
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union

from core.gestures.pose import Arm, Pose, XDirection


@dataclass(frozen=True)
class Quaternion:
    """Orientation quaternion, nominally of unit length."""

    w: float
    x: float
    y: float
    z: float

    @classmethod
    def identity(cls) -> "Quaternion":
        return cls(1.0, 0.0, 0.0, 0.0)

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.w, self.x, self.y, self.z)


@dataclass(frozen=True)
class OrientationEvent:
    timestamp: int
    quaternion: Quaternion


@dataclass(frozen=True)
class PoseEvent:
    timestamp: int
    pose: Pose


@dataclass(frozen=True)
class ArmSyncEvent:
    timestamp: int
    arm: Arm = Arm.UNKNOWN
    x_direction: XDirection = XDirection.UNKNOWN


@dataclass(frozen=True)
class ArmUnsyncEvent:
    timestamp: int


@dataclass(frozen=True)
class LockEvent:
    timestamp: int


@dataclass(frozen=True)
class UnlockEvent:
    timestamp: int


@dataclass(frozen=True)
class UnpairEvent:
    timestamp: int


DeviceEvent = Union[
    OrientationEvent,
    PoseEvent,
    ArmSyncEvent,
    ArmUnsyncEvent,
    LockEvent,
    UnlockEvent,
    UnpairEvent,
]


__all__ = [
    "ArmSyncEvent",
    "ArmUnsyncEvent",
    "DeviceEvent",
    "LockEvent",
    "OrientationEvent",
    "PoseEvent",
    "Quaternion",
    "UnlockEvent",
    "UnpairEvent",
]
