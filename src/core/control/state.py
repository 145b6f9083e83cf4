"""Persistent controller state threaded through the polling loop."""

from __future__ import annotations

from dataclasses import dataclass

from core.gestures.pose import Pose


@dataclass
class ControllerState:
    """The only state that survives between poses.

    Attributes:
        last_acted_pose: Last pose that produced an action. ``rest`` never
            overwrites it.
        direction: True while driving logically forward. Only a double tap
            changes it.
    """

    last_acted_pose: Pose = Pose.UNKNOWN
    direction: bool = True
