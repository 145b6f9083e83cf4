"""
Pose transition filter.

The armband repeats the current pose on every notification while it is
held. Only a change to a new, non-rest pose is actionable; everything else
is suppressed so a held fist does not resend stop commands and a held
double tap does not flip the direction on every poll.

Rules:
- rest is never actionable and is not remembered, so rest between two
  identical poses does not re-trigger the second one
- a pose equal to the last acted pose is a duplicate
- the initial last acted pose is unknown, so an initial unknown never fires
"""

from __future__ import annotations

from typing import Optional

from core.control.state import ControllerState
from core.gestures.pose import Pose


class PoseDebouncer:
    """Forward genuine pose transitions only."""

    def __init__(self, state: Optional[ControllerState] = None) -> None:
        self.state = state if state is not None else ControllerState()

    @property
    def last_acted_pose(self) -> Pose:
        return self.state.last_acted_pose

    def on_pose_event(self, pose: Pose) -> Optional[Pose]:
        """Return ``pose`` when it should be acted on, otherwise None."""
        if pose is Pose.REST:
            return None
        if pose is self.state.last_acted_pose:
            return None
        self.state.last_acted_pose = pose
        return pose
