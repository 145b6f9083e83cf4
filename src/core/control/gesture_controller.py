"""
Gesture controller: the single owner of the driving-loop state.

Routes each device event of a polling tick, in receipt order, to the
component that consumes it:

    OrientationEvent -> OrientationEstimator (pitch band)
    PoseEvent        -> PoseDebouncer -> CommandPlanner -> CommandSink
    Arm/Lock/Unpair  -> on-arm and lock flags

Poses are only planned while the armband is synced to an arm. Until then
they update the displayed pose and nothing else, so the debouncer does not
remember a pose that never produced an action.

Usage:
    controller = GestureController(sink=ConsoleCommandSink())
    for _ in range(ticks):
        controller.process(source.poll(50))
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from core.control.command_planner import CommandPlanner
from core.control.commands import Command
from core.control.state import ControllerState
from core.events import (
    ArmSyncEvent,
    ArmUnsyncEvent,
    DeviceEvent,
    LockEvent,
    OrientationEvent,
    PoseEvent,
    UnlockEvent,
    UnpairEvent,
)
from core.gestures.pose import Arm, Pose
from core.gestures.pose_debouncer import PoseDebouncer
from core.imu.orientation_estimator import OrientationBands, OrientationEstimator

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ControllerSnapshot:
    """Read-only view of the controller for display purposes."""

    on_arm: bool
    arm: Arm
    is_unlocked: bool
    current_pose: Pose
    last_acted_pose: Pose
    direction: bool
    bands: OrientationBands


class GestureController:
    """Turns device events into vehicle commands."""

    def __init__(
        self,
        *,
        estimator: Optional[OrientationEstimator] = None,
        planner: Optional[CommandPlanner] = None,
        sink=None,
        trace=None,
        state: Optional[ControllerState] = None,
    ) -> None:
        self.state = state if state is not None else ControllerState()
        self.estimator = estimator or OrientationEstimator()
        self.debouncer = PoseDebouncer(self.state)
        self.planner = planner or CommandPlanner()
        self.sink = sink
        self.trace = trace

        self.on_arm = False
        self.arm = Arm.UNKNOWN
        self.is_unlocked = False
        self.current_pose = Pose.UNKNOWN

        self.commands_sent = 0

    # ------------------------------------------------------------------
    # event routing
    # ------------------------------------------------------------------

    def process(self, events: Iterable[DeviceEvent]) -> List[Command]:
        """Handle one tick worth of events and return the commands produced."""
        commands: List[Command] = []
        for event in events:
            command = self.handle_event(event)
            if command is not None:
                commands.append(command)
        return commands

    def handle_event(self, event: DeviceEvent) -> Optional[Command]:
        if isinstance(event, OrientationEvent):
            self.estimator.update(event.quaternion)
        elif isinstance(event, PoseEvent):
            return self._on_pose(event.pose)
        elif isinstance(event, ArmSyncEvent):
            self.on_arm = True
            self.arm = event.arm
            log.info("Armband synced on %s arm", event.arm.value)
        elif isinstance(event, ArmUnsyncEvent):
            self.on_arm = False
            log.info("Armband unsynced")
        elif isinstance(event, UnlockEvent):
            self.is_unlocked = True
        elif isinstance(event, LockEvent):
            self.is_unlocked = False
        elif isinstance(event, UnpairEvent):
            self._on_unpair()
        else:
            log.warning("Ignoring unsupported event %r", event)
        return None

    def _on_pose(self, pose: Pose) -> Optional[Command]:
        self.current_pose = pose
        if not self.on_arm:
            return None

        previous = self.state.last_acted_pose
        actionable = self.debouncer.on_pose_event(pose)
        if actionable is None:
            return None

        if self.trace is not None:
            self.trace.log_pose_transition(actionable.value, previous.value)

        result = self.planner.plan(actionable, self.estimator.pitch_band, self.state.direction)
        self.state.direction = result.direction
        log.debug(
            "pose=%s band=%d -> command=%s direction=%s",
            actionable.value, self.estimator.pitch_band, result.command, result.direction,
        )

        if result.command is not None:
            self._dispatch(result.command)
        return result.command

    def _dispatch(self, command: Command) -> None:
        if self.sink is None:
            return
        self.sink.send(command)
        self.commands_sent += 1
        if self.trace is not None:
            self.trace.log_command(self.sink.render(command))

    def _on_unpair(self) -> None:
        log.info("Armband unpaired, clearing orientation and arm state")
        self.estimator.reset()
        self.on_arm = False
        self.is_unlocked = False

    # ------------------------------------------------------------------
    # public api
    # ------------------------------------------------------------------

    @property
    def direction(self) -> bool:
        return self.state.direction

    def snapshot(self) -> ControllerSnapshot:
        return ControllerSnapshot(
            on_arm=self.on_arm,
            arm=self.arm,
            is_unlocked=self.is_unlocked,
            current_pose=self.current_pose,
            last_acted_pose=self.state.last_acted_pose,
            direction=self.state.direction,
            bands=self.estimator.bands,
        )


__all__ = ["ControllerSnapshot", "GestureController"]
