"""
Armband connection and event collection through the Myo SDK.

This module handles the low-level SDK interaction with the armband:
- SDK initialization and hub creation
- Waiting for an armband to pair (with timeout)
- Translating SDK callbacks into typed DeviceEvents
- Unlock/haptic policy while poses are held
- Graceful shutdown

Usage:
    source = MyoEventSource()
    source.connect()                 # raises DeviceNotFoundError on timeout
    events = source.poll(50)         # one tick of the main loop
    source.close()
"""

from __future__ import annotations

import logging
import time
from typing import List, Optional

import myo

from core.events import (
    ArmSyncEvent,
    ArmUnsyncEvent,
    DeviceEvent,
    LockEvent,
    OrientationEvent,
    PoseEvent,
    Quaternion,
    UnlockEvent,
    UnpairEvent,
)
from core.gestures.pose import Arm, Pose, XDirection
from core.hardware.event_source import EventSource
from utils.config_sections import DeviceConfig, load_device_config

log = logging.getLogger(__name__)


class DeviceNotFoundError(RuntimeError):
    """No armband paired before the connect timeout."""


def _enum_from_sdk(enum_cls, value):
    name = getattr(value, "name", None) or str(value)
    try:
        return enum_cls(name.lower())
    except ValueError:
        return enum_cls.UNKNOWN


def _pose_from_sdk(value) -> Pose:
    name = getattr(value, "name", None) or str(value)
    return Pose.parse(name)


class MyoListener(myo.DeviceListener):
    """Buffers SDK callbacks as DeviceEvents until the next drain()."""

    def __init__(self, hold_unlock_on_pose: bool = True) -> None:
        super().__init__()
        self.hold_unlock_on_pose = hold_unlock_on_pose
        self.paired = False
        self._events: List[DeviceEvent] = []

    def drain(self) -> List[DeviceEvent]:
        events, self._events = self._events, []
        return events

    # SDK callbacks

    def on_paired(self, event):
        self.paired = True
        log.info("Armband paired")

    def on_connected(self, event):
        self.paired = True

    def on_unpaired(self, event):
        self.paired = False
        self._events.append(UnpairEvent(event.timestamp))

    def on_arm_synced(self, event):
        self._events.append(
            ArmSyncEvent(
                event.timestamp,
                arm=_enum_from_sdk(Arm, event.arm),
                x_direction=_enum_from_sdk(XDirection, event.x_direction),
            )
        )

    def on_arm_unsynced(self, event):
        self._events.append(ArmUnsyncEvent(event.timestamp))

    def on_unlocked(self, event):
        self._events.append(UnlockEvent(event.timestamp))

    def on_locked(self, event):
        self._events.append(LockEvent(event.timestamp))

    def on_orientation(self, event):
        q = event.orientation
        self._events.append(
            OrientationEvent(event.timestamp, Quaternion(w=q.w, x=q.x, y=q.y, z=q.z))
        )

    def on_pose(self, event):
        pose = _pose_from_sdk(event.pose)
        self._events.append(PoseEvent(event.timestamp, pose))
        if self.hold_unlock_on_pose:
            self._apply_unlock_policy(event.device, pose)

    def _apply_unlock_policy(self, device, pose: Pose) -> None:
        # Held poses keep the armband unlocked and buzz once as feedback;
        # rest/unknown fall back to a timed unlock so it locks when idle
        try:
            if pose.is_active:
                device.unlock(myo.UnlockType.hold)
                device.vibrate(myo.VibrationType.short)
            else:
                device.unlock(myo.UnlockType.timed)
        except Exception as e:
            log.warning(f"Unlock/vibrate request failed: {e}")


class MyoEventSource(EventSource):
    """Polls the Myo hub and returns typed events."""

    def __init__(self, config: Optional[DeviceConfig] = None) -> None:
        self.config = config or load_device_config()
        self.hub = None
        self.listener = MyoListener(hold_unlock_on_pose=self.config.hold_unlock_on_pose)

    def connect(self) -> None:
        """Initialize the SDK and wait for an armband to pair."""
        print("[INFO] Attempting to find a Myo...")
        if self.config.sdk_path:
            myo.init(sdk_path=self.config.sdk_path)
        else:
            myo.init()
        self.hub = myo.Hub(self.config.application_id)

        deadline = time.monotonic() + self.config.connect_timeout_ms / 1000.0
        slice_ms = max(1, self.config.poll_interval_ms)
        while not self.listener.paired:
            if time.monotonic() >= deadline:
                self.close()
                raise DeviceNotFoundError("Unable to find a Myo!")
            self.hub.run(self.listener, slice_ms)

        print("[INFO] ✓ Connected to a Myo armband")

    def poll(self, duration_ms: int) -> List[DeviceEvent]:
        if self.hub is None:
            raise RuntimeError("MyoEventSource.poll() called before connect()")
        self.hub.run(self.listener, duration_ms)
        return self.listener.drain()

    def close(self) -> None:
        """Clean shutdown of the hub."""
        if self.hub is None:
            return
        try:
            self.hub.stop()
            print("[INFO] ✓ Myo hub stopped")
        except Exception as e:
            print(f"[WARN] Error stopping Myo hub: {e}")
        finally:
            self.hub = None


__all__ = ["DeviceNotFoundError", "MyoEventSource", "MyoListener"]
