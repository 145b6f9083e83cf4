#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Event sources for the gesture controller.

An event source is polled once per tick by the main loop and returns the
device events received during that tick, in receipt order. This module
holds the contract and a replay source that works without an armband:

- 'scripted': ticks given directly as lists of events (tests, demos)
- 'file': ticks loaded from a JSON Lines trace

Trace format (one JSON object per line):
    {"tick": 0, "type": "arm_sync", "arm": "right"}
    {"tick": 0, "type": "orientation", "w": 1.0, "x": 0.0, "y": 0.0, "z": 0.0}
    {"tick": 1, "type": "pose", "pose": "fist"}

Lines sharing a "tick" value are delivered by the same poll. Lines without
"tick" are delivered one per poll.

Usage:
    source = ReplayEventSource.from_file("data/session.jsonl")
    while not source.exhausted:
        events = source.poll(50)
"""

import json
import time
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Sequence

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

log = logging.getLogger("EventSource")


class EventSource:
    """Contract for anything the main loop can poll."""

    def poll(self, duration_ms: int) -> List[DeviceEvent]:
        """Collect events for at most ``duration_ms`` and return them in order."""
        raise NotImplementedError

    @property
    def exhausted(self) -> bool:
        """True once the source will never produce events again."""
        return False

    def close(self) -> None:
        pass


class EventParseError(ValueError):
    """A trace line does not describe a known event."""


def parse_event(record: Dict[str, Any]) -> DeviceEvent:
    """Build a DeviceEvent from one decoded trace record."""
    kind = record.get("type")
    timestamp = int(record.get("timestamp", 0))

    if kind == "orientation":
        try:
            quat = Quaternion(
                w=float(record["w"]),
                x=float(record["x"]),
                y=float(record["y"]),
                z=float(record["z"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise EventParseError(f"Invalid orientation record {record!r}: {e}") from e
        return OrientationEvent(timestamp, quat)
    if kind == "pose":
        if "pose" not in record:
            raise EventParseError(f"Pose record without pose: {record!r}")
        return PoseEvent(timestamp, Pose.parse(str(record["pose"])))
    if kind == "arm_sync":
        return ArmSyncEvent(
            timestamp,
            arm=_parse_enum(Arm, record.get("arm")),
            x_direction=_parse_enum(XDirection, record.get("x_direction")),
        )
    if kind == "arm_unsync":
        return ArmUnsyncEvent(timestamp)
    if kind == "lock":
        return LockEvent(timestamp)
    if kind == "unlock":
        return UnlockEvent(timestamp)
    if kind == "unpair":
        return UnpairEvent(timestamp)

    raise EventParseError(f"Unknown event type {kind!r}")


def _parse_enum(enum_cls, value):
    if value is None:
        return enum_cls.UNKNOWN
    try:
        return enum_cls(str(value).lower())
    except ValueError:
        return enum_cls.UNKNOWN


class ReplayEventSource(EventSource):
    """
    Replay pre-recorded ticks of events.

    Each poll returns the next tick. With ``realtime=True`` every poll also
    sleeps for the requested duration, so a replay runs at device cadence.
    """

    def __init__(self, ticks: Iterable[Sequence[DeviceEvent]], realtime: bool = False) -> None:
        self._ticks: List[List[DeviceEvent]] = [list(tick) for tick in ticks]
        self._cursor = 0
        self.realtime = realtime
        log.info(f"Replay source ready with {len(self._ticks)} ticks")

    @classmethod
    def from_events(cls, events: Iterable[DeviceEvent], realtime: bool = False) -> "ReplayEventSource":
        """One event per tick."""
        return cls(([event] for event in events), realtime=realtime)

    @classmethod
    def from_file(cls, path, realtime: bool = False) -> "ReplayEventSource":
        path = Path(path)
        if not path.exists():
            raise ValueError(f"Replay file not found: {path}")

        grouped: Dict[int, List[DeviceEvent]] = {}
        order: List[int] = []
        next_free_tick = 0
        with path.open("r", encoding="utf-8") as handle:
            for line_number, line in enumerate(handle, start=1):
                line = line.strip()
                if not line or line.startswith("#"):
                    continue
                try:
                    record = json.loads(line)
                except json.JSONDecodeError as e:
                    raise EventParseError(f"{path}:{line_number}: {e}") from e
                if not isinstance(record, dict):
                    raise EventParseError(f"{path}:{line_number}: expected an object")

                tick = record.get("tick")
                if tick is None:
                    tick = next_free_tick
                tick = int(tick)
                next_free_tick = max(next_free_tick, tick + 1)

                if tick not in grouped:
                    grouped[tick] = []
                    order.append(tick)
                grouped[tick].append(parse_event(record))

        return cls((grouped[tick] for tick in sorted(order)), realtime=realtime)

    def poll(self, duration_ms: int) -> List[DeviceEvent]:
        if self.realtime and duration_ms > 0:
            time.sleep(duration_ms / 1000.0)
        if self.exhausted:
            return []
        events = self._ticks[self._cursor]
        self._cursor += 1
        return list(events)

    @property
    def exhausted(self) -> bool:
        return self._cursor >= len(self._ticks)

    @property
    def remaining_ticks(self) -> int:
        return max(0, len(self._ticks) - self._cursor)


__all__ = [
    "EventParseError",
    "EventSource",
    "ReplayEventSource",
    "parse_event",
]
