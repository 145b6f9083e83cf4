"""
Single-line console status for the driving loop.

Rewrites the same terminal line every tick:

    [unlocked][R][fist          ]        armband synced
    [        ][?][              ]        no arm recognized yet

With orientation enabled the line starts with three 18-wide bars for roll,
pitch and yaw.
"""

from __future__ import annotations

import sys
from typing import Optional, TextIO

from core.control.gesture_controller import ControllerSnapshot

POSE_FIELD_WIDTH = 14


def render_bar(band: int, width: int = 18) -> str:
    band = max(0, min(width, band))
    return "[" + "*" * band + " " * (width - band) + "]"


def render_status(snapshot: ControllerSnapshot, show_orientation: bool = False, bands: int = 18) -> str:
    parts = []
    if show_orientation:
        parts.append(render_bar(snapshot.bands.roll, bands))
        parts.append(render_bar(snapshot.bands.pitch, bands))
        parts.append(render_bar(snapshot.bands.yaw, bands))

    if snapshot.on_arm:
        lock = "unlocked" if snapshot.is_unlocked else "locked  "
        pose = snapshot.current_pose.value[:POSE_FIELD_WIDTH]
        parts.append(f"[{lock}]")
        parts.append(f"[{snapshot.arm.short_label}]")
        parts.append(f"[{pose.ljust(POSE_FIELD_WIDTH)}]")
    else:
        parts.append("[" + " " * 8 + "]")
        parts.append("[?]")
        parts.append("[" + " " * POSE_FIELD_WIDTH + "]")

    return "".join(parts)


class ConsoleDisplay:
    """Writes the status line in place (carriage return, no newline)."""

    def __init__(self, stream: Optional[TextIO] = None, show_orientation: bool = False) -> None:
        self.stream = stream or sys.stdout
        self.show_orientation = show_orientation

    def update(self, snapshot: ControllerSnapshot) -> None:
        self.stream.write("\r" + render_status(snapshot, self.show_orientation))
        self.stream.flush()

    def finish(self) -> None:
        self.stream.write("\n")
        self.stream.flush()
