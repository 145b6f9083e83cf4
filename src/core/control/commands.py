"""Closed vocabulary of vehicle motion commands."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class CommandKind(Enum):
    STOP = "stop"
    MOVE_FORWARD = "move_forward"
    MOVE_BACKWARD = "move_backward"
    TURN_LEFT_FORWARD = "turn_left_forward"
    TURN_LEFT_BACKWARD = "turn_left_backward"
    TURN_RIGHT_FORWARD = "turn_right_forward"
    TURN_RIGHT_BACKWARD = "turn_right_backward"


SPEED_LEVELS = (1, 2, 3, 4)

_MOVES = {CommandKind.MOVE_FORWARD, CommandKind.MOVE_BACKWARD}


@dataclass(frozen=True)
class Command:
    """One motion command. ``speed_level`` is set only for move commands."""

    kind: CommandKind
    speed_level: Optional[int] = None

    def __post_init__(self) -> None:
        if self.kind in _MOVES:
            if self.speed_level not in SPEED_LEVELS:
                raise ValueError(f"{self.kind.value} needs a speed level in {SPEED_LEVELS}, got {self.speed_level}")
        elif self.speed_level is not None:
            raise ValueError(f"{self.kind.value} takes no speed level")

    @property
    def is_move(self) -> bool:
        return self.kind in _MOVES

    def __str__(self) -> str:
        if self.speed_level is not None:
            return f"{self.kind.value}({self.speed_level})"
        return self.kind.value

    # Factories

    @classmethod
    def stop(cls) -> "Command":
        return cls(CommandKind.STOP)

    @classmethod
    def move(cls, forward: bool, speed_level: int) -> "Command":
        kind = CommandKind.MOVE_FORWARD if forward else CommandKind.MOVE_BACKWARD
        return cls(kind, speed_level)

    @classmethod
    def turn_left(cls, forward: bool) -> "Command":
        return cls(CommandKind.TURN_LEFT_FORWARD if forward else CommandKind.TURN_LEFT_BACKWARD)

    @classmethod
    def turn_right(cls, forward: bool) -> "Command":
        return cls(CommandKind.TURN_RIGHT_FORWARD if forward else CommandKind.TURN_RIGHT_BACKWARD)


__all__ = ["Command", "CommandKind", "SPEED_LEVELS"]
