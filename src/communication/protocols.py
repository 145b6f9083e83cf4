#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Communication Protocols - Gesture Drive
Wire format of the commands sent to the vehicle controller (ESP board)

Every command is a fixed 9-character ASCII token:
    <direction:3><action:3><argument:3>

    stp000000               stop
    fwdspd051 .. fwdspd255  move forward, PWM duty in the last three digits
    bwdspd051 .. bwdspd255  move backward
    fwdlft000 / bwdlft000   turn left
    fwdrht000 / bwdrht000   turn right
"""

from typing import Dict

from core.control.commands import Command, CommandKind


TOKEN_LENGTH = 9


# =================================================================
# TOKEN TABLE
# =================================================================

# PWM duty announced for each speed level (0.2/0.467/0.733/1.0 of 255)
SPEED_LEVEL_DUTY = {1: 51, 2: 119, 3: 187, 4: 255}

_FIXED_TOKENS: Dict[CommandKind, str] = {
    CommandKind.STOP: "stp000000",
    CommandKind.TURN_LEFT_FORWARD: "fwdlft000",
    CommandKind.TURN_LEFT_BACKWARD: "bwdlft000",
    CommandKind.TURN_RIGHT_FORWARD: "fwdrht000",
    CommandKind.TURN_RIGHT_BACKWARD: "bwdrht000",
}

_MOVE_PREFIX: Dict[CommandKind, str] = {
    CommandKind.MOVE_FORWARD: "fwdspd",
    CommandKind.MOVE_BACKWARD: "bwdspd",
}


def _build_decode_table() -> Dict[str, Command]:
    table = {token: Command(kind) for kind, token in _FIXED_TOKENS.items()}
    for kind, prefix in _MOVE_PREFIX.items():
        for level, duty in SPEED_LEVEL_DUTY.items():
            table[f"{prefix}{duty:03d}"] = Command(kind, level)
    return table


_DECODE_TABLE = _build_decode_table()


# =================================================================
# ENCODING / DECODING
# =================================================================

def encode_command(command: Command) -> str:
    """Render a command as its 9-character wire token."""
    if not command.is_move:
        return _FIXED_TOKENS[command.kind]
    duty = SPEED_LEVEL_DUTY.get(command.speed_level)
    if duty is None:
        raise CommandEncodingError(f"Cannot encode {command!r}")
    return f"{_MOVE_PREFIX[command.kind]}{duty:03d}"


def decode_command(token: str) -> Command:
    """Parse a wire token back into a Command."""
    token = token.strip()
    if len(token) != TOKEN_LENGTH:
        raise CommandDecodingError(f"Token must be {TOKEN_LENGTH} characters, got {token!r}")
    try:
        return _DECODE_TABLE[token]
    except KeyError:
        raise CommandDecodingError(f"Unknown command token: {token!r}") from None


def all_tokens():
    """Every valid token, in a stable order."""
    return sorted(_DECODE_TABLE)


# =================================================================
# ERROR HANDLING
# =================================================================

class CommunicationError(Exception):
    """Base exception for command wire errors"""
    pass

class CommandEncodingError(CommunicationError):
    """Command cannot be rendered as a token"""
    pass

class CommandDecodingError(CommunicationError):
    """Token does not belong to the command vocabulary"""
    pass
