"""Tests for the 9-character command token protocol."""

from __future__ import annotations

import pytest

from communication.protocols import (
    TOKEN_LENGTH,
    CommandDecodingError,
    CommandEncodingError,
    CommunicationError,
    all_tokens,
    decode_command,
    encode_command,
)
from core.control.commands import Command, CommandKind


@pytest.mark.parametrize(
    "command, token",
    [
        (Command.stop(), "stp000000"),
        (Command.move(True, 1), "fwdspd051"),
        (Command.move(True, 2), "fwdspd119"),
        (Command.move(True, 3), "fwdspd187"),
        (Command.move(True, 4), "fwdspd255"),
        (Command.move(False, 1), "bwdspd051"),
        (Command.move(False, 4), "bwdspd255"),
        (Command.turn_left(True), "fwdlft000"),
        (Command.turn_left(False), "bwdlft000"),
        (Command.turn_right(True), "fwdrht000"),
        (Command.turn_right(False), "bwdrht000"),
    ],
)
def test_encode_command(command, token):
    assert encode_command(command) == token


def test_vocabulary_is_thirteen_fixed_width_tokens():
    tokens = all_tokens()
    assert len(tokens) == 13
    assert all(len(t) == TOKEN_LENGTH for t in tokens)


def test_decode_strips_line_endings():
    assert decode_command("bwdspd187\n") == Command(CommandKind.MOVE_BACKWARD, 3)


@pytest.mark.parametrize("token", ["stp", "fwdspd100", "xxxxxxxxx", "fwdspd0510"])
def test_decode_rejects_unknown_tokens(token):
    with pytest.raises(CommandDecodingError):
        decode_command(token)


def test_decoding_error_is_a_communication_error():
    assert issubclass(CommandDecodingError, CommunicationError)


def test_only_moves_carry_a_duty():
    assert Command.move(True, 2).is_move
    assert not Command.turn_left(True).is_move
    assert not Command.stop().is_move


def test_encode_rejects_move_without_known_duty():
    command = Command.move(True, 1)
    # Bypass the frozen validation to get an out-of-range level
    object.__setattr__(command, "speed_level", 7)
    with pytest.raises(CommandEncodingError):
        encode_command(command)
