"""Tests for the gesture/command trace logger."""

from __future__ import annotations

import pytest

from core.telemetry.loggers.control_logger import (
    ControlLogger,
    get_control_logger,
    reset_control_logger,
)
from utils.config_sections import TraceConfig


@pytest.fixture(autouse=True)
def fresh_logger():
    reset_control_logger()
    yield
    reset_control_logger()


def test_writes_both_trace_files(tmp_path):
    trace = get_control_logger(session_dir=tmp_path)
    trace.log_pose_transition("fist", "unknown")
    trace.log_command("stp000000")
    reset_control_logger()

    gestures = (tmp_path / "gesture_trace.log").read_text()
    commands = (tmp_path / "command_trace.log").read_text()
    assert "Current Pose: fist Previous pose: unknown" in gestures
    assert "Command Sent: stp000000" in commands
    assert "stp000000" not in gestures


def test_singleton_until_reset(tmp_path):
    first = get_control_logger(session_dir=tmp_path / "a")
    assert get_control_logger() is first
    assert ControlLogger() is first

    reset_control_logger()
    second = get_control_logger(session_dir=tmp_path / "b")
    assert second is not first
    assert second.log_dir == tmp_path / "b"


def test_session_dir_created_under_configured_log_dir(tmp_path):
    trace = get_control_logger(config=TraceConfig(log_dir=str(tmp_path), command_file="cmd.log"))

    assert trace.log_dir.parent == tmp_path
    assert trace.log_dir.name.startswith("session_")
    assert (trace.log_dir / "cmd.log").exists()
