"""Integration tests for the polling loop and CLI entry point."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

import main as main_module
from communication.command_sink import RecordingCommandSink
from core.control.commands import Command, CommandKind
from core.control.gesture_controller import GestureController
from core.events import ArmSyncEvent, PoseEvent
from core.gestures.pose import Pose
from core.hardware.event_source import ReplayEventSource
from core.telemetry.loggers.control_logger import reset_control_logger
from utils.config import Config


@pytest.fixture(autouse=True)
def fresh_trace():
    reset_control_logger()
    yield
    reset_control_logger()


def test_run_loop_processes_every_tick():
    source = ReplayEventSource([
        [ArmSyncEvent(0), PoseEvent(1, Pose.FIST)],
        [PoseEvent(2, Pose.FIST)],
        [PoseEvent(3, Pose.WAVE_OUT)],
    ])
    sink = RecordingCommandSink()

    produced = main_module.run_loop(source, GestureController(sink=sink), poll_ms=0)

    assert produced == [Command.stop(), Command(CommandKind.TURN_LEFT_FORWARD)]
    assert sink.tokens == ["stp000000", "fwdlft000"]


def test_run_loop_honours_max_ticks_and_stop_flag():
    source = ReplayEventSource.from_events([ArmSyncEvent(0)] + [PoseEvent(i, Pose.FIST) for i in range(5)])

    main_module.run_loop(source, GestureController(), max_ticks=2)
    assert source.remaining_ticks == 4

    main_module.run_loop(source, GestureController(), should_stop=lambda: True)
    assert source.remaining_ticks == 4


def test_main_replay_session(tmp_path, monkeypatch: pytest.MonkeyPatch):
    trace = tmp_path / "session.jsonl"
    records = [
        {"tick": 0, "type": "arm_sync", "arm": "right"},
        {"tick": 1, "type": "pose", "pose": "fist"},
        {"tick": 2, "type": "pose", "pose": "fist"},
        {"tick": 3, "type": "pose", "pose": "waveIn"},
        {"tick": 4, "type": "pose", "pose": "rest"},
        {"tick": 5, "type": "pose", "pose": "waveIn"},
    ]
    trace.write_text("\n".join(json.dumps(r) for r in records), encoding="utf-8")

    sinks = []

    def recording_factory(config):
        sink = RecordingCommandSink()
        sinks.append(sink)
        return sink

    monkeypatch.setattr(main_module, "create_command_sink", recording_factory)
    logs = tmp_path / "logs"

    status = main_module.main([
        "--source", "replay",
        "--replay-file", str(trace),
        "--no-status",
        "--log-dir", str(logs),
    ])

    assert status == 0
    # Session commands followed by the shutdown stop
    assert sinks[0].tokens == ["stp000000", "fwdrht000", "stp000000"]

    session_dirs = list(logs.iterdir())
    assert len(session_dirs) == 1
    command_trace = (session_dirs[0] / "command_trace.log").read_text()
    assert "Command Sent: fwdrht000" in command_trace
    # The shutdown stop is traced like any other token
    assert command_trace.count("Command Sent: stp000000") == 2


def test_main_replay_without_file_fails(capsys):
    status = main_module.main(["--source", "replay", "--no-status", "--no-trace"])
    assert status == 1
    assert "--replay-file" in capsys.readouterr().err


def test_demo_session_trace():
    demo = Path(__file__).resolve().parents[1] / "data" / "demo_session.jsonl"
    source = ReplayEventSource.from_file(demo)
    sink = RecordingCommandSink()
    controller = GestureController(sink=sink)

    main_module.run_loop(source, controller, poll_ms=0)

    assert sink.tokens == ["fwdrht000", "fwdspd187", "bwdspd187", "stp000000"]
    snap = controller.snapshot()
    assert snap.on_arm is False
    assert snap.direction is False


def test_main_skips_traces_when_disabled_in_config(tmp_path, monkeypatch: pytest.MonkeyPatch):
    trace = tmp_path / "session.jsonl"
    trace.write_text(json.dumps({"type": "arm_sync"}) + "\n" + json.dumps({"type": "pose", "pose": "fist"}) + "\n",
                     encoding="utf-8")
    monkeypatch.setattr(Config, "TRACE_ENABLED", False)
    monkeypatch.setattr(main_module, "create_command_sink", lambda config: RecordingCommandSink())
    logs = tmp_path / "logs"

    status = main_module.main([
        "--source", "replay",
        "--replay-file", str(trace),
        "--no-status",
        "--log-dir", str(logs),
    ])

    assert status == 0
    assert not logs.exists()
