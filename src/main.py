#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Gesture Drive - drive an RC vehicle with armband gestures

Architecture:
- EventSource: armband SDK (or replay trace) polled once per tick
- GestureController: orientation bands + pose debouncing + command planning
- CommandSink: delivers 9-character tokens to the vehicle
- ConsoleDisplay: one status line per tick

Gestures:
- fist: stop
- waveOut / waveIn: turn left / right
- fingersSpread: drive, speed from wrist pitch
- doubleTap: switch between forward and backward
"""

import argparse
import logging
import sys
from typing import List, Optional

from utils.config import Config
from utils.config_sections import (
    load_device_config,
    load_gesture_config,
    load_sink_config,
    load_trace_config,
)
from utils.ctrl_handler import CtrlCHandler
from communication.command_sink import SINK_KINDS, create_command_sink
from core.control.command_planner import DOUBLE_TAP_MODES, CommandPlanner
from core.control.commands import Command
from core.control.gesture_controller import GestureController
from core.hardware.event_source import EventSource, ReplayEventSource
from core.telemetry.loggers.control_logger import get_control_logger, reset_control_logger
from presentation.console_display import ConsoleDisplay

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gesture-drive",
        description="Drive an RC vehicle with armband gestures",
    )
    parser.add_argument("--source", choices=["myo", "replay"], default="myo",
                        help="Event source (default: myo armband)")
    parser.add_argument("--replay-file", help="JSON Lines trace for --source replay")
    parser.add_argument("--realtime", action="store_true",
                        help="Replay at the polling cadence instead of as fast as possible")
    parser.add_argument("--sink", choices=SINK_KINDS, default=Config.SINK_KIND,
                        help="Where command tokens are delivered")
    parser.add_argument("--double-tap-mode", choices=DOUBLE_TAP_MODES, default=Config.DOUBLE_TAP_MODE,
                        help="toggle: double tap flips direction; latch_backward: always backward")
    parser.add_argument("--poll-ms", type=int, default=Config.POLL_INTERVAL_MS,
                        help="Polling tick in milliseconds (default: 50)")
    parser.add_argument("--max-ticks", type=int, default=None,
                        help="Stop after this many ticks")
    parser.add_argument("--no-status", action="store_true", help="Disable the console status line")
    parser.add_argument("--show-orientation", action="store_true",
                        help="Prefix the status line with roll/pitch/yaw bars")
    parser.add_argument("--echo-commands", action="store_true", help="Print every token sent")
    parser.add_argument("--no-trace", action="store_true", help="Disable gesture/command trace files")
    parser.add_argument("--log-dir", help="Base directory for session traces")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def create_event_source(args) -> EventSource:
    if args.source == "replay":
        if not args.replay_file:
            raise ValueError("--source replay requires --replay-file")
        return ReplayEventSource.from_file(args.replay_file, realtime=args.realtime)

    # Imported lazily: the SDK binding is only needed with real hardware
    from core.hardware.myo_event_source import MyoEventSource

    device_config = load_device_config()
    device_config.poll_interval_ms = args.poll_ms
    source = MyoEventSource(device_config)
    source.connect()
    return source


def run_loop(
    source: EventSource,
    controller: GestureController,
    *,
    poll_ms: int = 50,
    max_ticks: Optional[int] = None,
    display: Optional[ConsoleDisplay] = None,
    should_stop=lambda: False,
) -> List[Command]:
    """Poll, route, send; until stopped, exhausted or ``max_ticks`` reached."""
    produced: List[Command] = []
    ticks = 0
    while not should_stop() and not source.exhausted:
        if max_ticks is not None and ticks >= max_ticks:
            break
        events = source.poll(poll_ms)
        produced.extend(controller.process(events))
        if display is not None:
            display.update(controller.snapshot())
        ticks += 1
    log.info("Loop finished after %d ticks, %d commands", ticks, len(produced))
    return produced


def main(argv=None) -> int:
    """
    Entry point

    Flow:
    1. Parse options and set up logging/traces
    2. Connect the event source (armband or replay)
    3. Main polling loop
    4. Stop the vehicle and clean up
    """
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    print("=" * 60)
    print("Gesture Drive - armband to RC vehicle")
    print("=" * 60)

    ctrl_handler = CtrlCHandler()

    sink_config = load_sink_config()
    sink_config.kind = args.sink
    sink_config.echo_commands = args.echo_commands or sink_config.echo_commands

    gesture_config = load_gesture_config()
    gesture_config.double_tap_mode = args.double_tap_mode

    trace_config = load_trace_config()
    if args.log_dir:
        trace_config.log_dir = args.log_dir

    trace = None
    if not args.no_trace and trace_config.enabled:
        trace = get_control_logger(config=trace_config)
        print(f"[INFO] Traces in {trace.log_dir}")

    source = None
    sink = None
    display = None
    try:
        sink = create_command_sink(sink_config)
        controller = GestureController(
            planner=CommandPlanner(gestures=gesture_config),
            sink=sink,
            trace=trace,
        )

        source = create_event_source(args)

        if not args.no_status and Config.STATUS_LINE_ENABLED:
            display = ConsoleDisplay(show_orientation=args.show_orientation or Config.STATUS_SHOW_ORIENTATION)

        run_loop(
            source,
            controller,
            poll_ms=args.poll_ms,
            max_ticks=args.max_ticks,
            display=display,
            should_stop=lambda: ctrl_handler.should_stop,
        )
    except Exception as e:
        print(f"\n[ERROR] {e}", file=sys.stderr)
        log.debug("Fatal error", exc_info=True)
        return 1
    finally:
        if display is not None:
            display.finish()
        if sink is not None:
            # Never leave the vehicle moving
            stop = Command.stop()
            sink.send(stop)
            if trace is not None:
                trace.log_command(sink.render(stop))
            print(f"[INFO] Sink stats: {sink.stats()}")
            sink.close()
        if source is not None:
            source.close()
        reset_control_logger()
        ctrl_handler.restore()

    return 0


if __name__ == "__main__":
    sys.exit(main())
