"""
Dedicated trace logger for gesture and command debugging.

This module provides a singleton logger that writes the two traces of a
driving session into dedicated files, so a session can be replayed and
audited after the fact.

Features:
- Singleton pattern (one instance per session)
- Separate log files for pose transitions and sent commands
- DEBUG level logging to files
- WARNING level console output for critical messages

Log Files:
- gesture_trace.log: every acted pose with the pose it replaced
- command_trace.log: every token handed to the vehicle sink

Usage:
    from core.telemetry.loggers.control_logger import get_control_logger

    trace = get_control_logger(session_dir=Path("logs/session_2026-10-19_10-30-00"))
    trace.gestures.info("Current Pose: fist Previous pose: unknown")
    trace.commands.info("Command Sent: stp000000")
"""

import logging
from pathlib import Path
from datetime import datetime
from typing import Optional

from utils.config_sections import TraceConfig, load_trace_config

_CHANNELS = ("gestures", "commands")


class ControlLogger:
    """Singleton logger for gesture and command traces."""

    _instance = None
    _initialized = False

    def __new__(cls, session_dir: Path = None, config: Optional[TraceConfig] = None):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, session_dir: Path = None, config: Optional[TraceConfig] = None):
        if self._initialized:
            return

        self.config = config or load_trace_config()

        # Use provided session directory or create new one
        if session_dir is None:
            timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
            if self.config.log_dir:
                base_dir = Path(self.config.log_dir)
            else:
                base_dir = Path(__file__).resolve().parents[4] / "logs"
            self.log_dir = base_dir / f"session_{timestamp}"
        else:
            self.log_dir = Path(session_dir)

        self.log_dir.mkdir(parents=True, exist_ok=True)

        self._setup_logger("gestures", self.config.gesture_file)
        self._setup_logger("commands", self.config.command_file)

        self._initialized = True

    def _setup_logger(self, name: str, filename: str):
        """Setup individual logger with file handler."""
        logger = logging.getLogger(f"control.{name}")
        logger.setLevel(logging.DEBUG)
        logger.propagate = False

        # Clear existing handlers
        logger.handlers.clear()

        fh = logging.FileHandler(self.log_dir / filename, mode='a')
        fh.setLevel(logging.DEBUG)

        # Console only for problems
        ch = logging.StreamHandler()
        ch.setLevel(logging.WARNING)

        formatter = logging.Formatter(
            '%(asctime)s.%(msecs)03d [%(levelname)s] %(message)s',
            datefmt='%H:%M:%S'
        )
        fh.setFormatter(formatter)
        ch.setFormatter(formatter)

        logger.addHandler(fh)
        logger.addHandler(ch)

        setattr(self, name, logger)

    def log_pose_transition(self, current: str, previous: str) -> None:
        self.gestures.info(f"Current Pose: {current} Previous pose: {previous}")

    def log_command(self, token: str) -> None:
        self.commands.info(f"Command Sent: {token}")

    def close(self):
        """Close all handlers and allow a fresh session to be created."""
        for name in _CHANNELS:
            logger = getattr(self, name, None)
            if logger:
                for handler in logger.handlers[:]:
                    handler.close()
                    logger.removeHandler(handler)
        ControlLogger._instance = None
        ControlLogger._initialized = False


# Global instance
_control_logger = None


def get_control_logger(session_dir: Path = None, config: Optional[TraceConfig] = None):
    """Get or create control trace logger instance."""
    global _control_logger
    if _control_logger is None:
        _control_logger = ControlLogger(session_dir=session_dir, config=config)
    return _control_logger


def reset_control_logger() -> None:
    """Close the current session traces (used on shutdown and in tests)."""
    global _control_logger
    if _control_logger is not None:
        _control_logger.close()
        _control_logger = None
