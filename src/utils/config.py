"""
Centralized configuration for the Gesture Drive controller.

This module provides all configuration constants and runtime settings for:
- Orientation banding (pitch/roll/yaw quantization)
- Speed selection from wrist pitch
- Gesture handling (double-tap direction policy)
- Armband connection (Myo SDK application id, timeouts)
- Command delivery to the vehicle (console, subprocess, UDP, HTTP)
- Trace files (gesture and command logs)

The Config class contains all constants as class attributes, making them
accessible throughout the application without instantiation.

Usage:
    from utils.config import Config

    interval = Config.POLL_INTERVAL_MS
    if Config.DOUBLE_TAP_MODE == "toggle":
        # Double tap flips the direction flag
"""

import os
import logging

log = logging.getLogger(__name__)


class Config:
    """System configuration constants for Gesture Drive."""

    # ==========================================================================
    # MAIN LOOP
    # ==========================================================================

    POLL_INTERVAL_MS = 50               # 20 Hz, one hub.run() per tick
    STATUS_LINE_ENABLED = True
    STATUS_SHOW_ORIENTATION = False     # Roll/pitch/yaw bars before the status

    # ==========================================================================
    # ORIENTATION: Euler angle banding
    # ==========================================================================

    ORIENTATION_BANDS = 18              # Bands 0..17

    # ==========================================================================
    # SPEED: Pitch band -> PWM duty -> speed level
    # ==========================================================================

    SPEED_NEUTRAL_BAND = 10             # Bands <= 10 never move the vehicle
    SPEED_PWM_MAX = 255
    SPEED_PWM_BASE_RATIO = 0.2          # Duty ratio offset once past the neutral band
    SPEED_BAND_SCALE = 10.0             # Bands per unit of duty ratio
    SPEED_LEVEL_WIDTH_RATIO = 0.2       # Width of each speed level as duty ratio
    SPEED_LEVELS = 4

    # ==========================================================================
    # GESTURES
    # ==========================================================================

    # "toggle": double tap flips direction
    # "latch_backward": double tap always selects backward (legacy firmware behaviour)
    DOUBLE_TAP_MODE = "toggle"

    # ==========================================================================
    # ARMBAND (Myo SDK)
    # ==========================================================================

    MYO_APPLICATION_ID = "com.example.gesture-drive"
    MYO_SDK_PATH = os.environ.get("MYO_SDK_PATH")
    MYO_CONNECT_TIMEOUT_MS = 10000
    MYO_HOLD_UNLOCK_ON_POSE = True      # unlock(hold) + vibrate on active poses

    # ==========================================================================
    # COMMAND SINK
    # ==========================================================================

    SINK_KIND = os.environ.get("GESTURE_DRIVE_SINK", "console")
    SINK_ECHO_COMMANDS = False

    # Subprocess sink (legacy ESP bridge script)
    SUBPROCESS_COMMAND = ["python", "send2esp.py"]
    SUBPROCESS_TIMEOUT = 2.0

    # UDP sink
    VEHICLE_HOST = os.environ.get("GESTURE_DRIVE_VEHICLE_HOST", "192.168.4.1")
    VEHICLE_UDP_PORT = 4210

    # HTTP sink
    VEHICLE_HTTP_URL = os.environ.get(
        "GESTURE_DRIVE_VEHICLE_URL", "http://192.168.4.1/command"
    )
    HTTP_TIMEOUT = 0.5

    # ==========================================================================
    # TRACES
    # ==========================================================================

    TRACE_ENABLED = True
    TRACE_LOG_DIR = os.environ.get("GESTURE_DRIVE_LOG_DIR")  # None -> <project>/logs
    GESTURE_TRACE_FILE = "gesture_trace.log"
    COMMAND_TRACE_FILE = "command_trace.log"
