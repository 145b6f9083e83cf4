"""
Typed configuration sections for the Gesture Drive controller.

This module provides strongly-typed configuration sections to replace
scattered getattr(Config, ...) calls with proper type hints and defaults.

Benefits:
- Type safety: IDE autocomplete and type checking
- Discoverability: All config options visible in one place
- Default values: Centralized and documented
- Better testing: Can build sections directly without touching Config
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class OrientationConfig:
    """Configuration for quaternion to band conversion."""

    bands: int = 18  # Number of buckets for roll, pitch and yaw


@dataclass
class SpeedConfig:
    """Configuration for pitch-driven speed selection."""

    neutral_band: int = 10  # Bands at or below this never move the vehicle
    pwm_max: int = 255
    base_ratio: float = 0.2  # Duty ratio offset once past the neutral band
    band_scale: float = 10.0  # Bands per unit of duty ratio
    level_width_ratio: float = 0.2  # Each speed level spans this duty ratio
    levels: int = 4


@dataclass
class GestureConfig:
    """Configuration for gesture interpretation."""

    double_tap_mode: str = "toggle"  # "toggle" or "latch_backward"


@dataclass
class DeviceConfig:
    """Configuration for the armband connection."""

    application_id: str = "com.example.gesture-drive"
    sdk_path: Optional[str] = None
    connect_timeout_ms: int = 10000
    poll_interval_ms: int = 50
    hold_unlock_on_pose: bool = True


@dataclass
class SinkConfig:
    """Configuration for command delivery to the vehicle."""

    kind: str = "console"  # console, subprocess, udp, http
    echo_commands: bool = False

    subprocess_command: List[str] = field(
        default_factory=lambda: ["python", "send2esp.py"]
    )
    subprocess_timeout: float = 2.0

    vehicle_host: str = "192.168.4.1"
    vehicle_udp_port: int = 4210

    vehicle_http_url: str = "http://192.168.4.1/command"
    http_timeout: float = 0.5


@dataclass
class TraceConfig:
    """Configuration for gesture and command trace files."""

    enabled: bool = True
    log_dir: Optional[str] = None
    gesture_file: str = "gesture_trace.log"
    command_file: str = "command_trace.log"


def load_orientation_config() -> OrientationConfig:
    """
    Load orientation configuration from Config with fallback defaults.

    Returns:
        OrientationConfig with values from Config or defaults
    """
    from utils.config import Config

    return OrientationConfig(
        bands=getattr(Config, "ORIENTATION_BANDS", 18),
    )


def load_speed_config() -> SpeedConfig:
    """
    Load speed configuration from Config with fallback defaults.

    Returns:
        SpeedConfig with values from Config or defaults
    """
    from utils.config import Config

    return SpeedConfig(
        neutral_band=getattr(Config, "SPEED_NEUTRAL_BAND", 10),
        pwm_max=getattr(Config, "SPEED_PWM_MAX", 255),
        base_ratio=getattr(Config, "SPEED_PWM_BASE_RATIO", 0.2),
        band_scale=getattr(Config, "SPEED_BAND_SCALE", 10.0),
        level_width_ratio=getattr(Config, "SPEED_LEVEL_WIDTH_RATIO", 0.2),
        levels=getattr(Config, "SPEED_LEVELS", 4),
    )


def load_gesture_config() -> GestureConfig:
    """
    Load gesture configuration from Config with fallback defaults.

    Returns:
        GestureConfig with values from Config or defaults
    """
    from utils.config import Config

    return GestureConfig(
        double_tap_mode=getattr(Config, "DOUBLE_TAP_MODE", "toggle"),
    )


def load_device_config() -> DeviceConfig:
    """
    Load armband configuration from Config with fallback defaults.

    Returns:
        DeviceConfig with values from Config or defaults
    """
    from utils.config import Config

    return DeviceConfig(
        application_id=getattr(Config, "MYO_APPLICATION_ID", "com.example.gesture-drive"),
        sdk_path=getattr(Config, "MYO_SDK_PATH", None),
        connect_timeout_ms=getattr(Config, "MYO_CONNECT_TIMEOUT_MS", 10000),
        poll_interval_ms=getattr(Config, "POLL_INTERVAL_MS", 50),
        hold_unlock_on_pose=getattr(Config, "MYO_HOLD_UNLOCK_ON_POSE", True),
    )


def load_sink_config() -> SinkConfig:
    """
    Load command sink configuration from Config with fallback defaults.

    Returns:
        SinkConfig with values from Config or defaults
    """
    from utils.config import Config

    return SinkConfig(
        kind=getattr(Config, "SINK_KIND", "console"),
        echo_commands=getattr(Config, "SINK_ECHO_COMMANDS", False),
        subprocess_command=list(getattr(Config, "SUBPROCESS_COMMAND", ["python", "send2esp.py"])),
        subprocess_timeout=getattr(Config, "SUBPROCESS_TIMEOUT", 2.0),
        vehicle_host=getattr(Config, "VEHICLE_HOST", "192.168.4.1"),
        vehicle_udp_port=getattr(Config, "VEHICLE_UDP_PORT", 4210),
        vehicle_http_url=getattr(Config, "VEHICLE_HTTP_URL", "http://192.168.4.1/command"),
        http_timeout=getattr(Config, "HTTP_TIMEOUT", 0.5),
    )


def load_trace_config() -> TraceConfig:
    """
    Load trace configuration from Config with fallback defaults.

    Returns:
        TraceConfig with values from Config or defaults
    """
    from utils.config import Config

    return TraceConfig(
        enabled=getattr(Config, "TRACE_ENABLED", True),
        log_dir=getattr(Config, "TRACE_LOG_DIR", None),
        gesture_file=getattr(Config, "GESTURE_TRACE_FILE", "gesture_trace.log"),
        command_file=getattr(Config, "COMMAND_TRACE_FILE", "command_trace.log"),
    )
