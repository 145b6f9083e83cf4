"""
Command sinks: deliver one command token at a time to the vehicle.

Every sink is fire-and-forget. ``send`` renders the command as a wire token,
hands it to the transport and returns; there is no acknowledgement and no
retry. Transport failures are logged as warnings and counted in
``failed_sends`` so they stay visible without stopping the control loop.

Sinks:
- ConsoleCommandSink: prints tokens (dry run)
- RecordingCommandSink: keeps tokens in memory (tests, replays)
- SubprocessCommandSink: runs the ESP bridge script once per token
- UdpCommandSink: one datagram per token
- HttpCommandSink: one POST per token

Usage:
    sink = create_command_sink(load_sink_config())
    sink.send(Command.stop())
    sink.close()
"""

from __future__ import annotations

import logging
import socket
import subprocess
from typing import List, Optional

import requests

from communication.protocols import encode_command
from core.control.commands import Command
from utils.config_sections import SinkConfig, load_sink_config

log = logging.getLogger(__name__)


class CommandSink:
    """Base class: token rendering, optional echo and send statistics."""

    def __init__(self, echo: bool = False) -> None:
        self.echo = echo
        self.sent = 0
        self.failed_sends = 0

    def render(self, command: Command) -> str:
        return encode_command(command)

    def send(self, command: Command) -> None:
        token = self.render(command)
        if self.echo:
            print(token)
        if self._deliver(token):
            self.sent += 1
        else:
            self.failed_sends += 1

    def _deliver(self, token: str) -> bool:
        """Transport-specific delivery. Returns False when the send failed."""
        raise NotImplementedError

    def close(self) -> None:
        pass

    def stats(self) -> dict:
        return {"sent": self.sent, "failed_sends": self.failed_sends}


class ConsoleCommandSink(CommandSink):
    """Print every token on its own line."""

    def _deliver(self, token: str) -> bool:
        print(f"[SINK] {token}")
        return True


class RecordingCommandSink(CommandSink):
    """Keep every token and command in memory."""

    def __init__(self, echo: bool = False) -> None:
        super().__init__(echo=echo)
        self.tokens: List[str] = []
        self.commands: List[Command] = []

    def send(self, command: Command) -> None:
        self.commands.append(command)
        super().send(command)

    def _deliver(self, token: str) -> bool:
        self.tokens.append(token)
        return True


class SubprocessCommandSink(CommandSink):
    """Invoke an external bridge program with the token as last argument.

    The default command is ``python send2esp.py <token>``, the script that
    forwards the token to the vehicle board.
    """

    def __init__(self, command: Optional[List[str]] = None, timeout: float = 2.0, echo: bool = False) -> None:
        super().__init__(echo=echo)
        self.command = list(command) if command else ["python", "send2esp.py"]
        self.timeout = timeout

    def _deliver(self, token: str) -> bool:
        try:
            completed = subprocess.run(
                [*self.command, token],
                timeout=self.timeout,
                capture_output=True,
                check=False,
            )
        except (OSError, subprocess.SubprocessError) as e:
            log.warning("Bridge command failed for %s: %s", token, e)
            return False
        if completed.returncode != 0:
            log.warning("Bridge exited with status %d for %s", completed.returncode, token)
            return False
        return True


class UdpCommandSink(CommandSink):
    """Send each token as one ASCII datagram."""

    def __init__(self, host: str, port: int, echo: bool = False) -> None:
        super().__init__(echo=echo)
        self.address = (host, port)
        self._socket = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)

    def _deliver(self, token: str) -> bool:
        try:
            self._socket.sendto(token.encode("ascii"), self.address)
        except OSError as e:
            log.warning("UDP send to %s:%d failed: %s", *self.address, e)
            return False
        return True

    def close(self) -> None:
        try:
            self._socket.close()
        except OSError as e:
            log.warning("Error closing UDP socket: %s", e)


class HttpCommandSink(CommandSink):
    """POST each token as the request body."""

    def __init__(self, url: str, timeout: float = 0.5, echo: bool = False) -> None:
        super().__init__(echo=echo)
        self.url = url
        self.timeout = timeout
        self._session = requests.Session()

    def _deliver(self, token: str) -> bool:
        try:
            response = self._session.post(
                self.url,
                data=token,
                headers={"Content-Type": "text/plain"},
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            log.warning("HTTP send to %s failed: %s", self.url, e)
            return False
        return True

    def close(self) -> None:
        self._session.close()


SINK_KINDS = ("console", "subprocess", "udp", "http")


def create_command_sink(config: Optional[SinkConfig] = None) -> CommandSink:
    """Build the sink selected by ``config.kind``."""
    config = config or load_sink_config()
    kind = config.kind.lower()

    if kind == "console":
        return ConsoleCommandSink(echo=config.echo_commands)
    if kind == "subprocess":
        return SubprocessCommandSink(
            command=config.subprocess_command,
            timeout=config.subprocess_timeout,
            echo=config.echo_commands,
        )
    if kind == "udp":
        return UdpCommandSink(config.vehicle_host, config.vehicle_udp_port, echo=config.echo_commands)
    if kind == "http":
        return HttpCommandSink(config.vehicle_http_url, timeout=config.http_timeout, echo=config.echo_commands)

    raise ValueError(f"Unknown sink kind '{config.kind}', expected one of {SINK_KINDS}")


__all__ = [
    "CommandSink",
    "ConsoleCommandSink",
    "HttpCommandSink",
    "RecordingCommandSink",
    "SINK_KINDS",
    "SubprocessCommandSink",
    "UdpCommandSink",
    "create_command_sink",
]
