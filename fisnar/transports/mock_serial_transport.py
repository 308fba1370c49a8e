"""
Mock serial transport for simulation and testing.

This module provides an in-process F4200N that answers the command dialect
without hardware. The simulation operates at the byte level, so the driver
cannot tell it apart from a real serial port.
"""

import logging
import re
from dataclasses import dataclass, field

import serial

from fisnar.config import ACK, RESET_BYTE, TRACE
from fisnar.protocol import wire

logger = logging.getLogger(__name__)

IDENT_BANNER = "<< F4200N SIMULATOR >>"

_XYZ = r"([+-]?\d+(?:\.\d*)?),([+-]?\d+(?:\.\d*)?),([+-]?\d+(?:\.\d*)?)"
_MOVE_RE = re.compile(rf"^(MA|LA) {_XYZ}$")
_SPEED_RE = re.compile(r"^SP (-?\d+)$")
_OUT_RE = re.compile(r"^OUT (\d+),([01])$")
_IN_RE = re.compile(r"^IN (\d+)$")


@dataclass
class MockDeviceState:
    """Internal state of the simulated robot."""

    position: tuple[float, float, float] = (0.0, 0.0, 0.0)
    speed: int = 0
    homed: bool = False
    halted: bool = False
    outputs: dict[int, bool] = field(default_factory=dict)
    inputs: dict[int, bool] = field(default_factory=dict)
    # Every command line received, in order
    commands: list[str] = field(default_factory=list)


class MockSerialTransport:
    """
    Mock serial transport that simulates F4200N responses.

    Implements the same interface as SerialTransport. Reads never block: an
    empty receive buffer behaves like an expired read timeout.
    """

    def __init__(self, port: str | None = None, baudrate: int = 115200, timeout: float = 0):
        """
        Initialize the mock serial transport.

        Args:
            port: Ignored (for interface compatibility)
            baudrate: Ignored (for interface compatibility)
            timeout: Ignored (for interface compatibility)
        """
        self.port = port or "MOCK_SERIAL"
        self.baudrate = baudrate
        self.timeout = timeout

        self.state = MockDeviceState()
        self._rx = bytearray()
        self._line = bytearray()
        self._connected = False

        logger.info("MockSerialTransport initialized - simulation mode active")

    def connect(self, port: str | None = None) -> None:
        if port:
            self.port = port
        self._connected = True
        self.state = MockDeviceState()
        self._rx.clear()
        self._line.clear()
        logger.info(f"MockSerialTransport connected to simulated port: {self.port}")

    def disconnect(self) -> None:
        self._connected = False
        logger.info(f"MockSerialTransport disconnected from: {self.port}")

    def is_connected(self) -> bool:
        return self._connected

    def set_input(self, port: int, active: bool) -> None:
        """Drive a simulated digital input."""
        self.state.inputs[port] = active

    # ByteStream interface

    def write(self, data: bytes) -> int:
        if not self._connected:
            raise serial.SerialException(f"Mock port {self.port} is not open")

        for b in data:
            if b == RESET_BYTE[0]:
                self._reset()
            elif b == ord("\r"):
                line = self._line.decode("ascii", errors="replace")
                self._line.clear()
                self._handle(line)
            else:
                self._line.append(b)
        return len(data)

    def read(self, size: int = 1) -> bytes:
        if not self._connected:
            raise serial.SerialException(f"Mock port {self.port} is not open")
        out = bytes(self._rx[:size])
        del self._rx[:size]
        return out

    def close(self) -> None:
        self.disconnect()

    # Simulation

    def _reply(self, line: str) -> None:
        self._rx += (line + "\r\n").encode("ascii")

    def _reset(self) -> None:
        self._rx.clear()
        self._line.clear()
        self.state.halted = False
        self._reply(IDENT_BANNER)

    def _handle(self, line: str) -> None:
        self.state.commands.append(line)
        logger.log(TRACE, "mock_rx line=%s", line)

        if line == wire.encode_halt():
            self.state.halted = True
        elif line == wire.encode_home():
            self.state.position = (0.0, 0.0, 0.0)
            self.state.homed = True
        elif line == wire.encode_wait_for():
            pass
        elif line == wire.encode_position():
            x, y, z = self.state.position
            self._reply(f"{x:.3f},{y:.3f},{z:.3f}")
        elif m := _MOVE_RE.match(line):
            self.state.position = (float(m.group(2)), float(m.group(3)), float(m.group(4)))
        elif m := _SPEED_RE.match(line):
            self.state.speed = int(m.group(1))
        elif m := _OUT_RE.match(line):
            self.state.outputs[int(m.group(1))] = m.group(2) == "1"
        elif m := _IN_RE.match(line):
            self._reply("1" if self.state.inputs.get(int(m.group(1)), False) else "0")
        else:
            logger.warning(f"MockSerialTransport: unknown command '{line}'")
            self._reply(f"ERR {line}")
            return

        self._reply(ACK)
