"""
Command driver for the Fisnar F4200N dispensing robot.

The device is strictly request/reply: every command is acknowledged with a
literal ``ok`` line before the next one may be sent, and query commands send
one data line ahead of the acknowledgement. Nothing is retried; any mismatch
or timeout is raised to the caller.
"""

from __future__ import annotations

import logging

from fisnar.config import DISPENSER_PORT, READ_TIMEOUT_S, RESET_BYTE, SERIAL_BAUD, TRACE
from fisnar.protocol import wire
from fisnar.protocol.types import ByteStream
from fisnar.transports import create_and_connect_transport
from fisnar.utils.errors import ProtocolError, ReplyTimeoutError
from fisnar.utils.geometry import Point3

logger = logging.getLogger(__name__)


class F4200N:
    """
    Device session over an open byte stream.

    Use :meth:`open` to connect and perform the reset handshake. The session
    owns the stream; after :meth:`close` no further calls may be made.
    """

    def __init__(self, stream: ByteStream, timeout: float | None = None):
        self.stream = stream
        self.timeout = timeout

    @classmethod
    def open(
        cls,
        port: str | None = None,
        *,
        stream: ByteStream | None = None,
        transport_type: str | None = None,
        baudrate: int = SERIAL_BAUD,
        timeout: float = READ_TIMEOUT_S,
    ) -> F4200N:
        """
        Open a session and reset the device.

        Either pass an already-open ``stream`` or let the transport factory
        open ``port``. The reset byte must be answered with an identification
        line ``<< ... >>``; otherwise the stream is closed and the error is
        raised.

        Raises:
            serial.SerialException: the port could not be opened
            ReplyTimeoutError: no identification line within the timeout
            ProtocolError: the identification line is malformed
        """
        if stream is None:
            stream = create_and_connect_transport(transport_type, port=port, baudrate=baudrate, timeout=timeout)

        machine = cls(stream, timeout=timeout)
        try:
            ident = machine.reset()
        except BaseException:
            stream.close()
            raise

        logger.info(f"F4200N ready: {ident}")
        return machine

    def close(self) -> None:
        self.stream.close()

    def __enter__(self) -> F4200N:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # --------------- Framing ---------------

    def reset(self) -> str:
        """Send the reset byte and return the identification banner."""
        self.stream.write(RESET_BYTE)
        reply = self._await_reply()
        if not wire.is_identification(reply):
            raise ProtocolError(f"Invalid identification string '{reply}', expected '<< ... >>'", reply=reply)
        return reply

    def _emit_command(self, command: str) -> None:
        logger.log(TRACE, "tx %s", command)
        self.stream.write(wire.frame(command))

    def _await_reply(self) -> str:
        """Read one reply line; CR is dropped, LF terminates."""
        out = bytearray()
        while True:
            b = self.stream.read(1)
            if len(b) != 1:
                raise ReplyTimeoutError(out.decode("ascii", errors="replace"), self.timeout)
            if b == b"\r":
                continue
            if b == b"\n":
                break
            out += b

        line = out.decode("ascii", errors="replace")
        logger.log(TRACE, "rx %s", line)
        return line

    def _check_ack(self, ack: str, command: str, data: str | None = None) -> None:
        if not wire.is_ack(ack):
            raise ProtocolError(
                f"Unexpected response to '{command}', expected 'ok', got: '{ack}'",
                reply=ack,
                data=data,
            )

    def send_command(self, command: str) -> None:
        """Send a command whose only reply is the acknowledgement."""
        self._emit_command(command)
        self._check_ack(self._await_reply(), command)

    def send_command_with_reply(self, command: str) -> str:
        """
        Send a query command and return its data line.

        A bad acknowledgement raises ProtocolError with the data line attached
        as ``.data``.
        """
        self._emit_command(command)
        reply = self._await_reply()
        self._check_ack(self._await_reply(), command, data=reply)
        return reply

    # --------------- Motion ---------------

    def halt(self) -> None:
        self.send_command(wire.encode_halt())

    def home(self) -> None:
        self.send_command(wire.encode_home())

    def move_to(self, x: float, y: float, z: float) -> None:
        """Rapid move to an absolute position (mm)."""
        self.send_command(wire.encode_move_to(x, y, z))

    def line_to(self, x: float, y: float, z: float) -> None:
        """Linear dispense-path move to an absolute position (mm)."""
        self.send_command(wire.encode_line_to(x, y, z))

    def set_speed(self, speed_mm_s: float) -> None:
        self.send_command(wire.encode_set_speed(speed_mm_s))

    def wait_for(self) -> None:
        """Block until the device has drained its motion queue."""
        self.send_command(wire.encode_wait_for())

    def position(self) -> Point3:
        reply = self.send_command_with_reply(wire.encode_position())
        return Point3(*wire.decode_position(reply))

    # --------------- I/O ---------------

    def output(self, port: int, enabled: bool) -> None:
        self.send_command(wire.encode_output(port, enabled))

    def input(self, port: int) -> bool:
        reply = self.send_command_with_reply(wire.encode_input(port))
        return wire.decode_input(reply)

    def set_dispenser(self, enabled: bool) -> None:
        self.output(DISPENSER_PORT, enabled)
