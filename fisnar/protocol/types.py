"""
Type definitions for the Fisnar protocol.

Capability interfaces used across the public API. The driver depends only on
``ByteStream`` so it can run against pyserial, the simulator, or a test fake;
the sequencer depends only on ``Machine``.
"""

from typing import Protocol, runtime_checkable

from fisnar.utils.geometry import Point3


@runtime_checkable
class ByteStream(Protocol):
    """Blocking byte stream with a read timeout.

    ``read`` returns fewer than ``size`` bytes (possibly ``b""``) when the
    timeout expires.
    """

    def write(self, data: bytes) -> int | None: ...

    def read(self, size: int = 1) -> bytes: ...

    def close(self) -> None: ...


class Mover(Protocol):
    def halt(self) -> None: ...

    def home(self) -> None: ...

    def move_to(self, x: float, y: float, z: float) -> None: ...

    def line_to(self, x: float, y: float, z: float) -> None: ...

    def set_speed(self, speed_mm_s: float) -> None: ...

    def wait_for(self) -> None: ...

    def position(self) -> Point3: ...


class Porter(Protocol):
    def output(self, port: int, enabled: bool) -> None: ...

    def input(self, port: int) -> bool: ...


class Dispenser(Porter, Protocol):
    def set_dispenser(self, enabled: bool) -> None: ...


class Machine(Mover, Dispenser, Protocol):
    """Everything the motion sequencer needs from a device session."""
