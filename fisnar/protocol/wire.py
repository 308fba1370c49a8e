"""
Wire protocol helpers for the F4200N command dialect.

This module centralizes encoding of command strings and decoding of the
data lines returned by query commands. Framing (terminator, line reading)
lives in the driver; everything here is pure string handling.
"""

import re

from fisnar.config import ACK, COMMAND_TERMINATOR, IDENT_PREFIX, IDENT_SUFFIX
from fisnar.utils.errors import ProtocolError

__all__ = [
    "frame",
    "encode_halt",
    "encode_home",
    "encode_move_to",
    "encode_line_to",
    "encode_set_speed",
    "encode_wait_for",
    "encode_output",
    "encode_input",
    "encode_position",
    "is_ack",
    "is_identification",
    "decode_input",
    "decode_position",
]

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_FLOAT = r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)"
# Leading x,y,z; anything after z (units, padding) is ignored
_LEADING_XYZ = re.compile(rf"^{_FLOAT},{_FLOAT},{_FLOAT}")


def frame(command: str) -> bytes:
    """ASCII-encode a command and append the carriage-return terminator."""
    return (command + COMMAND_TERMINATOR).encode("ascii")


def _xyz(x: float, y: float, z: float) -> str:
    return f"{x:.3f},{y:.3f},{z:.3f}"


def encode_halt() -> str:
    return "ST"


def encode_home() -> str:
    return "HM"


def encode_move_to(x: float, y: float, z: float) -> str:
    """Rapid positioning move."""
    return f"MA {_xyz(x, y, z)}"


def encode_line_to(x: float, y: float, z: float) -> str:
    """Linear (dispense-path) move."""
    return f"LA {_xyz(x, y, z)}"


def encode_set_speed(speed_mm_s: float) -> str:
    # Device takes whole mm/s; truncate toward zero
    return f"SP {int(speed_mm_s)}"


def encode_wait_for() -> str:
    return "ID"


def encode_output(port: int, enabled: bool) -> str:
    return f"OUT {int(port)},{1 if enabled else 0}"


def encode_input(port: int) -> str:
    return f"IN {int(port)}"


def encode_position() -> str:
    return "PA"


def is_ack(line: str) -> bool:
    return line == ACK


def is_identification(line: str) -> bool:
    """True for a reset banner of the form ``<< ... >>``."""
    return line.startswith(IDENT_PREFIX) and line.endswith(IDENT_SUFFIX)


def decode_input(data: str) -> bool:
    """Decode an ``IN`` reply: leading integer, non-zero means active."""
    m = _LEADING_INT.match(data)
    if m is None:
        raise ProtocolError(f"Cannot decode input state from '{data}'", reply=data, data=data)
    return int(m.group(1)) != 0


def decode_position(data: str) -> tuple[float, float, float]:
    """Decode a ``PA`` reply starting with ``x,y,z``."""
    m = _LEADING_XYZ.match(data)
    if m is None:
        raise ProtocolError(f"Cannot decode position from '{data}'", reply=data, data=data)
    x, y, z = (float(g) for g in m.groups())
    return x, y, z
