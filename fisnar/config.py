"""
Central configuration for Fisnar tunables and shared constants.
"""

import logging
import os

TRACE: int = 5
logging.addLevelName(TRACE, "TRACE")
# Add Logger.trace if missing
if not hasattr(logging.Logger, "trace"):

    def _trace(self, msg, *args, **kwargs):
        if self.isEnabledFor(TRACE):
            self._log(TRACE, msg, args, **kwargs)

    logging.Logger.trace = _trace  # type: ignore[attr-defined]
    logging.TRACE = TRACE  # type: ignore[attr-defined]


def env_bool(name: str, default: bool = False) -> bool:
    """Truthy env flag: 1, true, yes or on (any case)."""
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


# Serial link (device contract: 115200 8N1, answer within the read timeout)
SERIAL_PORT_DEFAULT: str = os.getenv("FISNAR_PORT", "/dev/ttyUSB0")
SERIAL_BAUD: int = int(os.getenv("FISNAR_BAUD", "115200"))
READ_TIMEOUT_S: float = float(os.getenv("FISNAR_TIMEOUT_S", "10"))
# Simulation flag, read on every factory call
FAKE_SERIAL_ENV: str = "FISNAR_FAKE_SERIAL"

# Wire protocol
RESET_BYTE: bytes = bytes([0xDF])
ACK: str = "ok"
COMMAND_TERMINATOR: str = "\r"
IDENT_PREFIX: str = "<<"
IDENT_SUFFIX: str = ">>"

# Digital output wired to the dispenser controller
DISPENSER_PORT: int = 12

# Path extraction
STITCH_TOLERANCE_MM: float = 0.01
CIRCLE_SUBDIVISIONS: int = 128

# Job defaults (overridable on the command line)
SPEED_MM_S_DEFAULT: float = 10.0
DOT_TIME_MS_DEFAULT: int = 100
Z_HOP_MM_DEFAULT: float = 0.0
SCALE_DEFAULT: float = 1.0

LOG_LEVEL_DEFAULT: str = os.getenv("FISNAR_LOG_LEVEL", "INFO")
