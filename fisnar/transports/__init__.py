"""
Transport modules for the Fisnar driver.

This package provides the byte-stream implementations the driver talks
through: a real pyserial port or an in-process simulated device.
"""

from .mock_serial_transport import MockDeviceState, MockSerialTransport
from .serial_transport import SerialTransport
from .transport_factory import create_and_connect_transport, create_transport, is_simulation_mode

__all__ = [
    "SerialTransport",
    "MockSerialTransport",
    "MockDeviceState",
    "create_transport",
    "create_and_connect_transport",
    "is_simulation_mode",
]
