"""
Transport factory for creating appropriate transport instances.

Selects between the real serial port and the simulated device based on an
explicit argument or the FISNAR_FAKE_SERIAL environment variable.
"""

import logging

from fisnar.config import FAKE_SERIAL_ENV, READ_TIMEOUT_S, SERIAL_BAUD, env_bool
from fisnar.transports.mock_serial_transport import MockSerialTransport
from fisnar.transports.serial_transport import SerialTransport

logger = logging.getLogger(__name__)


def is_simulation_mode() -> bool:
    """
    Check if simulation mode is enabled.

    Returns:
        True if simulation mode is enabled via environment variable
    """
    return env_bool(FAKE_SERIAL_ENV)


def create_transport(
    transport_type: str | None = None,
    port: str | None = None,
    baudrate: int = SERIAL_BAUD,
    timeout: float = READ_TIMEOUT_S,
) -> SerialTransport | MockSerialTransport:
    """
    Create an unconnected transport instance.

    Args:
        transport_type: 'serial', 'mock', or None to auto-detect from the environment
        port: Serial port name (for real serial)
        baudrate: Baud rate for serial communication
        timeout: Read timeout in seconds

    Returns:
        Transport instance (SerialTransport or MockSerialTransport)
    """
    if transport_type is None:
        transport_type = "mock" if is_simulation_mode() else "serial"

    if transport_type == "mock":
        logger.info("Creating MockSerialTransport for simulation")
        return MockSerialTransport(port=port, baudrate=baudrate, timeout=timeout)
    if transport_type == "serial":
        logger.info(f"Creating SerialTransport for port: {port}")
        return SerialTransport(port=port, baudrate=baudrate, timeout=timeout)

    raise ValueError(f"Unknown transport type: {transport_type}")


def create_and_connect_transport(
    transport_type: str | None = None,
    port: str | None = None,
    baudrate: int = SERIAL_BAUD,
    timeout: float = READ_TIMEOUT_S,
) -> SerialTransport | MockSerialTransport:
    """
    Create a transport and open it.

    Raises:
        serial.SerialException: the port could not be opened
    """
    transport = create_transport(transport_type, port=port, baudrate=baudrate, timeout=timeout)
    transport.connect()
    return transport
