"""
Serial transport implementation for the F4200N.

This module owns the pyserial port: opening it with the device's fixed
framing, blocking reads bounded by the read timeout, and release.
"""

import logging

import serial

from fisnar.config import READ_TIMEOUT_S, SERIAL_BAUD, SERIAL_PORT_DEFAULT

logger = logging.getLogger(__name__)


class SerialTransport:
    """
    Manages the serial port connection to the robot.

    Implements the ``ByteStream`` interface expected by the driver:
    ``write``, ``read`` (short read on timeout) and ``close``.
    """

    def __init__(self, port: str | None = None, baudrate: int = SERIAL_BAUD, timeout: float = READ_TIMEOUT_S):
        """
        Initialize the serial transport.

        Args:
            port: Serial port name (e.g., '/dev/ttyUSB0', 'COM3')
            baudrate: Baud rate for serial communication
            timeout: Read timeout in seconds
        """
        self.port = port or SERIAL_PORT_DEFAULT
        self.baudrate = baudrate
        self.timeout = timeout
        self.serial: serial.Serial | None = None

    def connect(self, port: str | None = None) -> None:
        """
        Open the serial port at 8 data bits, no parity, 1 stop bit.

        Raises:
            serial.SerialException: the port could not be opened
        """
        if port:
            self.port = port

        if self.serial and self.serial.is_open:
            self.serial.close()

        self.serial = serial.Serial(
            port=self.port,
            baudrate=self.baudrate,
            bytesize=serial.EIGHTBITS,
            parity=serial.PARITY_NONE,
            stopbits=serial.STOPBITS_ONE,
            timeout=self.timeout,
        )
        logger.info(f"Connected to serial port: {self.port} @ {self.baudrate} baud")

    def disconnect(self) -> None:
        """Disconnect from the serial port."""
        if self.serial:
            try:
                if self.serial.is_open:
                    self.serial.close()
                logger.info(f"Disconnected from serial port: {self.port}")
            finally:
                self.serial = None

    def is_connected(self) -> bool:
        return self.serial is not None and self.serial.is_open

    # ByteStream interface

    def write(self, data: bytes) -> int | None:
        if self.serial is None:
            raise serial.SerialException(f"Serial port {self.port} is not open")
        return self.serial.write(data)

    def read(self, size: int = 1) -> bytes:
        if self.serial is None:
            raise serial.SerialException(f"Serial port {self.port} is not open")
        return self.serial.read(size)

    def close(self) -> None:
        self.disconnect()

    def get_info(self) -> dict:
        """
        Get information about the current serial connection.

        Returns:
            Dictionary with connection information
        """
        return {
            "port": self.port,
            "baudrate": self.baudrate,
            "connected": self.is_connected(),
            "timeout": self.timeout,
        }
