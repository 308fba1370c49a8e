"""
Pytest configuration and shared fixtures for the Fisnar test suite.

Provides command line options, markers, a simulated device session, and a
helper for writing small DXF drawings to disk.
"""

import os
import sys
from collections.abc import Callable, Generator

import ezdxf
import pytest

# Add the parent directory to Python path so we can import the package modules
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from fisnar.driver import F4200N
from fisnar.transports import MockSerialTransport


# ============================================================================
# PYTEST COMMAND LINE OPTIONS
# ============================================================================

def pytest_addoption(parser):
    """Add custom command line options for the test suite."""
    parser.addoption(
        "--run-hardware",
        action="store_true",
        default=False,
        help="Enable hardware tests that require an actual F4200N on a serial port"
    )
    parser.addoption(
        "--serial-port",
        action="store",
        default=os.getenv("FISNAR_PORT", "/dev/ttyUSB0"),
        help="Serial port used by hardware tests"
    )


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests that test individual components in isolation"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests that run against the simulated F4200N"
    )
    config.addinivalue_line(
        "markers", "hardware: Hardware tests that require an actual robot on a serial port"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests that exercise complete workflows"
    )


def pytest_collection_modifyitems(config, items):
    """Skip hardware tests unless --run-hardware is given."""
    if not config.getoption("--run-hardware"):
        skip_hardware = pytest.mark.skip(reason="Hardware tests disabled (use --run-hardware to enable)")
        for item in items:
            if item.get_closest_marker("hardware"):
                item.add_marker(skip_hardware)


# ============================================================================
# DEVICE FIXTURES
# ============================================================================

@pytest.fixture
def mock_transport() -> MockSerialTransport:
    """Connected simulated device."""
    transport = MockSerialTransport()
    transport.connect()
    return transport


@pytest.fixture
def machine(mock_transport: MockSerialTransport) -> Generator[F4200N, None, None]:
    """F4200N session on the simulated device, closed after the test."""
    session = F4200N.open(stream=mock_transport)
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def serial_port(request) -> str:
    return request.config.getoption("--serial-port")


# ============================================================================
# DRAWING FIXTURES
# ============================================================================

@pytest.fixture
def write_dxf(tmp_path) -> Callable[..., str]:
    """
    Return a helper that builds a DXF file from a callback.

    The callback receives the modelspace; the helper returns the file path.
    """
    def _write(build: Callable, name: str = "drawing.dxf") -> str:
        doc = ezdxf.new()
        build(doc.modelspace())
        path = tmp_path / name
        doc.saveas(path)
        return str(path)

    return _write
