"""
Pytest configuration for thermal printer tests.

Provides fixtures and command-line options for hardware tests.
"""

import io

import pytest

from thermalprinter import ThermalPrinter


def pytest_addoption(parser):
    """Add command-line options for hardware tests."""
    parser.addoption(
        "--port",
        action="store",
        default=None,
        help="Serial port of the printer for hardware tests",
    )


@pytest.fixture
def printer_port(request):
    """Get the printer port from command line."""
    port = request.config.getoption("--port")
    if port is None:
        pytest.skip("No printer port provided (use --port=/dev/ttyUSB0)")
    return port


class SleepRecorder:
    """Stand-in for time.sleep that records the requested delays."""

    def __init__(self):
        self.calls: list[float] = []

    def __call__(self, seconds: float):
        self.calls.append(seconds)


@pytest.fixture
def sink():
    """In-memory output stream."""
    return io.BytesIO()


@pytest.fixture
def sleeps():
    return SleepRecorder()


@pytest.fixture
def printer(sink, sleeps):
    """Printer writing to memory, with the init sequence already discarded."""
    p = ThermalPrinter(sink, sleep=sleeps)
    sink.seek(0)
    sink.truncate()
    return p
