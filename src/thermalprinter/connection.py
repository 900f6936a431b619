"""
Serial Connection Handler for ESC/POS Printers.

Handles the byte sink using the pyserial library. The printer session only
needs an object with ``write(bytes)``; this class adds opening, flushing
and closing of a serial port (or a character device such as /dev/usb/lp0,
which pyserial opens by URL or path).
"""

from dataclasses import dataclass
from typing import Optional

import serial
from serial.tools import list_ports


@dataclass
class PortInfo:
    """Information about a discovered serial port.

    Attributes:
        device: Path or name used to open the port (e.g. "/dev/ttyUSB0")
        description: Human readable description from the OS
        hwid: Hardware identifier (USB VID:PID, serial number, ...)
    """
    device: str
    description: str = ""
    hwid: str = ""

    def __str__(self) -> str:
        if self.description and self.description != "n/a":
            return f"{self.device} - {self.description} [{self.hwid}]"
        return f"{self.device} [{self.hwid}]"


class SerialConnection:
    """Manages the serial connection to a thermal printer."""

    # Most TTL thermal printers ship configured for 19200 baud
    DEFAULT_BAUDRATE = 19200
    DEFAULT_TIMEOUT = 5.0

    def __init__(self, port: str, baudrate: int = DEFAULT_BAUDRATE,
                 timeout: float = DEFAULT_TIMEOUT, rtscts: bool = False):
        self.port = port
        self.baudrate = baudrate
        self.timeout = timeout
        self.rtscts = rtscts
        self._serial: Optional[serial.Serial] = None

    @classmethod
    def scan(cls) -> list[PortInfo]:
        """List serial ports, sorted by device name."""
        ports = [
            PortInfo(device=p.device, description=p.description or "", hwid=p.hwid or "")
            for p in list_ports.comports()
        ]
        return sorted(ports, key=lambda p: p.device)

    def open(self) -> "SerialConnection":
        """
        Open the port.

        Raises:
            serial.SerialException: If the port cannot be opened
        """
        if self.is_open:
            return self
        self._serial = serial.serial_for_url(
            self.port,
            baudrate=self.baudrate,
            timeout=self.timeout,
            write_timeout=self.timeout,
            rtscts=self.rtscts,
        )
        return self

    def write(self, data: bytes) -> int:
        """
        Write bytes to the printer.

        Raises:
            serial.SerialException: If the port is closed or the write fails
        """
        if not self.is_open:
            raise serial.SerialException(f"Port {self.port} is not open")
        return self._serial.write(data)

    def flush(self):
        """Block until all written bytes are transmitted."""
        if self.is_open:
            self._serial.flush()

    def close(self):
        """Flush and close the port."""
        if self._serial is not None:
            if self._serial.is_open:
                self._serial.flush()
                self._serial.close()
            self._serial = None

    def __enter__(self) -> "SerialConnection":
        return self.open()

    def __exit__(self, exc_type, exc, tb):
        self.close()

    @property
    def is_open(self) -> bool:
        """Check if the port is open."""
        return self._serial is not None and self._serial.is_open
