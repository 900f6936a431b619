"""
Integration tests for a real thermal printer.

These tests require real hardware to run. Without --port they are skipped:

    pytest tests/ -m hardware --port=/dev/ttyUSB0
"""

import pytest

from thermalprinter import SerialConnection, ThermalPrinter
from thermalprinter.barcodes import BarcodeType
from thermalprinter.image import create_test_pattern
from thermalprinter.receipt import print_receipt


@pytest.fixture
def hardware_printer(printer_port):
    """Provide a printer on an open serial port."""
    with SerialConnection(printer_port) as connection:
        yield ThermalPrinter(connection)


@pytest.mark.hardware
class TestHardware:
    """Print jobs on a connected printer."""

    def test_text_styles(self, hardware_printer):
        hardware_printer.write_line("Plain line")
        hardware_printer.write_line_bold("Bold line")
        hardware_printer.write_line_invert("Inverted line")
        hardware_printer.write_line_big("Big")
        hardware_printer.horizontal_line(32)
        hardware_printer.line_feed(2)

    def test_barcode_and_qr(self, hardware_printer):
        assert hardware_printer.print_barcode(BarcodeType.EAN13, "3350030103392")
        hardware_printer.line_feed()
        hardware_printer.print_qr_code("QRCODE TEST123456789")
        hardware_printer.line_feed(2)

    def test_image(self, hardware_printer):
        hardware_printer.print_image(create_test_pattern())
        hardware_printer.line_feed(2)

    def test_receipt(self, hardware_printer):
        print_receipt(hardware_printer)
