"""ESC/POS Serial Thermal Printer Driver."""

__version__ = "0.1.0"

from .barcodes import BarcodeType
from .codepages import CODE_PAGES, CodePage, get_code_page
from .connection import PortInfo, SerialConnection
from .escpos import Alignment, ESCPOSCommands
from .image import PRINT_WIDTH, ImageProcessor, ImageSizeError
from .printer import (
    ImageError,
    PrinterError,
    ThermalPrinter,
    ValidationError,
)
from .styles import PrintingStyle, UnderlineHeight

__all__ = [
    "ThermalPrinter",
    "PrinterError",
    "ValidationError",
    "ImageError",
    "ImageSizeError",
    "ImageProcessor",
    "PRINT_WIDTH",
    "SerialConnection",
    "PortInfo",
    "ESCPOSCommands",
    "Alignment",
    "PrintingStyle",
    "UnderlineHeight",
    "BarcodeType",
    "CodePage",
    "CODE_PAGES",
    "get_code_page",
]
