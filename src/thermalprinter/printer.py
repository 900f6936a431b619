"""
High-Level Thermal Printer Interface.

Provides a simple API for printing receipts on serial ESC/POS thermal
printers. Every operation writes its bytes straight to the output stream;
nothing is buffered here, and the stream is flushed and closed by the
caller.
"""

import sys
import time
from pathlib import Path
from typing import Callable, Optional, Protocol, Union

from PIL import Image

from .barcodes import BarcodeType, build_barcode
from .codepages import DEFAULT_CODE_PAGE, CodePage, check_errors_policy, get_code_page
from .escpos import Alignment, ESCPOSCommands
from .image import ImageProcessor, ImageSizeError, ImageSource
from .styles import BIG_STYLE, PrintingStyle, UnderlineHeight, split_style


# --- Exception Classes ---


class PrinterError(Exception):
    """Base exception for all printer errors."""

    pass


class ValidationError(PrinterError, ValueError):
    """Invalid input, detected before anything is written."""

    pass


class ImageError(ValidationError):
    """Error processing image for printing."""

    pass


class ByteSink(Protocol):
    """Anything the printer can write to: a serial port, a file, BytesIO."""

    def write(self, data: bytes) -> Optional[int]:
        ...


class ThermalPrinter:
    """
    High-level interface to an ESC/POS serial thermal printer.

    The printer keeps alignment and style itself; this class does not track
    them. On/off commands must be paired by the caller.
    """

    DEFAULT_MAX_PRINTING_DOTS = 7   # (7+1)*8 = 64 dots
    DEFAULT_HEATING_TIME = 80       # 800us
    DEFAULT_HEATING_INTERVAL = 2    # 20us

    # Pacing delays in milliseconds
    DEFAULT_WRITE_LINE_SLEEP_MS = 0
    DEFAULT_PICTURE_LINE_SLEEP_MS = 40

    def __init__(self, stream: ByteSink,
                 max_printing_dots: int = DEFAULT_MAX_PRINTING_DOTS,
                 heating_time: int = DEFAULT_HEATING_TIME,
                 heating_interval: int = DEFAULT_HEATING_INTERVAL,
                 code_page: str = DEFAULT_CODE_PAGE,
                 write_line_sleep_ms: int = DEFAULT_WRITE_LINE_SLEEP_MS,
                 picture_line_sleep_ms: int = DEFAULT_PICTURE_LINE_SLEEP_MS,
                 encoding_errors: str = "replace",
                 sleep: Callable[[float], None] = time.sleep,
                 debug: bool = False):
        """
        Initialize the printer and send reset, heating parameters and code page.

        Args:
            stream: Output stream (serial port or character device)
            max_printing_dots: Max printing dots (0-255), unit (n+1)*8 dots
            heating_time: Heating time (3-255), unit 10us
            heating_interval: Heating interval (0-255), unit 10us
            code_page: Printer code page name (IBM437, ibm850, windows-1251)
            write_line_sleep_ms: Delay after each text line
            picture_line_sleep_ms: Delay after each image row
            encoding_errors: "replace" or "strict" for unmappable characters
            sleep: Function used for pacing delays (seconds)
            debug: Enable debug output

        Raises:
            ValueError: If the code page is unknown or a parameter is not a byte
        """
        self._code_page: CodePage = get_code_page(code_page)
        self._encoding_errors = check_errors_policy(encoding_errors)
        # Build first so a bad value raises before anything is written
        setup = (
            ESCPOSCommands.reset()
            + ESCPOSCommands.set_printing_parameters(
                max_printing_dots, heating_time, heating_interval)
            + ESCPOSCommands.select_code_page(self._code_page)
        )

        self._max_printing_dots = max_printing_dots
        self._heating_time = heating_time
        self._heating_interval = heating_interval

        self.write_line_sleep_ms = write_line_sleep_ms
        self.picture_line_sleep_ms = picture_line_sleep_ms

        self.stream = stream
        self.image_processor = ImageProcessor()
        self._sleep = sleep
        self._debug = debug

        self._log(f"Init: {self._code_page.name}, dots={max_printing_dots}, "
                  f"time={heating_time}, interval={heating_interval}")
        self._write(setup)

    # ---- Configuration ----

    @property
    def code_page(self) -> CodePage:
        """Code page selected at construction."""
        return self._code_page

    @property
    def encoding_name(self) -> str:
        """Name of the active code page."""
        return self._code_page.name

    @property
    def max_printing_dots(self) -> int:
        return self._max_printing_dots

    @property
    def heating_time(self) -> int:
        return self._heating_time

    @property
    def heating_interval(self) -> int:
        return self._heating_interval

    def set_debug(self, enabled: bool):
        """Enable/disable debug output."""
        self._debug = enabled

    def _log(self, message: str):
        """Print debug message if enabled."""
        if self._debug:
            print(f"[ESCPOS] {message}", file=sys.stderr)

    def _write(self, data: bytes):
        if data:
            self.stream.write(data)

    def _pause(self, milliseconds: float):
        if milliseconds > 0:
            self._sleep(milliseconds / 1000.0)

    def _encode(self, text: str) -> bytes:
        return self._code_page.encode(text, errors=self._encoding_errors)

    # ---- Device Commands ----

    def reset(self):
        """Reset the printer."""
        self._write(ESCPOSCommands.reset())

    def wake_up(self):
        """Set the printer online."""
        self._write(ESCPOSCommands.wake_up())

    def sleep(self):
        """Set the printer offline."""
        self._write(ESCPOSCommands.sleep())

    def line_feed(self, lines: Optional[int] = None):
        """
        Print the contents of the buffer and feed paper.

        Args:
            lines: Number of lines to feed; None sends a single LF
        """
        if lines is None:
            self._write(ESCPOSCommands.line_feed())
        else:
            self._write(ESCPOSCommands.feed_lines(lines))

    def feed_dots(self, dots: int):
        """Print the contents of the buffer and feed n dots."""
        self._write(ESCPOSCommands.feed_dots(dots))

    def paper_cut(self):
        self._write(ESCPOSCommands.paper_cut())

    def set_align(self, alignment: Alignment):
        self._write(ESCPOSCommands.set_align(alignment))

    def set_align_left(self):
        """Align the text to the left."""
        self.set_align(Alignment.LEFT)

    def set_align_center(self):
        """Center the text."""
        self.set_align(Alignment.CENTER)

    def set_align_right(self):
        """Align the text to the right."""
        self.set_align(Alignment.RIGHT)

    def set_line_spacing(self, dots: int):
        """Set the line spacing in dots (printer default 32)."""
        self._write(ESCPOSCommands.set_line_spacing(dots))

    def set_printing_parameters(self, max_printing_dots: int, heating_time: int,
                                heating_interval: int):
        """Send heating parameters. The session's configuration is unchanged."""
        self._write(ESCPOSCommands.set_printing_parameters(
            max_printing_dots, heating_time, heating_interval))

    def indent(self, columns: int):
        """Indent the text; columns outside 0-31 reset the indent to 0."""
        self._write(ESCPOSCommands.indent(columns))

    def horizontal_line(self, length: int):
        """Print a horizontal line of up to 32 characters."""
        self._write(ESCPOSCommands.horizontal_line(length))

    def bold_on(self):
        self._write(ESCPOSCommands.bold(True))

    def bold_off(self):
        self._write(ESCPOSCommands.bold(False))

    def italic_on(self):
        self._write(ESCPOSCommands.italic(True))

    def italic_off(self):
        self._write(ESCPOSCommands.italic(False))

    def white_on_black_on(self):
        """Set white on black mode on."""
        self._write(ESCPOSCommands.white_on_black(True))

    def white_on_black_off(self):
        """Set white on black mode off."""
        self._write(ESCPOSCommands.white_on_black(False))

    def set_size(self, double_width: bool, double_height: bool):
        """Set the character size."""
        self._write(ESCPOSCommands.set_size(double_width, double_height))

    def set_barcode_left_space(self, dots: int):
        self._write(ESCPOSCommands.set_barcode_left_space(dots))

    def set_large_barcode(self, large: bool):
        """Select large (module width 3) or normal (2) barcodes."""
        self._write(ESCPOSCommands.set_large_barcode(large))

    # ---- Text ----

    def write_to_buffer(self, text: str):
        """
        Send text to the printer buffer.

        Leading and trailing CR/LF characters are stripped. Nothing is
        printed until a line feed is sent.
        """
        self._write(self._encode(text.strip("\r\n")))

    def write_line(self, text: str, style: Union[PrintingStyle, int, None] = None):
        """
        Print a line of text.

        Args:
            text: Text to print
            style: Optional PrintingStyle flags. Underline bits are sent as
                the underline height; both underline and style are reset to
                0 after the line.
        """
        if style is None:
            self.write_to_buffer(text)
            self._write(ESCPOSCommands.line_feed())
            self._pause(self.write_line_sleep_ms)
            return

        underline, style_byte = split_style(style)

        if underline != UnderlineHeight.NONE:
            self._write(ESCPOSCommands.underline(underline))
        self._write(ESCPOSCommands.character_style(style_byte))

        self.write_line(text)

        self._write(ESCPOSCommands.underline(UnderlineHeight.NONE))
        self._write(ESCPOSCommands.character_style(0))

    def write_line_bold(self, text: str):
        """Print a line in bold, followed by an empty line."""
        self.bold_on()
        self.write_line(text)
        self.bold_off()
        self.line_feed()

    def write_line_invert(self, text: str):
        """Print a line white on black, followed by an empty line."""
        self.white_on_black_on()
        self.write_line(text)
        self.white_on_black_off()
        self.line_feed()

    def write_line_big(self, text: str):
        """Print a line in double size bold."""
        self._write(ESCPOSCommands.character_style(BIG_STYLE))
        self.write_line(text)
        self._write(ESCPOSCommands.character_style(0))

    def print_code_table(self):
        """Print every character of the active code page from 32 to 254."""
        for b in range(32, 255):
            self.write_to_buffer(f" {b} ")
            self._write(bytes([b]))

    # ---- Barcodes ----

    def print_barcode(self, barcode_type: BarcodeType, data: str) -> bool:
        """
        Print a barcode rendered by the printer.

        Args:
            barcode_type: Symbology
            data: Payload; upper-cased except for CODE93 and CODE128

        Returns:
            True if the barcode was sent, False if the payload length is
            not accepted by the symbology (nothing is written)
        """
        frame = build_barcode(barcode_type, data, self._code_page, self._encoding_errors)
        if not frame:
            self._log(f"Barcode rejected: {BarcodeType(barcode_type).name} "
                      f"with {len(data)} characters")
            return False
        self._write(frame)
        return True

    def print_qr_code(self, text: str):
        """Print a QR code rendered by the printer."""
        self._log(f"QR payload: {len(text)} characters")
        self._write(ESCPOSCommands.qr_code_page())
        self._write(ESCPOSCommands.qr_init())
        self.write_to_buffer(text)

    # ---- Images ----

    def _load_image(self, image: Union[str, Path, bytes, Image.Image]) -> Image.Image:
        """
        Load and validate an image for printing.

        Raises:
            ImageError: If image cannot be loaded or is not 384px wide
        """
        try:
            img = self.image_processor.load(image)
            self.image_processor.validate(img)
            return img
        except FileNotFoundError as e:
            raise ImageError(str(e)) from e
        except ImageSizeError as e:
            raise ImageError(str(e)) from e
        except (OSError, SyntaxError, ValueError) as e:
            raise ImageError(f"Failed to load image: {e}") from e

    def print_image(self, image: ImageSource):
        """
        Print an image. The image must be 384px wide.

        Pixels darker than 50% brightness are printed. Each row is followed
        by the picture line delay.

        Args:
            image: Image source (path, bytes, or PIL Image)

        Raises:
            ImageError: If the image cannot be loaded or has the wrong size
        """
        img = self._load_image(image)
        try:
            rows = list(self.image_processor.iter_rows(img))
        except (OSError, SyntaxError) as e:
            raise ImageError(f"Failed to read image: {e}") from e
        self._log(f"Image size: {img.width}x{img.height} pixels, {len(rows)} rows")

        self._write(ESCPOSCommands.raster_header(img.height))
        for row in rows:
            self._write(row)
            self._pause(self.picture_line_sleep_ms)

    def send_raw(self, data: bytes):
        """
        Send raw bytes.

        Useful for protocol testing.
        """
        self._log(f"TX: {data.hex() if len(data) < 50 else data[:50].hex() + '...'}")
        self._write(data)

    def __str__(self) -> str:
        return (
            "ThermalPrinter:\n"
            f"\tmax_printing_dots={self._max_printing_dots},\n"
            f"\theating_time={self._heating_time},\n"
            f"\theating_interval={self._heating_interval},\n"
            f"\tpicture_line_sleep_ms={self.picture_line_sleep_ms},\n"
            f"\twrite_line_sleep_ms={self.write_line_sleep_ms},\n"
            f"\tencoding={self._code_page.name}"
        )
