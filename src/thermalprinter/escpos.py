"""
ESC/POS Command Definitions.

Byte builders for the command set understood by serial thermal receipt
printers (58mm, 384-dot print head). Every builder returns the complete
byte sequence of one device command; nothing here touches the output
stream.

Reference: ESC/POS command manual (thermal printer variant)
"""

from enum import IntEnum

from .codepages import CodePage
from .styles import UnderlineHeight


class Alignment(IntEnum):
    """Justification values for ESC a n."""
    LEFT = 0
    CENTER = 1
    RIGHT = 2


class ESCPOSCommands:
    """
    ESC/POS command builders.

    All values are byte parameters (0-255); out-of-range values raise
    ValueError when the command is built.
    """

    # Control characters
    LF = 10    # Line feed, prints the buffered line
    DC2 = 18
    ESC = 27
    FS = 28
    GS = 29

    # Box-drawing character used for horizontal rules (IBM437 0xC4)
    HLINE_CHAR = 0xC4
    MAX_HLINE_LENGTH = 32
    MAX_INDENT = 31

    # Style on/off pairs are preceded by a right-side character spacing
    # command (ESC SP n)
    _SPACING = 32

    @staticmethod
    def reset() -> bytes:
        """Initialize the printer (ESC @)."""
        return bytes([ESCPOSCommands.ESC, 64])

    @staticmethod
    def wake_up() -> bytes:
        """Set the printer online (ESC = 1)."""
        return bytes([ESCPOSCommands.ESC, 61, 1])

    @staticmethod
    def sleep() -> bytes:
        """Set the printer offline (ESC = 0)."""
        return bytes([ESCPOSCommands.ESC, 61, 0])

    @staticmethod
    def line_feed() -> bytes:
        """Print the buffer and feed one line."""
        return bytes([ESCPOSCommands.LF])

    @staticmethod
    def feed_lines(lines: int) -> bytes:
        """Print the buffer and feed n lines (ESC d n)."""
        return bytes([ESCPOSCommands.ESC, 100, lines])

    @staticmethod
    def feed_dots(dots: int) -> bytes:
        """Print the buffer and feed n dots (ESC J n)."""
        return bytes([ESCPOSCommands.ESC, 74, dots])

    @staticmethod
    def paper_cut() -> bytes:
        """Cut the paper (ESC i)."""
        return bytes([ESCPOSCommands.ESC, 105])

    @staticmethod
    def set_align(alignment: Alignment) -> bytes:
        """Set justification (ESC a n)."""
        return bytes([ESCPOSCommands.ESC, 97, int(Alignment(alignment))])

    @staticmethod
    def set_line_spacing(dots: int) -> bytes:
        """
        Set line spacing (ESC 3 n).

        Args:
            dots: Line spacing in dots, printer default is 32
        """
        return bytes([ESCPOSCommands.ESC, 51, dots])

    @staticmethod
    def set_printing_parameters(max_printing_dots: int, heating_time: int,
                                heating_interval: int) -> bytes:
        """
        Set the heating control parameters (ESC 7 n1 n2 n3).

        Args:
            max_printing_dots: Max heating dots, unit (n+1)*8 dots, default 7 (64 dots)
            heating_time: Heating time, unit 10us, default 80 (800us)
            heating_interval: Heating interval, unit 10us, default 2 (20us)
        """
        return bytes([ESCPOSCommands.ESC, 55, max_printing_dots,
                      heating_time, heating_interval])

    @staticmethod
    def indent(columns: int) -> bytes:
        """
        Indent the text (ESC B n).

        Columns outside 0-31 are sent as 0.
        """
        if columns < 0 or columns > ESCPOSCommands.MAX_INDENT:
            columns = 0
        return bytes([ESCPOSCommands.ESC, 66, columns])

    @staticmethod
    def horizontal_line(length: int) -> bytes:
        """
        Horizontal rule of box-drawing characters followed by a line feed.

        Length is capped at 32 characters; zero or negative gives no bytes.
        """
        if length <= 0:
            return b""
        length = min(length, ESCPOSCommands.MAX_HLINE_LENGTH)
        return bytes([ESCPOSCommands.HLINE_CHAR] * length + [ESCPOSCommands.LF])

    @staticmethod
    def bold(enable: bool = True) -> bytes:
        """Enable or disable bold text (ESC SP n, ESC E n)."""
        n = 1 if enable else 0
        return bytes([ESCPOSCommands.ESC, ESCPOSCommands._SPACING, n,
                      ESCPOSCommands.ESC, 69, n])

    @staticmethod
    def italic(enable: bool = True) -> bytes:
        """Enable or disable italic text.

        The firmware uses ESC 4 to switch on and ESC 5 to switch off.
        """
        if enable:
            return bytes([ESCPOSCommands.ESC, ESCPOSCommands._SPACING, 1,
                          ESCPOSCommands.ESC, 52, 1])
        return bytes([ESCPOSCommands.ESC, ESCPOSCommands._SPACING, 0,
                      ESCPOSCommands.ESC, 53, 0])

    @staticmethod
    def white_on_black(enable: bool = True) -> bytes:
        """Enable or disable reverse printing (GS B n)."""
        return bytes([ESCPOSCommands.GS, 66, 1 if enable else 0])

    @staticmethod
    def character_style(style: int) -> bytes:
        """Select print mode (ESC ! n)."""
        return bytes([ESCPOSCommands.ESC, 33, int(style)])

    @staticmethod
    def underline(height: UnderlineHeight) -> bytes:
        """Set underline height (ESC - n)."""
        return bytes([ESCPOSCommands.ESC, 45, int(UnderlineHeight(height))])

    @staticmethod
    def set_size(double_width: bool, double_height: bool) -> bytes:
        """Select character size (GS ! n)."""
        value = int(double_width) * 0xF0 + int(double_height) * 0x0F
        return bytes([ESCPOSCommands.GS, 33, value])

    @staticmethod
    def select_code_page(code_page: CodePage) -> bytes:
        """Select character code table (ESC t n)."""
        return bytes([ESCPOSCommands.ESC, 116, code_page.selector])

    # ---- Barcode Commands ----

    @staticmethod
    def barcode_header(type_byte: int) -> bytes:
        """Print barcode header (GS k m); payload and NUL follow."""
        return bytes([ESCPOSCommands.GS, 107, type_byte])

    @staticmethod
    def set_barcode_left_space(dots: int) -> bytes:
        """Set barcode left spacing (GS x n)."""
        return bytes([ESCPOSCommands.GS, 120, dots])

    @staticmethod
    def set_large_barcode(large: bool) -> bytes:
        """Select barcode module width (GS w n): 3 for large, 2 for normal."""
        return bytes([ESCPOSCommands.GS, 119, 3 if large else 2])

    @staticmethod
    def qr_code_page() -> bytes:
        """Select the kanji (Shift-JIS) code system used for QR data (FS C 1)."""
        return bytes([ESCPOSCommands.FS, 67, 1])

    @staticmethod
    def qr_init() -> bytes:
        """QR code print command (GS Q); the payload follows as text."""
        return bytes([ESCPOSCommands.GS, 81, 6, 4, 4, 20, 0])

    # ---- Raster Commands ----

    @staticmethod
    def raster_header(height: int) -> bytes:
        """
        Bitmap header (DC2 v nL nH) for an LSB-first 384-dot-wide image.

        Args:
            height: Number of rows (0-65535), sent little-endian
        """
        return bytes([ESCPOSCommands.DC2, 118, height & 0xFF, (height >> 8) & 0xFF])
