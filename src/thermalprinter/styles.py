"""
Character style flags for ESC/POS thermal printers.

The firmware takes the character style as one byte (ESC ! n), but the two
underline bits are not honoured there: underline is a separate command
(ESC - n) with a height of 0, 1 or 2 dots. ``split_style`` separates the
two before encoding.
"""

from enum import IntEnum, IntFlag
from typing import Union


class PrintingStyle(IntFlag):
    """Character style bits, as sent with ESC ! n."""
    NONE = 0
    UNDERLINE = 1 << 0        # Thin underline (moved to ESC -)
    REVERSE = 1 << 1          # White on black
    UPDOWN = 1 << 2           # Upside-down characters
    BOLD = 1 << 3
    DOUBLE_HEIGHT = 1 << 4
    DOUBLE_WIDTH = 1 << 5
    DELETE_LINE = 1 << 6      # Strike-through
    THICK_UNDERLINE = 1 << 7  # Thick underline (moved to ESC -)


class UnderlineHeight(IntEnum):
    """Underline height in dots (ESC - n)."""
    NONE = 0
    THIN = 1
    THICK = 2


UNDERLINE_BITS = PrintingStyle.UNDERLINE | PrintingStyle.THICK_UNDERLINE

# Byte used by the "big" line helper
BIG_STYLE = PrintingStyle.DOUBLE_HEIGHT | PrintingStyle.DOUBLE_WIDTH | PrintingStyle.BOLD


def split_style(style: Union[PrintingStyle, int]) -> tuple[UnderlineHeight, int]:
    """
    Split a style into its underline height and the remaining style byte.

    Thick underline wins when both underline bits are set.

    Args:
        style: PrintingStyle flags or a raw style byte (0-255)

    Returns:
        (underline height, style byte with both underline bits cleared)

    Raises:
        ValueError: If style does not fit in one byte
    """
    value = int(style)
    if not 0 <= value <= 0xFF:
        raise ValueError(f"Style must be a byte (0-255), got {value}")

    underline = UnderlineHeight.NONE
    if value & PrintingStyle.UNDERLINE:
        underline = UnderlineHeight.THIN
    if value & PrintingStyle.THICK_UNDERLINE:
        underline = UnderlineHeight.THICK

    return underline, value & ~int(UNDERLINE_BITS) & 0xFF


def parse_style(names: list[str]) -> PrintingStyle:
    """Combine style names (e.g. ["bold", "double-width"]) into flags."""
    style = PrintingStyle.NONE
    for name in names:
        key = name.strip().upper().replace("-", "_")
        try:
            style |= PrintingStyle[key]
        except KeyError:
            raise ValueError(f"Unknown style: {name}") from None
    return style
