"""
Demo receipt for ESC/POS thermal printers.

Composes a sample shop receipt and a barcode sample from the printer's
primitives. Useful to check text, alignment, indent and styles on real
hardware.
"""

from dataclasses import dataclass
from typing import Optional

from .barcodes import BarcodeType
from .printer import ThermalPrinter
from .styles import PrintingStyle

# Paper width in characters (font A, 58mm paper)
LINE_WIDTH = 32

# Item names longer than this are truncated
MAX_ITEM_NAME = 24
PRICE_COLUMN = 25
PRICE_WIDTH = 7

DEFAULT_VAT_PERCENT = 10.0


@dataclass
class ReceiptItem:
    """One line of the receipt; price in cents."""
    name: str
    price: int


SAMPLE_ITEMS = [
    ReceiptItem("Item #1", 8990),
    ReceiptItem("Item #2 goes here", 2000),
    ReceiptItem("Item #3", 1490),
    ReceiptItem("Item number four", 490),
    ReceiptItem("Item #5 is cheap", 245),
    ReceiptItem("Item #6", 2990),
    ReceiptItem("The seventh item", 790),
]


def format_amount(cents: float) -> str:
    """Format an amount in cents as 0.00."""
    return f"{cents / 100:.2f}"


def truncate_name(name: str) -> str:
    """Upper-case an item name, cutting it to 23 characters plus '.' if too long."""
    if len(name) > MAX_ITEM_NAME:
        name = name[:MAX_ITEM_NAME - 1] + "."
    return name.upper()


def print_item(printer: ThermalPrinter, item: ReceiptItem):
    """Print an item name with its price in the right-hand column."""
    printer.reset()
    printer.indent(0)
    printer.write_to_buffer(truncate_name(item.name))
    printer.indent(PRICE_COLUMN)
    printer.write_line(format_amount(item.price).rjust(PRICE_WIDTH))
    printer.reset()


def print_receipt(
    printer: ThermalPrinter,
    items: Optional[list[ReceiptItem]] = None,
    shop_name: str = "MY SHOP",
    address: str = "My address, CITY",
    vat_percent: float = DEFAULT_VAT_PERCENT,
    seller: str = "Bob",
    footer: str = "09-28-2011 10:53 02331 509",
) -> int:
    """
    Print a sample receipt.

    Args:
        printer: Printer to write to
        items: Receipt lines (default: SAMPLE_ITEMS)
        shop_name: Header, printed double size
        address: Line under the header
        vat_percent: VAT added to the subtotal
        seller: Seller name
        footer: Last line (date, register, receipt number)

    Returns:
        Total in cents, VAT excluded
    """
    if items is None:
        items = SAMPLE_ITEMS

    printer.set_line_spacing(32)
    printer.set_align_center()
    printer.write_line(shop_name, PrintingStyle.DOUBLE_HEIGHT | PrintingStyle.DOUBLE_WIDTH)
    printer.write_line(address)
    printer.line_feed()
    printer.line_feed()

    total = 0
    for item in items:
        print_item(printer, item)
        total += item.price

    printer.horizontal_line(LINE_WIDTH)

    vat = total * vat_percent / 100
    printer.write_line(format_amount(total).rjust(LINE_WIDTH))
    vat_label = f"VAT {vat_percent:.1f}%".replace(".", ",")
    printer.write_line(vat_label + format_amount(vat).rjust(LINE_WIDTH - len(vat_label)))
    printer.write_line(
        f"$ {format_amount(total + vat)}".rjust(LINE_WIDTH // 2),
        PrintingStyle.DOUBLE_WIDTH,
    )
    printer.line_feed()

    printer.write_line("CASH" + format_amount(total).rjust(LINE_WIDTH - 4))
    printer.line_feed()
    printer.line_feed()
    printer.set_align_center()
    printer.write_line("Have a good day.", PrintingStyle.BOLD)

    printer.line_feed()
    printer.set_align_left()
    printer.write_line(f"Seller : {seller}")
    printer.write_line(footer)
    printer.paper_cut()

    return total


def print_barcode_sample(printer: ThermalPrinter,
                         barcode_type: BarcodeType = BarcodeType.EAN13,
                         data: str = "3350030103392") -> bool:
    """Print a labelled barcode sample."""
    printer.write_line(f"{barcode_type.name.lower()}, data: {data}")
    printer.set_large_barcode(False)
    printer.line_feed()
    return printer.print_barcode(barcode_type, data)
