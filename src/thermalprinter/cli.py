"""
Command-Line Interface for ESC/POS Thermal Printers.

Usage:
    thermalprinter ports                  - List serial ports
    thermalprinter -p PORT text TEXT      - Print a line of text
    thermalprinter -p PORT image IMAGE    - Print a 384px wide image
    thermalprinter -p PORT barcode DATA   - Print a barcode
    thermalprinter -p PORT qr DATA        - Print a QR code
    thermalprinter -p PORT receipt        - Print the demo receipt
"""

import sys
from typing import Callable, Optional

import click
import serial

from .barcodes import BarcodeType, parse_barcode_type
from .codepages import CODE_PAGES, DEFAULT_CODE_PAGE
from .connection import SerialConnection
from .escpos import Alignment
from .image import create_test_pattern
from .printer import ImageError, PrinterError, ThermalPrinter
from .receipt import print_barcode_sample, print_receipt
from .styles import PrintingStyle, parse_style


STYLE_NAMES = [s.name.lower().replace("_", "-") for s in PrintingStyle if s.name != "NONE"]
BARCODE_NAMES = [t.name.lower().replace("_", "-") for t in BarcodeType]


def scan_and_select() -> Optional[str]:
    """List serial ports and let user select one interactively.

    Returns:
        Selected port device, or None if no port selected
    """
    ports = SerialConnection.scan()

    if not ports:
        click.echo("No serial ports found.", err=True)
        return None

    # Auto-select when exactly one port found
    if len(ports) == 1:
        port = ports[0]
        click.echo(f"Found 1 port: {port.device} - using automatically")
        return port.device

    click.echo(f"\nFound {len(ports)} port(s):\n")
    for i, p in enumerate(ports, 1):
        click.echo(f"  [{i}] {p}")

    click.echo()
    while True:
        try:
            choice = click.prompt(f"Select port (1-{len(ports)})", type=int)
            if 1 <= choice <= len(ports):
                selected = ports[choice - 1]
                click.echo(f"Selected: {selected.device}")
                return selected.device
            click.echo(f"Please enter a number between 1 and {len(ports)}", err=True)
        except click.Abort:
            return None


def resolve_port(port: Optional[str]) -> Optional[str]:
    """Use the given port, else pick one from the scan."""
    if port:
        return port
    return scan_and_select()


def run_job(ctx, job: Callable[[ThermalPrinter], None], done_message: str):
    """Open the port, run a print job and close the port.

    Exits with status 1 on any printer or port error.
    """
    port = resolve_port(ctx.obj["port"])
    if port is None:
        sys.exit(1)

    baudrate = ctx.obj["baudrate"]
    click.echo(f"Opening {port} at {baudrate} baud...")

    try:
        with SerialConnection(port, baudrate=baudrate) as connection:
            printer = ThermalPrinter(
                connection,
                code_page=ctx.obj["code_page"],
                debug=ctx.obj["debug"],
            )
            job(printer)
    except serial.SerialException as e:
        click.echo(f"Connection error: {e}", err=True)
        sys.exit(1)
    except ImageError as e:
        click.echo(f"Image error: {e}", err=True)
        sys.exit(1)
    except PrinterError as e:
        click.echo(f"Printer error: {e}", err=True)
        sys.exit(1)

    click.echo(done_message)


@click.group()
@click.option("--port", "-p", help="Serial port or device path (if omitted, scans and prompts)")
@click.option("--baudrate", "-b", default=SerialConnection.DEFAULT_BAUDRATE,
              help="Baud rate (default 19200)")
@click.option(
    "--code-page",
    type=click.Choice(list(CODE_PAGES.keys()), case_sensitive=False),
    default=DEFAULT_CODE_PAGE,
    help="Printer code page (default windows-1251)",
)
@click.option("--debug/--no-debug", default=False, help="Enable debug output")
@click.pass_context
def main(ctx, port, baudrate, code_page, debug):
    """ESC/POS Thermal Printer CLI."""
    ctx.ensure_object(dict)
    ctx.obj["port"] = port
    ctx.obj["baudrate"] = baudrate
    ctx.obj["code_page"] = code_page
    ctx.obj["debug"] = debug


@main.command()
def ports():
    """List serial ports."""
    found = SerialConnection.scan()

    if not found:
        click.echo("No serial ports found.")
        return

    click.echo(f"Found {len(found)} port(s):\n")
    for p in found:
        click.echo(f"  {p}")


@main.command()
@click.argument("text")
@click.option(
    "--align",
    type=click.Choice(["left", "center", "right"]),
    default="left",
    help="Text alignment (default: left)",
)
@click.option(
    "--style",
    "styles",
    multiple=True,
    type=click.Choice(STYLE_NAMES),
    help="Character style, may be repeated",
)
@click.option("--bold", is_flag=True, help="Print in bold")
@click.option("--big", is_flag=True, help="Print double size bold")
@click.option("--invert", is_flag=True, help="Print white on black")
@click.pass_context
def text(ctx, text, align, styles, bold, big, invert):
    """Print a line of text.

    Examples:
        thermalprinter -p /dev/ttyUSB0 text "Hello"
        thermalprinter text "TOTAL" --style double-width --style underline
    """

    def _text(printer: ThermalPrinter):
        printer.set_align(Alignment[align.upper()])
        if big:
            printer.write_line_big(text)
        elif bold:
            printer.write_line_bold(text)
        elif invert:
            printer.write_line_invert(text)
        elif styles:
            printer.write_line(text, parse_style(list(styles)))
        else:
            printer.write_line(text)
        printer.set_align_left()
        printer.line_feed(2)

    run_job(ctx, _text, "Print complete!")


@main.command("image")
@click.argument("image", type=click.Path(exists=True, dir_okay=False))
@click.option("--row-delay", default=ThermalPrinter.DEFAULT_PICTURE_LINE_SLEEP_MS,
              type=click.IntRange(0, None),
              help="Delay after each image row in ms (default 40)")
@click.pass_context
def print_image(ctx, image, row_delay):
    """Print an image file. The image must be 384px wide."""

    def _image(printer: ThermalPrinter):
        printer.picture_line_sleep_ms = row_delay
        click.echo(f"Printing {image}...")
        printer.print_image(image)
        printer.line_feed(2)

    run_job(ctx, _image, "Print complete!")


@main.command()
@click.pass_context
def test(ctx):
    """Print a test pattern."""

    def _test(printer: ThermalPrinter):
        click.echo("Printing test pattern...")
        printer.print_image(create_test_pattern())
        printer.line_feed(2)

    run_job(ctx, _test, "Test print complete!")


@main.command()
@click.argument("data")
@click.option(
    "--type",
    "barcode_type",
    type=click.Choice(BARCODE_NAMES),
    default="code128",
    help="Barcode type (default: code128)",
)
@click.option("--large", is_flag=True, help="Use wide barcode modules")
@click.option("--sample", is_flag=True, help="Print a caption line above the barcode")
@click.pass_context
def barcode(ctx, data, barcode_type, large, sample):
    """Print a barcode rendered by the printer.

    DATA is the content to encode (numbers/text depending on barcode type).

    Examples:
        thermalprinter barcode "3350030103392" --type ean13
        thermalprinter barcode "HELLO" --type code39
    """
    symbology = parse_barcode_type(barcode_type)

    def _barcode(printer: ThermalPrinter):
        if sample:
            sent = print_barcode_sample(printer, symbology, data)
        else:
            printer.set_large_barcode(large)
            sent = printer.print_barcode(symbology, data)
        if not sent:
            raise PrinterError(
                f"Invalid barcode data: {len(data)} characters not accepted by {barcode_type}"
            )
        printer.line_feed(2)

    run_job(ctx, _barcode, "Barcode printed!")


@main.command()
@click.argument("data")
@click.pass_context
def qr(ctx, data):
    """Print a QR code rendered by the printer.

    DATA is the content to encode (URL, text, etc.).
    """

    def _qr(printer: ThermalPrinter):
        printer.set_align_center()
        printer.print_qr_code(data)
        printer.set_align_left()
        printer.line_feed(2)

    run_job(ctx, _qr, "QR code printed!")


@main.command()
@click.pass_context
def codetable(ctx):
    """Print the characters of the active code page."""

    def _codetable(printer: ThermalPrinter):
        printer.print_code_table()
        printer.line_feed(2)

    run_job(ctx, _codetable, "Code table printed!")


@main.command()
@click.option("--shop", default="MY SHOP", help="Shop name")
@click.option("--vat", default=10.0, help="VAT percent (default 10)")
@click.pass_context
def receipt(ctx, shop, vat):
    """Print the demo receipt."""

    def _receipt(printer: ThermalPrinter):
        printer.wake_up()
        print_receipt(printer, shop_name=shop, vat_percent=vat)
        printer.sleep()

    run_job(ctx, _receipt, "Receipt printed!")


@main.command()
@click.argument("hex_data")
@click.option(
    "--force",
    is_flag=True,
    help="Acknowledge risks and skip warning prompt",
)
@click.pass_context
def raw(ctx, hex_data, force):
    """Send raw hex data to printer (for debugging/testing).

    WARNING: This command bypasses all checks. Only use if you understand
    ESC/POS commands.
    """
    try:
        data = bytes.fromhex(hex_data)
    except ValueError:
        click.echo("Invalid hex data!", err=True)
        sys.exit(1)

    if not force:
        click.echo(
            "WARNING: Raw mode sends arbitrary data directly to the printer.",
            err=True,
        )
        if not click.confirm("Do you want to continue?"):
            click.echo("Aborted.")
            return

    def _raw(printer: ThermalPrinter):
        click.echo(f"Sending: {data.hex()}")
        printer.send_raw(data)

    run_job(ctx, _raw, "Sent.")


if __name__ == "__main__":
    main()
