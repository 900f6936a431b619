"""
Firmware Barcode Symbologies.

The printer renders 1D barcodes itself from GS k m <data> NUL. This module
holds the per-symbology rules: the type byte m, the accepted payload
length and whether the payload is upper-cased and re-encoded into the
active code page before sending.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Callable

from .codepages import CodePage
from .escpos import ESCPOSCommands


class BarcodeType(IntEnum):
    """Barcode symbologies, valued by their GS k type byte."""
    UPC_A = 0
    UPC_E = 1
    EAN13 = 2
    EAN8 = 3
    CODE39 = 4
    I25 = 5
    CODEBAR = 6
    CODE93 = 7
    CODE128 = 8
    CODE11 = 9
    MSI = 10


def _one_of(*lengths: int) -> Callable[[int], bool]:
    return lambda n: n in lengths


def _longer_than_one(n: int) -> bool:
    return n > 1


def _i25_length(n: int) -> bool:
    # Kept as the driver has always checked it: any length above 1, or an
    # even length (which only adds the empty payload)
    return n > 1 or n % 2 == 0


@dataclass(frozen=True)
class BarcodeRule:
    """Payload rules for one symbology.

    Attributes:
        description: Human-readable length constraint
        length_ok: Predicate over the payload length (in characters)
        fold_case: Upper-case and code-page encode the payload; when False
            the UTF-8 bytes of the payload are sent unchanged
    """
    description: str
    length_ok: Callable[[int], bool]
    fold_case: bool = True


BARCODE_RULES: dict[BarcodeType, BarcodeRule] = {
    BarcodeType.UPC_A: BarcodeRule("11 or 12 characters", _one_of(11, 12)),
    BarcodeType.UPC_E: BarcodeRule("11 or 12 characters", _one_of(11, 12)),
    BarcodeType.EAN13: BarcodeRule("12 or 13 characters", _one_of(12, 13)),
    BarcodeType.EAN8: BarcodeRule("7 or 8 characters", _one_of(7, 8)),
    BarcodeType.CODE39: BarcodeRule("more than 1 character", _longer_than_one),
    BarcodeType.I25: BarcodeRule("more than 1 character or even length", _i25_length),
    BarcodeType.CODEBAR: BarcodeRule("more than 1 character", _longer_than_one),
    BarcodeType.CODE93: BarcodeRule("more than 1 character", _longer_than_one, fold_case=False),
    BarcodeType.CODE128: BarcodeRule("more than 1 character", _longer_than_one, fold_case=False),
    BarcodeType.CODE11: BarcodeRule("more than 1 character", _longer_than_one),
    BarcodeType.MSI: BarcodeRule("more than 1 character", _longer_than_one),
}


def parse_barcode_type(name: str) -> BarcodeType:
    """Look up a symbology by name ("ean13", "upc-a", "CODE128", ...)."""
    key = name.strip().upper().replace("-", "_")
    if key in ("UPCA", "UPCE"):
        key = key[:3] + "_" + key[3:]
    try:
        return BarcodeType[key]
    except KeyError:
        raise ValueError(
            f"Invalid barcode type: {name}. "
            f"Supported types: {[t.name.lower() for t in BarcodeType]}"
        ) from None


def fold_payload(barcode_type: BarcodeType, data: str) -> str:
    """Upper-case the payload unless the symbology carries full ASCII."""
    if BARCODE_RULES[BarcodeType(barcode_type)].fold_case:
        return data.upper()
    return data


def is_valid_length(barcode_type: BarcodeType, data: str) -> bool:
    """
    Check the payload length against the symbology's rule.

    The length is taken after case folding, since upper-casing can add
    characters ("ß" becomes "SS").
    """
    barcode_type = BarcodeType(barcode_type)
    folded = fold_payload(barcode_type, data)
    return BARCODE_RULES[barcode_type].length_ok(len(folded))


def encode_payload(barcode_type: BarcodeType, data: str, code_page: CodePage,
                   errors: str = "replace") -> bytes:
    """
    Encode the barcode payload.

    CODE93 and CODE128 carry full ASCII, so their payload is sent as-is
    (UTF-8 bytes). All other symbologies are upper-cased and encoded into
    the active code page.
    """
    rule = BARCODE_RULES[BarcodeType(barcode_type)]
    if not rule.fold_case:
        return data.encode("utf-8")
    return code_page.encode(fold_payload(barcode_type, data), errors=errors)


def build_barcode(barcode_type: BarcodeType, data: str, code_page: CodePage,
                  errors: str = "replace") -> bytes:
    """
    Build the complete barcode command frame.

    Returns:
        GS k m + payload + NUL, or b"" when the payload length is not
        accepted by the symbology
    """
    barcode_type = BarcodeType(barcode_type)
    if not is_valid_length(barcode_type, data):
        return b""

    payload = encode_payload(barcode_type, data, code_page, errors)
    return ESCPOSCommands.barcode_header(int(barcode_type)) + payload + b"\x00"
