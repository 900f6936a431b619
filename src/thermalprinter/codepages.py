"""
Printer code pages.

Text is sent to the printer as 8-bit bytes in the code page selected with
ESC t n. Each CodePage pairs the firmware's name for a table with the
Python codec that produces matching bytes.
"""

import codecs
from dataclasses import dataclass


@dataclass(frozen=True)
class CodePage:
    """A code page known to the printer firmware.

    Attributes:
        name: Firmware/.NET style name (e.g. "IBM437", "windows-1251")
        codec: Python codec name used to encode text
        selector: Value n of the ESC t n select command
    """
    name: str
    codec: str
    selector: int

    def encode(self, text: str, errors: str = "replace") -> bytes:
        """
        Encode text into this code page.

        Args:
            text: Text to encode
            errors: "replace" substitutes '?' for unmappable characters,
                "strict" raises UnicodeEncodeError

        Returns:
            Encoded bytes, one per character
        """
        return text.encode(self.codec, errors=errors)

    def decode(self, data: bytes) -> str:
        """Decode bytes received in this code page."""
        return data.decode(self.codec, errors="replace")


CODE_PAGES = {
    "IBM437": CodePage("IBM437", "cp437", 0),
    "ibm850": CodePage("ibm850", "cp850", 1),
    "windows-1251": CodePage("windows-1251", "cp1251", 15),
}

DEFAULT_CODE_PAGE = "windows-1251"

ENCODING_ERROR_POLICIES = ("replace", "strict")


def get_code_page(name: str) -> CodePage:
    """
    Look up a code page by name.

    Lookup ignores case, so "ibm437" and "IBM437" are the same page.

    Raises:
        ValueError: If the printer has no such code page
    """
    for key, page in CODE_PAGES.items():
        if key.lower() == name.lower():
            return page
    raise ValueError(
        f"Unsupported code page: {name}. Supported: {list(CODE_PAGES.keys())}"
    )


def check_errors_policy(errors: str) -> str:
    """Validate an encoding error policy name."""
    if errors not in ENCODING_ERROR_POLICIES:
        raise ValueError(
            f"Invalid encoding error policy: {errors}. "
            f"Supported: {list(ENCODING_ERROR_POLICIES)}"
        )
    # Fail early if the codec machinery does not know the handler
    codecs.lookup_error(errors)
    return errors
