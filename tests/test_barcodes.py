"""Tests for firmware barcode frames."""

import pytest

from thermalprinter.barcodes import (
    BARCODE_RULES,
    BarcodeType,
    build_barcode,
    encode_payload,
    is_valid_length,
    parse_barcode_type,
)
from thermalprinter.codepages import get_code_page

CP1251 = get_code_page("windows-1251")


class TestBarcodeType:
    """Test symbology type bytes."""

    def test_type_bytes(self):
        assert [int(t) for t in BarcodeType] == list(range(11))

    def test_every_type_has_a_rule(self):
        assert set(BARCODE_RULES) == set(BarcodeType)

    @pytest.mark.parametrize("name,expected", [
        ("ean13", BarcodeType.EAN13),
        ("upc-a", BarcodeType.UPC_A),
        ("upca", BarcodeType.UPC_A),
        ("UPC_E", BarcodeType.UPC_E),
        ("code128", BarcodeType.CODE128),
    ])
    def test_parse(self, name, expected):
        assert parse_barcode_type(name) == expected

    def test_parse_invalid(self):
        with pytest.raises(ValueError, match="Invalid barcode type"):
            parse_barcode_type("pdf417")


class TestLengthRules:
    """Test payload length validation per symbology."""

    @pytest.mark.parametrize("barcode_type,length,valid", [
        (BarcodeType.UPC_A, 11, True),
        (BarcodeType.UPC_A, 12, True),
        (BarcodeType.UPC_A, 13, False),
        (BarcodeType.UPC_E, 10, False),
        (BarcodeType.UPC_E, 12, True),
        (BarcodeType.EAN13, 12, True),
        (BarcodeType.EAN13, 13, True),
        (BarcodeType.EAN13, 5, False),
        (BarcodeType.EAN8, 7, True),
        (BarcodeType.EAN8, 8, True),
        (BarcodeType.EAN8, 9, False),
        (BarcodeType.CODE39, 1, False),
        (BarcodeType.CODE39, 2, True),
        (BarcodeType.CODEBAR, 1, False),
        (BarcodeType.CODE93, 2, True),
        (BarcodeType.CODE128, 1, False),
        (BarcodeType.CODE11, 3, True),
        (BarcodeType.MSI, 0, False),
    ])
    def test_length(self, barcode_type, length, valid):
        assert is_valid_length(barcode_type, "1" * length) is valid

    @pytest.mark.parametrize("length,valid", [
        (0, True),   # even length
        (1, False),
        (2, True),
        (3, True),   # odd lengths above 1 are accepted
    ])
    def test_i25_rule(self, length, valid):
        assert is_valid_length(BarcodeType.I25, "1" * length) is valid


class TestPayloadEncoding:
    """Test case folding and code page conversion."""

    def test_code39_upper_cased(self):
        assert encode_payload(BarcodeType.CODE39, "abc-1", CP1251) == b"ABC-1"

    def test_code128_unchanged(self):
        assert encode_payload(BarcodeType.CODE128, "abc-1", CP1251) == b"abc-1"

    def test_code93_unchanged(self):
        assert encode_payload(BarcodeType.CODE93, "MiXeD", CP1251) == b"MiXeD"

    def test_code_page_conversion(self):
        assert encode_payload(BarcodeType.CODE39, "ж", CP1251) == bytes([0xC6])

    def test_code128_non_ascii_is_utf8(self):
        payload = encode_payload(BarcodeType.CODE128, "café№", CP1251)
        assert payload == b"caf\xc3\xa9\xe2\x84\x96"

    def test_folding_can_lengthen_payload(self):
        assert encode_payload(BarcodeType.CODE39, "ßa", CP1251) == b"SSA"


class TestBuildBarcode:
    """Test complete barcode frames."""

    def test_ean13_frame(self):
        frame = build_barcode(BarcodeType.EAN13, "3350030103392", CP1251)
        assert frame[:3] == bytes([29, 107, 2])
        assert frame[3:-1] == b"3350030103392"
        assert frame[-1] == 0
        assert len(frame) == 3 + 13 + 1

    def test_ean13_too_short_is_empty(self):
        assert build_barcode(BarcodeType.EAN13, "12345", CP1251) == b""

    def test_length_checked_after_folding(self):
        # "ß" upper-cases to "SS", making 9 characters for EAN-8
        assert is_valid_length(BarcodeType.EAN8, "ß1234567") is False
        assert build_barcode(BarcodeType.EAN8, "ß1234567", CP1251) == b""

    def test_length_not_folded_for_code128(self):
        assert is_valid_length(BarcodeType.CODE128, "ß") is False

    def test_code128_non_ascii_frame(self):
        frame = build_barcode(BarcodeType.CODE128, "Привет", CP1251)
        assert frame == bytes([29, 107, 8]) + "Привет".encode("utf-8") + b"\x00"
        assert len(frame) == 3 + 12 + 1

    def test_msi_type_byte(self):
        frame = build_barcode(BarcodeType.MSI, "1234", CP1251)
        assert frame == bytes([29, 107, 10]) + b"1234" + b"\x00"
