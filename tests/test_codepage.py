import pytest

from wellformed.codepage import (
    INVALID,
    LEAD_BYTE,
    codepage_convert,
    codepage_map,
)


def test_single_byte_table_shape():
    table = codepage_map(1252)
    assert table is not None
    assert len(table) == 256


def test_ascii_range_maps_to_itself():
    table = codepage_map(1252)
    assert all(table[b] == b for b in range(0x80))


def test_single_byte_page_has_no_lead_bytes():
    table = codepage_map(1252)
    assert LEAD_BYTE not in table


def test_euro_sign_in_1252():
    assert codepage_map(1252)[0x80] == ord("\u20ac")


def test_undefined_byte_in_1252_is_invalid():
    assert codepage_map(1252)[0x81] == INVALID


def test_double_byte_page_has_lead_bytes():
    table = codepage_map(932)
    assert table[0x81] == LEAD_BYTE
    assert table[0x41] == 0x41


def test_table_values_are_in_range():
    for cp in (437, 1252, 932):
        table = codepage_map(cp)
        assert all(v in (LEAD_BYTE, INVALID) or 0 <= v <= 0xFFFF for v in table)


@pytest.mark.parametrize("cp", [1, 99999, 65001])
def test_unsupported_pages(cp):
    assert codepage_map(cp) is None


def test_convert_round_trip():
    encoded = "\u3042".encode("cp932")
    assert codepage_convert(932, encoded) == ord("\u3042")


def test_convert_lead_bytes_agree_with_map():
    table = codepage_map(932)
    encoded = "\u6f22".encode("cp932")
    assert table[encoded[0]] == LEAD_BYTE
    assert codepage_convert(932, encoded) == ord("\u6f22")


def test_convert_invalid_sequence():
    assert codepage_convert(1252, b"\x81\x81") is None


def test_convert_unsupported_page():
    assert codepage_convert(1, b"\x41\x41") is None


def test_convert_too_short():
    assert codepage_convert(932, b"\x82") is None