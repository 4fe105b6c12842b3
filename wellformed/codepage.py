"""Byte tables for Windows code pages, built from Python's codecs."""

from __future__ import annotations

import codecs
from functools import lru_cache

LEAD_BYTE = -2
"""Table entry for a byte that starts a two-byte sequence."""

INVALID = -1
"""Table entry for a byte that is not valid on its own."""

# Codecs whose characters can take more than two bytes.
_WIDE_CODECS = frozenset(
    {"utf-8", "utf-8-sig", "utf-7", "utf-16", "utf-16-le", "utf-16-be",
     "utf-32", "utf-32-le", "utf-32-be", "gb18030"}
)


def _lookup(cp: int) -> codecs.CodecInfo | None:
    try:
        info = codecs.lookup(f"cp{cp}")
    except LookupError:
        return None
    if info.name in _WIDE_CODECS:
        return None
    return info


def _single_char(info: codecs.CodecInfo, data: bytes) -> int | None:
    """Decode ``data`` to exactly one UTF-16 code unit, or None."""
    try:
        text, _ = info.decode(data, "strict")
    except (UnicodeDecodeError, ValueError):
        return None
    if len(text) != 1 or ord(text) > 0xFFFF:
        return None
    return ord(text)


def _is_lead_byte(info: codecs.CodecInfo, byte: int) -> bool:
    return any(
        _single_char(info, bytes((byte, trail))) is not None
        for trail in range(0x40, 0xFF)
    )


@lru_cache(maxsize=None)
def codepage_map(cp: int) -> tuple[int, ...] | None:
    """Return a 256-entry table for code page ``cp``, or None if unsupported.

    Each entry is the character a single byte stands for, ``LEAD_BYTE`` for
    the first byte of a two-byte character, or ``INVALID``.
    """
    info = _lookup(cp)
    if info is None:
        return None
    table = []
    for byte in range(256):
        char = _single_char(info, bytes((byte,)))
        if char is not None:
            table.append(char)
        elif _is_lead_byte(info, byte):
            table.append(LEAD_BYTE)
        else:
            table.append(INVALID)
    return tuple(table)


def codepage_convert(cp: int, data: bytes) -> int | None:
    """Convert a two-byte sequence in code page ``cp`` to a character code.

    Returns None when the code page is unsupported or the bytes do not form
    a single character.
    """
    info = _lookup(cp)
    if info is None or len(data) < 2:
        return None
    return _single_char(info, bytes(data[:2]))