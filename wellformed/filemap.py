"""Read a whole file into memory so it can be parsed in one go."""

from __future__ import annotations

import os
import stat

XML_MAX_CHUNK_LEN = (2**31 - 1) // 2 + 1
"""Largest input, in bytes, that can be handed to the parser in one piece."""


class FileTooLargeError(Exception):
    """Raised when a file is too large to be parsed in one piece.

    Callers are expected to fall back to reading the file as a stream.
    """

    def __init__(self, name: str, size: int) -> None:
        super().__init__(
            f"{name}: file too large for memory-mapping ({size} bytes)"
        )
        self.name = name
        self.size = size


def map_file(name: str | os.PathLike[str]) -> bytes:
    """Return the entire contents of the regular file ``name``.

    Raises OSError when the file cannot be opened or read, or is not a
    regular file, and FileTooLargeError when it holds more than
    ``XML_MAX_CHUNK_LEN`` bytes.
    """
    path = os.fspath(name)
    with open(path, "rb", buffering=0) as handle:
        info = os.fstat(handle.fileno())
        if not stat.S_ISREG(info.st_mode):
            raise OSError(f"{path}: not a regular file")
        size = info.st_size
        if size > XML_MAX_CHUNK_LEN:
            raise FileTooLargeError(path, size)
        if size == 0:
            return b""
        data = handle.read(size)
    if data is None or len(data) != size:
        raise OSError(f"{path}: read unexpected number of bytes")
    return data