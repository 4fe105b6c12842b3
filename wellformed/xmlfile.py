"""Feed XML files, or standard input, to an expat parser and report errors."""

from __future__ import annotations

import enum
import os
import sys
from typing import TextIO
from xml.parsers import expat

from .filemap import FileTooLargeError, map_file

READ_SIZE = 1024 * 8
"""Number of bytes read per chunk when streaming."""

_STDIN_NAME = "STDIN"
_WINDOWS = os.name == "nt"


class ProcessFlags(enum.IntFlag):
    """How a file is to be processed."""

    NONE = 0
    MAP_FILE = 1
    """Read the whole file at once instead of streaming it."""
    EXTERNAL_ENTITIES = 2
    """Load and parse external entities referenced by the document."""


def _is_absolute(system_id: str) -> bool:
    if system_id.startswith("/"):
        return True
    if _WINDOWS:
        if system_id.startswith("\\"):
            return True
        if len(system_id) >= 2 and system_id[0].isascii() and system_id[0].isalpha() \
                and system_id[1] == ":":
            return True
    return False


def resolve_system_id(base: str | None, system_id: str) -> str:
    """Resolve ``system_id`` relative to the directory part of ``base``.

    Absolute system identifiers, and any identifier when there is no base,
    are returned unchanged.
    """
    if not base or _is_absolute(system_id):
        return system_id
    cut = base.rfind("/") + 1
    if _WINDOWS:
        cut = max(cut, base.rfind("\\") + 1)
    return base[:cut] + system_id


def _perror(name: str, exc: OSError) -> None:
    """Print an OS error the way perror would."""
    if exc.strerror:
        sys.stderr.write(f"{name}: {exc.strerror}\n")
    else:
        sys.stderr.write(f"{exc}\n")


def report_error(parser, filename: str, out: TextIO | None = None) -> None:
    """Write ``filename:line:column: message`` for the parser's last error."""
    code = parser.ErrorCode
    message = expat.ErrorString(code)
    if message:
        stream = sys.stdout if out is None else out
        stream.write(
            f"{filename}:{parser.ErrorLineNumber}:"
            f"{parser.ErrorColumnNumber}: {message}\n"
        )
    else:
        sys.stderr.write(f"{filename}: (unknown message {code})\n")


def process_stream(parser, filename: str | None, out: TextIO | None = None) -> bool:
    """Parse ``filename`` (standard input when None) in chunks.

    Returns True when the document was parsed without error.
    """
    label = filename if filename is not None else _STDIN_NAME
    stream = None
    if filename is not None:
        try:
            stream = open(filename, "rb")
        except OSError as exc:
            _perror(filename, exc)
            return False
    source = stream if stream is not None else sys.stdin.buffer
    try:
        while True:
            try:
                chunk = source.read(READ_SIZE)
            except OSError as exc:
                _perror(label, exc)
                return False
            try:
                parser.Parse(chunk, not chunk)
            except expat.ExpatError:
                report_error(parser, label, out)
                return False
            if not chunk:
                return True
    finally:
        if stream is not None:
            stream.close()


def _process_mapped(parser, filename: str, out: TextIO | None) -> bool:
    try:
        data = map_file(filename)
    except FileTooLargeError:
        sys.stderr.write(
            f"{filename}: file too large for memory-mapping, "
            "switching to streaming\n"
        )
        return process_stream(parser, filename, out)
    except OSError as exc:
        _perror(filename, exc)
        return False
    try:
        parser.Parse(data, True)
    except expat.ExpatError:
        report_error(parser, filename, out)
        return False
    return True


def _entity_handler(parser, mapped: bool, out: TextIO | None):
    """Build an external entity handler that loads entities from files."""

    def handler(context, base, system_id, public_id):
        ent_parser = parser.ExternalEntityParserCreate(context)
        filename = resolve_system_id(base, system_id)
        ent_parser.SetBase(filename)
        ent_parser.ExternalEntityRefHandler = _entity_handler(ent_parser, mapped, out)
        if mapped:
            ok = _process_mapped(ent_parser, filename, out)
        else:
            ok = process_stream(ent_parser, filename, out)
        return 1 if ok else 0

    return handler


def process_file(
    parser,
    filename: str | None,
    flags: ProcessFlags = ProcessFlags.MAP_FILE,
    out: TextIO | None = None,
) -> bool:
    """Parse ``filename`` (standard input when None) according to ``flags``.

    Errors are reported to ``out`` (standard output by default); returns
    True when the document is well formed.
    """
    flags = ProcessFlags(flags)
    if filename is not None:
        parser.SetBase(filename)
    mapped = bool(flags & ProcessFlags.MAP_FILE) and filename is not None
    if flags & ProcessFlags.EXTERNAL_ENTITIES:
        parser.ExternalEntityRefHandler = _entity_handler(parser, mapped, out)
    if mapped:
        return _process_mapped(parser, filename, out)
    return process_stream(parser, filename, out)