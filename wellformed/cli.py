"""Command-line checker for XML well-formedness with optional output formats."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from typing import TextIO
from xml.parsers import expat

from .output import NAMESPACE_SEPARATOR, CanonicalWriter, MarkupWriter, MetaWriter
from .xmlfile import ProcessFlags, process_file

_DEFAULT_PROG = "wellformed"
_STDIN_NAME = "STDIN"
_WINDOWS = os.name == "nt"
_OUTPUT_BUFFER = 16384

_USAGE = (
    "usage: {prog} [-s] [-n] [-p] [-x] [-e encoding] [-w] [-d output-dir]"
    " [-c] [-m] [-r] [-t] [-N] [file ...]\n"
)


class UsageError(Exception):
    """Raised when the command line cannot be understood."""


@dataclass
class Options:
    """Settings taken from the command line.

    ``output_type`` is ``""`` for canonical output, ``"m"`` for a
    description of parse events, ``"c"`` for a copy of the markup and
    ``"t"`` for timing runs that produce no output. ``windows_code_pages``
    records the ``-w`` switch; single-byte code pages named in documents
    are decoded through the codec machinery.
    """

    output_dir: str | None = None
    encoding: str | None = None
    flags: ProcessFlags = ProcessFlags.MAP_FILE
    windows_code_pages: bool = False
    output_type: str = ""
    use_namespaces: bool = False
    require_standalone: bool = False
    require_notations: bool = False
    param_entity_parsing: bool = False
    files: list[str] = field(default_factory=list)
    use_stdin: bool = False
    help_requested: bool = False
    version_requested: bool = False


def _without(flags: ProcessFlags, flag: ProcessFlags) -> ProcessFlags:
    return ProcessFlags(int(flags) & ~int(flag))


def parse_args(argv) -> Options:
    """Parse the arguments that follow the program name.

    Single-letter switches may be grouped; ``-d`` and ``-e`` take their
    value from the rest of the argument or from the next one. ``--`` ends
    the switches. Raises UsageError for anything not understood.
    """
    opts = Options()
    args = list(argv)
    i = 0
    while i < len(args):
        arg = args[i]
        if not arg.startswith("-"):
            break
        if arg == "--":
            i += 1
            break
        if arg == "-":
            raise UsageError("missing option letter")
        i += 1
        j = 1
        while j < len(arg):
            letter = arg[j]
            j += 1
            if letter == "r":
                opts.flags = _without(opts.flags, ProcessFlags.MAP_FILE)
            elif letter == "s":
                opts.require_standalone = True
            elif letter == "n":
                opts.use_namespaces = True
            elif letter in "px":
                if letter == "p":
                    opts.param_entity_parsing = True
                opts.flags |= ProcessFlags.EXTERNAL_ENTITIES
            elif letter == "w":
                opts.windows_code_pages = True
            elif letter == "m":
                opts.output_type = "m"
            elif letter == "c":
                opts.output_type = "c"
                opts.use_namespaces = False
            elif letter == "t":
                opts.output_type = "t"
            elif letter == "N":
                opts.require_notations = True
            elif letter in "de":
                value = arg[j:]
                if not value:
                    if i == len(args):
                        raise UsageError(f"option -{letter} requires an argument")
                    value = args[i]
                    i += 1
                if letter == "d":
                    opts.output_dir = value
                else:
                    opts.encoding = value
                break
            elif letter == "h":
                opts.help_requested = True
                return opts
            elif letter == "v":
                opts.version_requested = True
                return opts
            else:
                raise UsageError(f"unknown option -{letter}")
    opts.files = args[i:]
    if not opts.files:
        opts.use_stdin = True
        opts.flags = _without(opts.flags, ProcessFlags.MAP_FILE)
    return opts


def _basename(path: str) -> str:
    cut = path.rfind("/") + 1
    if _WINDOWS:
        cut = max(cut, path.rfind("\\") + 1)
    return path[cut:]


def show_version(prog: str, out: TextIO | None = None) -> None:
    """Write the program name, the expat version and its compile features."""
    stream = sys.stdout if out is None else out
    stream.write(f"{_basename(prog)} using {expat.EXPAT_VERSION}\n")
    features = getattr(expat, "features", None)
    if features:
        stream.write(
            ", ".join(f"{name}={value}" if value else name for name, value in features)
            + "\n"
        )


def _usage(prog: str) -> None:
    sys.stderr.write(_USAGE.format(prog=prog))


def _output_path(output_dir: str, target: str | None) -> str:
    if target is None:
        return output_dir + "/" + _STDIN_NAME
    delim = "/"
    cut = target.rfind("/")
    if cut < 0 and _WINDOWS:
        cut = target.rfind("\\")
        if cut >= 0:
            delim = "\\"
    return output_dir + delim + target[cut + 1:]


def _not_standalone() -> int:
    return 0


def _nop(*_args) -> None:
    return None


def _create_parser(opts: Options):
    separator = NAMESPACE_SEPARATOR if opts.use_namespaces else None
    parser = expat.ParserCreate(opts.encoding, separator)
    if opts.require_standalone:
        parser.NotStandaloneHandler = _not_standalone
    parser.SetParamEntityParsing(
        expat.XML_PARAM_ENTITY_PARSING_ALWAYS
        if opts.param_entity_parsing
        else expat.XML_PARAM_ENTITY_PARSING_NEVER
    )
    return parser


def _process_target(opts: Options, target: str | None, output_dir: str | None) -> int:
    """Parse one input; return 0, or the exit status to stop with."""
    try:
        parser = _create_parser(opts)
    except (ValueError, TypeError) as exc:
        sys.stderr.write(f"Could not instantiate parser: {exc}\n")
        return 1

    if opts.output_type == "t":
        parser.StartElementHandler = _nop
        parser.EndElementHandler = _nop
        parser.CharacterDataHandler = _nop
        parser.ProcessingInstructionHandler = _nop
        return 0 if process_file(parser, target, opts.flags) or True else 0

    if not output_dir:
        process_file(parser, target, opts.flags)
        return 0

    out_name = _output_path(output_dir, target)
    try:
        out = open(
            out_name, "w", encoding="utf-8", newline="", buffering=_OUTPUT_BUFFER
        )
    except OSError as exc:
        sys.stderr.write(f"{out_name}: {exc.strerror or exc}\n")
        return 1

    meta = None
    with out:
        if opts.output_type == "m":
            meta = MetaWriter(out)
            meta.attach(parser)
            meta.start_document()
        elif opts.output_type == "c":
            MarkupWriter(out).attach(parser)
        else:
            CanonicalWriter(
                out,
                namespaces=opts.use_namespaces,
                notations=opts.require_notations,
            ).attach(parser)
        result = process_file(parser, target, opts.flags)
        if meta is not None:
            meta.end_document()
    if not result:
        os.remove(out_name)
        return 2
    return 0


def main(argv=None) -> int:
    """Check each named file (standard input when none) and write any output."""
    if argv is None:
        argv = sys.argv[1:]
        prog = sys.argv[0] if sys.argv and sys.argv[0] else _DEFAULT_PROG
    else:
        prog = _DEFAULT_PROG
    try:
        opts = parse_args(argv)
    except UsageError:
        _usage(prog)
        return 2
    if opts.help_requested:
        _usage(prog)
        return 0
    if opts.version_requested:
        show_version(prog)
        return 0

    output_dir = None if opts.output_type == "t" else opts.output_dir
    targets: list[str | None] = [None] if opts.use_stdin else list(opts.files)
    for target in targets:
        status = _process_target(opts, target, output_dir)
        if status:
            return status
    return 0