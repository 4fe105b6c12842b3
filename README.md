# wellformed

`wellformed` checks whether XML documents are well-formed, using the expat
parser that comes with Python. It can also write each document back out in
one of three forms:

- canonical form, with attributes sorted and special characters escaped
- markup form, a copy of the original markup
- meta form, an XML description of every parse event and where it happened

## Installation

```
pip install .
```

Install with `pip install .[test]` to run the test suite with `pytest`.

## Command line

```
wellformed [-s] [-n] [-p] [-x] [-e encoding] [-w] [-d output-dir] [-c] [-m] [-r] [-t] [-N] [file ...]
```

If no file is given, the document is read from standard input. Each parse
error is written to standard output as `filename:line:column: message`
(`STDIN` stands for standard input).

Single-letter options may be grouped (`-nx`); `-d` and `-e` take their value
from the rest of the argument or from the next argument.

| Option          | Effect                                                                         |
|-----------------|--------------------------------------------------------------------------------|
| `-s`            | Treat documents that are not standalone as errors                             |
| `-n`            | Process namespaces; qualified names are written with `n1:`, `n2:` … prefixes  |
| `-p`            | Parse parameter entities and the external DTD subset (implies `-x`)           |
| `-x`            | Process external entities, loaded from files relative to the referring file   |
| `-e encoding`   | Override the document's declared encoding                                     |
| `-w`            | Accepted and recorded; encodings such as `windows-1252` are decoded through Python's codecs in any case |
| `-d output-dir` | Write each document to `output-dir`, under its base file name (`STDIN` for standard input) |
| `-c`            | With `-d`, write a copy of the original markup (turns `-n` off)               |
| `-m`            | With `-d`, write a meta description of the parse events                       |
| `-r`            | Read files in 8 KiB chunks instead of loading them whole                      |
| `-t`            | Parse for timing only; no output is written                                   |
| `-N`            | With `-d` and canonical output, write notation declarations in a `DOCTYPE`    |
| `-h`            | Show usage on standard error and exit                                         |
| `-v`            | Show the program name, the expat version and its features, and exit           |
| `--`            | End of options                                                                |

Without `-c` or `-m`, the output written with `-d` is canonical form, encoded
as UTF-8. When a document fails to parse while an output directory is in use,
its output file is removed and the program stops with exit status 2. Without
`-d`, errors are reported but the exit status stays 0. A bad command line
prints the usage and exits with status 2.

Example:

```
wellformed -d out -N doc.xml
```

## Library

The pieces behind the command can be used directly:

- `wellformed.mime.get_xml_charset(content_type)` returns the charset to use
  for an XML document served with the given `Content-Type` value
  (`us-ascii` for `text/*` without a charset), or an empty string when the
  default applies.
- `wellformed.codepage.codepage_map(cp)` returns a 256-entry byte table for a
  Windows code page (character code, `LEAD_BYTE` or `INVALID` per byte), or
  `None` when Python has no suitable codec; `codepage_convert(cp, data)`
  decodes a two-byte sequence to a character code.
- `wellformed.filemap.map_file(name)` reads a regular file whole, raising
  `OSError` for files that cannot be read or are not regular files, and
  `FileTooLargeError` when it is too large to be parsed in one go.
- `wellformed.xmlfile.process_file(parser, filename, flags, out)` parses a
  file (standard input when `filename` is `None`) with a prepared
  `xml.parsers.expat` parser, where `flags` combines `ProcessFlags.MAP_FILE`
  and `ProcessFlags.EXTERNAL_ENTITIES`; it returns `True` for a well-formed
  document. `process_stream` reads in chunks instead, `report_error` writes
  the parser's last error, and `resolve_system_id(base, system_id)` resolves
  external entity paths.
- `wellformed.output` holds the writers `CanonicalWriter`, `MarkupWriter`
  and `MetaWriter`, each attached to a parser with `attach(parser)`
  (`MetaWriter` also has `start_document()` and `end_document()`), and the
  helpers `escape_character_data` and `escape_attribute_value`.
- `wellformed.cli.parse_args(argv)` turns a command line into `Options`,
  raising `UsageError` on a bad one; `show_version(prog, out)` prints the
  version line; `main(argv)` runs the whole command and returns its exit
  status.

## What it does not do

- Documents and external entities are read from local files and standard
  input only; nothing is fetched over the network.
- Output written with `-d` is always UTF-8.
- `-w` does not add any code page handling of its own; which `windows-NNNN`
  encodings a document may declare depends on the codecs Python provides.