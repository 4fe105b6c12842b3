"""Extract the character set from the body of a Content-Type header."""

from __future__ import annotations

CHARSET_MAX = 41
"""Registered charset names are at most ``CHARSET_MAX - 1`` characters long."""

_IN_ATOM = 0
_IN_STRING = 1
_INIT = 2
# Values above _INIT count nesting levels of parenthesised comments.

_WHITESPACE = frozenset(" \r\t\n")
_SEPARATORS = frozenset(";/=")


def _next_token(text: str, pos: int) -> tuple[int | None, int]:
    """Scan one token starting at ``pos``.

    Returns the start index of the token (or None when there is none) and
    the index just past it. Comments in parentheses are skipped, quoted
    strings are returned including their quotes, and the separators
    ``;``, ``/`` and ``=`` are single-character tokens.
    """
    state = _INIT
    start: int | None = None
    end = len(text)
    while True:
        if pos >= end:
            return (start if state == _IN_ATOM else None), pos
        ch = text[pos]
        if ch in _WHITESPACE:
            if state == _IN_ATOM:
                return start, pos
        elif ch == "(":
            if state == _IN_ATOM:
                return start, pos
            if state != _IN_STRING:
                state += 1
        elif ch == ")":
            if state > _INIT:
                state -= 1
            elif state != _IN_STRING:
                return None, pos
        elif ch in _SEPARATORS:
            if state == _IN_ATOM:
                return start, pos
            if state == _INIT:
                return pos, pos + 1
        elif ch == "\\":
            pos += 1
            if pos >= end:
                return None, pos
        elif ch == '"':
            if state == _IN_STRING:
                return start, pos + 1
            if state == _IN_ATOM:
                return start, pos
            if state == _INIT:
                start = pos
                state = _IN_STRING
        elif state == _INIT:
            start = pos
            state = _IN_ATOM
        pos += 1


def _matches(text: str, start: int | None, end: int, key: str) -> bool:
    """Compare a token with a lower-case ASCII key, ignoring case."""
    if start is None:
        return False
    token = text[start:end]
    return len(token) == len(key) and all(
        c == k or c == k.upper() for c, k in zip(token, key)
    )


def _unquote(text: str, start: int, end: int) -> str:
    """Return the contents of a quoted-string token, or "" if too long."""
    chars: list[str] = []
    pos = start + 1
    closing = end - 1
    while pos != closing:
        if text[pos] == "\\":
            pos += 1
        if len(chars) == CHARSET_MAX - 1:
            return ""
        chars.append(text[pos])
        pos += 1
    return "".join(chars)


def get_xml_charset(content_type: str) -> str:
    """Work out the charset to use from a Content-Type header body.

    ``content_type`` is the part after ``Content-Type:``. An empty result
    means the default charset should be used. ``text/*`` types default to
    ``us-ascii``.
    """
    charset = ""
    text = content_type
    p, nxt = _next_token(text, 0)
    if _matches(text, p, nxt, "text"):
        charset = "us-ascii"
    elif not _matches(text, p, nxt, "application"):
        return charset
    p, nxt = _next_token(text, nxt)
    if p is None or text[p] != "/":
        return charset
    p, nxt = _next_token(text, nxt)  # subtype, not inspected
    p, nxt = _next_token(text, nxt)
    while p is not None:
        if text[p] != ";":
            p, nxt = _next_token(text, nxt)
            continue
        p, nxt = _next_token(text, nxt)
        if not _matches(text, p, nxt, "charset"):
            continue
        p, nxt = _next_token(text, nxt)
        if p is not None and text[p] == "=":
            p, nxt = _next_token(text, nxt)
            if p is not None:
                if text[p] == '"':
                    charset = _unquote(text, p, nxt)
                elif nxt - p <= CHARSET_MAX - 1:
                    charset = text[p:nxt]
        break
    return charset