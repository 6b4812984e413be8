# common/tokens.py
"""
Lexing helpers shared by the fragment and distribution loaders.

A token ends at a blank, a comma or the end of the line. One comma after a token
(and the blanks around it) is consumed, so "a,,b" yields "a", "", "b".
"""

from __future__ import annotations
import re
from typing import Iterator, List, Optional, Tuple

from common.errors import MalformedInteger

_BLANKS = " \t"
_STOP = " \t\r\n,"
_ATOI_RE = re.compile(r"[ \t\n\v\f\r]*([+-]?\d+)")
_INT_RE = re.compile(r"[+-]?\d+")


def is_skippable(line: str) -> bool:
    """Blank lines and comments ('#' or '//' after leading blanks)."""
    s = line.lstrip(_BLANKS)
    if not s or s[0] in "\r\n":
        return True
    return s.startswith("#") or s.startswith("//")


def split_tokens(text: str) -> List[str]:
    tokens: List[str] = []
    n = len(text)
    p = 0
    while True:
        while p < n and text[p] in _BLANKS:
            p += 1
        if p >= n or text[p] in "\r\n":
            return tokens
        start = p
        while p < n and text[p] not in _STOP:
            p += 1
        tokens.append(text[start:p])
        while p < n and text[p] in _BLANKS:
            p += 1
        if p < n and text[p] == ",":
            p += 1


def atoi(token: str) -> Tuple[int, bool]:
    """
    C-style integer parse: leading integer prefix, 0 when there is none.
    Returns (value, clean) where clean is False if the token was not a plain integer.
    """
    m = _ATOI_RE.match(token)
    value = int(m.group(1)) if m else 0
    clean = bool(token == "" or _INT_RE.fullmatch(token))
    return value, clean


def parse_int(token: str, strict: bool = False, where: Optional[str] = None) -> int:
    value, clean = atoi(token)
    if not clean:
        msg = f"'{token}' is not an integer" + (f" ({where})" if where else "")
        if strict:
            raise MalformedInteger(msg)
        print(f"[WARN] {msg}, using {value}")
    return value


def numbered_lines(f) -> Iterator[Tuple[int, str]]:
    """Yield (line_no, line) for lines that are neither blank nor comments."""
    for line_no, line in enumerate(f, start=1):
        line = line.rstrip("\r\n")
        if is_skippable(line):
            continue
        yield line_no, line
