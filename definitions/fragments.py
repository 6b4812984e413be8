# definitions/fragments.py
"""
Nucleic acid fragment definitions.

    # comment
    name, v1, v2, ..., vn

A later definition of the same name replaces the earlier one.
"""

from __future__ import annotations
import os
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, Mapping, Tuple

from common.errors import FileNotFound
from common.tokens import numbered_lines, parse_int, split_tokens


class FragmentTable:
    """Read-only name -> values mapping."""

    def __init__(self, fragments: Mapping[str, Iterable[int]]):
        self._fragments: Mapping[str, Tuple[int, ...]] = MappingProxyType(
            {name: tuple(values) for name, values in fragments.items()}
        )

    def __getitem__(self, name: str) -> Tuple[int, ...]:
        return self._fragments[name]

    def __contains__(self, name: object) -> bool:
        return name in self._fragments

    def __iter__(self) -> Iterator[str]:
        return iter(self._fragments)

    def __len__(self) -> int:
        return len(self._fragments)

    def as_dict(self) -> Dict[str, Tuple[int, ...]]:
        return dict(self._fragments)


def parse_fragments(lines: Iterable[str], strict: bool = False, source: str = "<fragments>") -> FragmentTable:
    table: Dict[str, Tuple[int, ...]] = {}
    for line_no, line in numbered_lines(lines):
        tokens = split_tokens(line)
        if not tokens or not tokens[0]:
            continue
        name = tokens[0]
        where = f"{source}:{line_no}"
        table[name] = tuple(parse_int(t, strict=strict, where=where) for t in tokens[1:])
    return FragmentTable(table)


def load_fragments(path: str, strict: bool = False) -> FragmentTable:
    if not os.path.isfile(path):
        raise FileNotFound(path)
    try:
        f = open(path, "r", encoding="utf-8", errors="replace", newline="")
    except OSError as e:
        raise FileNotFound(path) from e
    with f:
        return parse_fragments(f, strict=strict, source=path)
