# definitions/distribution.py
"""
Fragment sequence distribution definitions.

    first, last, step $ frag_a, frag_b, ...

Cells are 1-based. last == 0 means "first cell only", step == 0 means every cell.
Lines without '$' are not distribution definitions and are ignored.
The values of the listed fragments are concatenated in order; value N is written to
the record's cells in data frame N.
"""

from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

from common.errors import FileNotFound, InvalidCellNumber, UndefinedFragment
from common.tokens import numbered_lines, parse_int, split_tokens
from definitions.fragments import FragmentTable

DELIMITER = "$"


@dataclass(frozen=True)
class DistributionRecord:
    first: int
    last: int
    step: int
    values: bytes

    @property
    def cells(self) -> slice:
        """0-based cells touched by this record."""
        return slice(self.first - 1, self.last, self.step)

    def __len__(self) -> int:
        return len(self.values)


# records in file order; later records win where cells overlap
DistributionList = Tuple[DistributionRecord, ...]


def _header_ints(header: str, strict: bool, where: str) -> Tuple[int, int, int]:
    tokens = split_tokens(header)
    nums = [parse_int(t, strict=strict, where=where) for t in tokens[:3]]
    nums += [0] * (3 - len(nums))
    return nums[0], nums[1], nums[2]


def _names(tail: str) -> List[str]:
    tail = tail.lstrip(" \t")
    if tail.startswith(","):
        tail = tail[1:]
    return split_tokens(tail)


def make_record(first: int, last: int, step: int, names: Sequence[str],
                fragments: FragmentTable, cells_per_frame: int) -> DistributionRecord:
    if first < 1 or first > cells_per_frame:
        raise InvalidCellNumber(f"Invalid cell number {first}")
    if last == 0:
        last = first
    if step == 0:
        step = 1
    if last < 0 or last > cells_per_frame:
        raise InvalidCellNumber(f"Invalid last cell number {last} (frame has {cells_per_frame} cells)")
    if step < 0:
        raise InvalidCellNumber(f"Invalid step size {step}")

    values = bytearray()
    for name in names:
        if name not in fragments:
            raise UndefinedFragment(name)
        values.extend(v & 0xFF for v in fragments[name])
    return DistributionRecord(first, last, step, bytes(values))


def parse_distribution(lines: Iterable[str], fragments: FragmentTable, cells_per_frame: int,
                       strict: bool = False, source: str = "<distribution>") -> DistributionList:
    records: List[DistributionRecord] = []
    for line_no, line in numbered_lines(lines):
        header, sep, tail = line.partition(DELIMITER)
        if not sep:
            continue
        first, last, step = _header_ints(header, strict, f"{source}:{line_no}")
        records.append(make_record(first, last, step, _names(tail), fragments, cells_per_frame))
    return tuple(records)


def load_distribution(path: str, fragments: FragmentTable, cells_per_frame: int,
                      strict: bool = False) -> DistributionList:
    if not os.path.isfile(path):
        raise FileNotFound(path)
    try:
        f = open(path, "r", encoding="utf-8", errors="replace", newline="")
    except OSError as e:
        raise FileNotFound(path) from e
    with f:
        return parse_distribution(f, fragments, cells_per_frame, strict=strict, source=path)


def dump_distribution(distribution: DistributionList) -> None:
    for r in distribution:
        vals = "".join(f"{v}  " for v in r.values)
        print(f"{r.first} : {r.last} : {r.step}  *** {vals}")
