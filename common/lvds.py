# common/lvds.py
"""
Intra-row cell reordering for LVDS transmission.

A row of cell data exists in "raw" order (the order we think of it logically) and in
"lvds" order (the order the ECD transmits it to the FPGA). For the translation table:

    lvds_order[i] = raw_order[table[i]]

Every row of a frame is reordered independently with the same table.
"""

from __future__ import annotations
import numpy as np

from common.errors import GeometryMismatch, InternalConsistency

ROW_SIZE = 2048
GROUPS_PER_ROW = 8
SUBROWS_PER_GROUP = 4
CELLS_PER_SUBROW = 64


def build_translation_table() -> np.ndarray:
    table = np.full(ROW_SIZE, -1, dtype=np.int64)
    i = np.arange(CELLS_PER_SUBROW, dtype=np.int64)
    for group in range(GROUPS_PER_ROW):
        group_offset = group * 256 + (CELLS_PER_SUBROW - 1)
        for row in range(SUBROWS_PER_GROUP):
            anchor = group_offset + row * CELLS_PER_SUBROW
            # the sub-row is filled right to left, 8 raw cells apart
            table[anchor - i] = row * 512 + group + i * 8
    if not is_permutation(table):
        raise InternalConsistency("LVDS translation table is not a permutation of the row")
    return table


def is_permutation(table: np.ndarray) -> bool:
    t = np.asarray(table)
    if t.shape != (ROW_SIZE,) or t.min() < 0 or t.max() >= ROW_SIZE:
        return False
    return bool(np.all(np.bincount(t, minlength=ROW_SIZE) == 1))


def build_inverse_table(table: np.ndarray) -> np.ndarray:
    """inverse[raw_offset] = position of that raw cell in an lvds-ordered row."""
    inv = np.empty_like(table)
    inv[table] = np.arange(table.size, dtype=table.dtype)
    return inv


def _rows(frame: np.ndarray) -> np.ndarray:
    if frame.size % ROW_SIZE != 0:
        raise GeometryMismatch(f"Frame of {frame.size} cells is not a multiple of {ROW_SIZE}")
    return frame.reshape(-1, ROW_SIZE)


def reorder_for_lvds(frame: np.ndarray, table: np.ndarray) -> np.ndarray:
    """Translate every row of 'frame' from raw order to lvds order, in place."""
    rows = _rows(frame)
    rows[:] = rows[:, table]
    return frame


def restore_raw_order(frame: np.ndarray, inverse: np.ndarray) -> np.ndarray:
    """Undo reorder_for_lvds(), in place."""
    rows = _rows(frame)
    rows[:] = rows[:, inverse]
    return frame


def find_lvds_cell_offset(raw_cell_offset: int, inverse: np.ndarray) -> int:
    if not 0 <= raw_cell_offset < inverse.size:
        raise InternalConsistency(f"BUG: find_lvds_cell_offset with invalid cell offset {raw_cell_offset}")
    return int(inverse[raw_cell_offset])


def lvds_cell_number(cell_number: int, inverse: np.ndarray) -> int:
    """Where a raw cell number of a frame ends up once the frame is lvds-ordered."""
    row, raw_offset = divmod(cell_number, ROW_SIZE)
    return row * ROW_SIZE + find_lvds_cell_offset(raw_offset, inverse)


def format_lvds_map(table: np.ndarray, per_line: int = 64) -> str:
    lines = []
    for start in range(0, table.size, per_line):
        chunk = table[start:start + per_line]
        lines.append(",".join(f"{int(v):4d}" for v in chunk))
    return "\n".join(lines)
