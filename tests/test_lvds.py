import numpy as np
import pytest

from common.errors import GeometryMismatch, InternalConsistency
from common.lvds import (
    ROW_SIZE, build_inverse_table, build_translation_table, find_lvds_cell_offset,
    format_lvds_map, is_permutation, lvds_cell_number, reorder_for_lvds, restore_raw_order,
)


@pytest.fixture(scope="module")
def table():
    return build_translation_table()


@pytest.fixture(scope="module")
def inverse(table):
    return build_inverse_table(table)


def test_table_is_a_permutation(table):
    assert table.shape == (ROW_SIZE,)
    assert sorted(table.tolist()) == list(range(ROW_SIZE))
    assert is_permutation(table)


def test_is_permutation_rejects_duplicates(table):
    broken = table.copy()
    broken[0] = broken[1]
    assert not is_permutation(broken)


def test_known_entries(table):
    # group 0, sub-row 0 runs right to left from cell 63
    assert table[63] == 0
    assert table[62] == 8
    assert table[0] == 504
    # group 1 starts one raw cell later
    assert table[256 + 63] == 1
    # sub-row 1 starts at raw cell 512
    assert table[127] == 512
    assert table[64] == 512 + 504
    assert table[ROW_SIZE - 1 - 63] == 3 * 512 + 7 + 63 * 8


def test_inverse_round_trip(table, inverse):
    offsets = np.arange(ROW_SIZE)
    assert np.array_equal(table[inverse], offsets)
    assert np.array_equal(inverse[table], offsets)
    for o in (0, 1, 63, 504, 2047):
        assert table[find_lvds_cell_offset(o, inverse)] == o


def test_find_lvds_cell_offset_out_of_range(inverse):
    with pytest.raises(InternalConsistency):
        find_lvds_cell_offset(ROW_SIZE, inverse)


def test_reorder_then_restore_multi_row(table, inverse):
    rng = np.random.default_rng(7)
    raw = rng.integers(0, 256, size=3 * ROW_SIZE, dtype=np.uint8)
    frame = raw.copy()
    reorder_for_lvds(frame, table)
    assert not np.array_equal(frame, raw)
    for row in range(3):
        seg = slice(row * ROW_SIZE, (row + 1) * ROW_SIZE)
        assert np.array_equal(frame[seg], raw[seg][table])
    restore_raw_order(frame, inverse)
    assert np.array_equal(frame, raw)


def test_rows_do_not_interact(table):
    frame = np.zeros(2 * ROW_SIZE, dtype=np.uint8)
    frame[ROW_SIZE:] = 9
    reorder_for_lvds(frame, table)
    assert np.all(frame[:ROW_SIZE] == 0)
    assert np.all(frame[ROW_SIZE:] == 9)


def test_reorder_needs_whole_rows(table):
    with pytest.raises(GeometryMismatch):
        reorder_for_lvds(np.zeros(100, dtype=np.uint8), table)


def test_lvds_cell_number(table, inverse):
    cell = 2 * ROW_SIZE + 5
    mapped = lvds_cell_number(cell, inverse)
    assert mapped // ROW_SIZE == 2
    assert table[mapped % ROW_SIZE] == 5


def test_format_lvds_map(table):
    lines = format_lvds_map(table).splitlines()
    assert len(lines) == 32
    first = lines[0].split(",")
    assert len(first) == 64
    assert first[0] == " 504"
    assert first[63] == "   0"
