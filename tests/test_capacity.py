import pytest

from common.errors import CapacityExceeded, GeometryMismatch
from definitions.distribution import DistributionRecord
from frames.capacity import compute_capacity, find_longest_sequence, verify_distribution_is_valid


def _rec(n):
    return DistributionRecord(1, 1, 1, bytes(range(n)))


def test_longest_sequence():
    assert find_longest_sequence(()) == 0
    assert find_longest_sequence((_rec(3), _rec(7), _rec(2))) == 7


def test_empty_distribution_still_needs_one_group(make_config):
    report = compute_capacity(make_config(), ())
    assert report.frame_group_count == 1
    assert report.frame_group_length == 4
    assert report.total_frames == 4
    assert report.total_bytes == 32


def test_group_count_rounds_down_then_adds_one(make_config):
    cfg = make_config(data_frames=3)
    assert compute_capacity(cfg, (_rec(2),)).frame_group_count == 1
    assert compute_capacity(cfg, (_rec(3),)).frame_group_count == 2
    assert compute_capacity(cfg, (_rec(7),)).frame_group_count == 3


def test_fits(make_config, capsys):
    cfg = make_config(contig_size=32)
    report = verify_distribution_is_valid(cfg, (_rec(2),), lvds=False)
    assert report.max_frames == 4
    assert report.fits
    out = capsys.readouterr().out
    assert "Frame group(s) required" in out
    assert "Bytes required in total" in out


def test_capacity_exceeded(make_config, tmp_path):
    cfg = make_config(contig_size=31)
    with pytest.raises(CapacityExceeded) as exc:
        verify_distribution_is_valid(cfg, (_rec(2),), lvds=False, verbose=False)
    assert exc.value.report.total_frames == 4
    assert exc.value.report.max_frames == 3
    assert not (tmp_path / "out.bin").exists()


def test_geometry_checked_only_with_lvds(make_config):
    cfg = make_config(cells_per_frame=1000, contig_size=10 ** 6)
    with pytest.raises(GeometryMismatch):
        verify_distribution_is_valid(cfg, (), lvds=True, verbose=False)
    verify_distribution_is_valid(cfg, (), lvds=False, verbose=False)
    ok = make_config(cells_per_frame=4096, contig_size=10 ** 6)
    verify_distribution_is_valid(ok, (), lvds=True, verbose=False)


def test_report_uses_thousands_separators(make_config, capsys):
    cfg = make_config(cells_per_frame=2048, contig_size=2048 * 5000, data_frames=1000)
    verify_distribution_is_valid(cfg, (_rec(1),), lvds=True)
    out = capsys.readouterr().out
    assert "           5,000 Frames will fit into the contig buffer" in out
