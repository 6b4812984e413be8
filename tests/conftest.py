import json
import pytest

from common.config import PrepConfig


@pytest.fixture
def write_text(tmp_path):
    def _write(name, text):
        p = tmp_path / name
        p.write_text(text, encoding="utf-8")
        return str(p)
    return _write


@pytest.fixture
def make_config(tmp_path):
    def _make(**overrides):
        values = dict(
            cells_per_frame=8,
            contig_size=1 << 20,
            data_frames=3,
            fragment_file=str(tmp_path / "fragments.txt"),
            distribution_file=str(tmp_path / "distribution.txt"),
            output_file=str(tmp_path / "out.bin"),
            diagnostic_values=(255,),
            quiescent=0,
        )
        values.update(overrides)
        return PrepConfig(**values)
    return _make


@pytest.fixture
def config_file(tmp_path):
    def _write(**raw):
        p = tmp_path / "ecd_sample_prep.json"
        p.write_text(json.dumps(raw), encoding="utf-8")
        return str(p)
    return _write
