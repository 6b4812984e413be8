# common/config.py
"""
Run configuration for ecd_sample_prep.
Key names match the configuration file exactly.
"""

from __future__ import annotations
import json
import os
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Tuple

from common.errors import ConfigError, FileNotFound

DEFAULT_CONFIG_FILE = "ecd_sample_prep.json"

_REQUIRED = ("cells_per_frame", "contig_size", "data_frames",
             "fragment_file", "distribution_file", "output_file")
_PATH_KEYS = ("fragment_file", "distribution_file", "output_file")


@dataclass(frozen=True)
class PrepConfig:
    cells_per_frame: int
    contig_size: int
    data_frames: int
    fragment_file: str
    distribution_file: str
    output_file: str
    # one value per diagnostic frame at the head of every frame group
    diagnostic_values: Tuple[int, ...] = field(default_factory=tuple)
    quiescent: int = 0
    # malformed integers in definition files are fatal instead of read as atoi() would
    strict_integers: bool = False

    def __post_init__(self):
        if self.cells_per_frame <= 0:
            raise ConfigError("Config value 'cells_per_frame' must be positive")
        if self.data_frames <= 0:
            raise ConfigError("Config value 'data_frames' must be positive")
        if self.contig_size < 0:
            raise ConfigError("Config value 'contig_size' must not be negative")
        _check_byte("quiescent", self.quiescent)
        for v in self.diagnostic_values:
            _check_byte("diagnostic_values", v)

    @property
    def diagnostic_frames(self) -> int:
        return len(self.diagnostic_values)


def _check_byte(key: str, value: int) -> None:
    if not 0 <= int(value) <= 255:
        raise ConfigError(f"Config value '{key}' must be in 0..255, got {value}")


def _as_int(raw: Dict[str, Any], key: str) -> int:
    v = raw[key]
    if isinstance(v, bool) or not isinstance(v, int):
        raise ConfigError(f"Config value '{key}' must be an integer, got {v!r}")
    return v


def _as_bool(raw: Dict[str, Any], key: str, default: bool) -> bool:
    v = raw.get(key, default)
    if not isinstance(v, bool):
        raise ConfigError(f"Config value '{key}' must be true or false, got {v!r}")
    return v


def _diagnostic_values(raw: Dict[str, Any]) -> Tuple[int, ...]:
    has_list = "diagnostic_values" in raw
    has_const = "diagnostic_constant" in raw or "diagnostic_frames" in raw
    if has_list and has_const:
        raise ConfigError("Use either 'diagnostic_values' or "
                          "'diagnostic_constant'/'diagnostic_frames', not both")
    if has_list:
        vals = raw["diagnostic_values"]
        if not isinstance(vals, list):
            raise ConfigError("Config value 'diagnostic_values' must be a list")
        out = []
        for i, v in enumerate(vals):
            if isinstance(v, bool) or not isinstance(v, int):
                raise ConfigError(f"diagnostic_values[{i}] must be an integer, got {v!r}")
            out.append(v)
        return tuple(out)
    if has_const:
        n = _as_int(raw, "diagnostic_frames") if "diagnostic_frames" in raw else 0
        c = _as_int(raw, "diagnostic_constant") if "diagnostic_constant" in raw else 0
        if n < 0:
            raise ConfigError("Config value 'diagnostic_frames' must not be negative")
        return (c,) * n
    return ()


def config_from_dict(raw: Dict[str, Any], base_dir: str = "") -> PrepConfig:
    """Build a PrepConfig from parsed file contents; relative paths are resolved against base_dir."""
    known = {f.name for f in fields(PrepConfig)} | {"diagnostic_constant", "diagnostic_frames"}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ConfigError(f"Unknown configuration key(s): {', '.join(unknown)}")
    missing = [k for k in _REQUIRED if k not in raw]
    if missing:
        raise ConfigError(f"Missing configuration key(s): {', '.join(missing)}")

    paths = {}
    for k in _PATH_KEYS:
        p = raw[k]
        if not isinstance(p, str) or not p:
            raise ConfigError(f"Config value '{k}' must be a non-empty string")
        paths[k] = p if os.path.isabs(p) else os.path.join(base_dir, p)

    return PrepConfig(
        cells_per_frame=_as_int(raw, "cells_per_frame"),
        contig_size=_as_int(raw, "contig_size"),
        data_frames=_as_int(raw, "data_frames"),
        diagnostic_values=_diagnostic_values(raw),
        quiescent=_as_int(raw, "quiescent") if "quiescent" in raw else 0,
        strict_integers=_as_bool(raw, "strict_integers", False),
        **paths,
    )


def load_config(path: str = DEFAULT_CONFIG_FILE) -> PrepConfig:
    if not os.path.isfile(path):
        raise FileNotFound(path)
    try:
        f = open(path, "r", encoding="utf-8")
    except OSError as e:
        raise FileNotFound(path) from e
    with f:
        try:
            raw = json.load(f)
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ConfigError(f"Can't read {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"Can't read {path}: top level must be an object")
    return config_from_dict(raw, base_dir=os.path.dirname(os.path.abspath(path)))
