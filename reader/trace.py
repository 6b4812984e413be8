# reader/trace.py
from __future__ import annotations
from typing import List, Optional, Sequence
import numpy as np

from common.config import PrepConfig
from common.errors import CannotOpenFile, GeometryMismatch, InvalidCellNumber
from common.lvds import ROW_SIZE, lvds_cell_number


def trace_cell(config: PrepConfig, cell_number: int, inverse: Optional[np.ndarray] = None) -> List[int]:
    """
    Value of one raw cell in every frame of config.output_file.
    'inverse' is the inverse lvds table when the file was written lvds-ordered.
    A trailing partial frame is ignored.
    """
    if not 0 <= cell_number < config.cells_per_frame:
        raise InvalidCellNumber(f"Invalid cell number {cell_number} (frame has {config.cells_per_frame} cells)")
    if inverse is not None:
        if config.cells_per_frame % ROW_SIZE != 0:
            raise GeometryMismatch(f"Config value 'cells_per_frame' must be a multiple of {ROW_SIZE}")
        cell_number = lvds_cell_number(cell_number, inverse)

    filename = config.output_file
    try:
        ifile = open(filename, "rb")
    except OSError as e:
        raise CannotOpenFile(filename) from e

    values: List[int] = []
    with ifile:
        while True:
            frame = ifile.read(config.cells_per_frame)
            if len(frame) != config.cells_per_frame:
                break
            values.append(frame[cell_number])
    return values


def format_trace(values: Sequence[int]) -> str:
    return ", ".join(str(v) for v in values)
