# writer/write.py
from __future__ import annotations
from typing import Dict, Optional
import os
import numpy as np
from tqdm.auto import tqdm

from common.config import PrepConfig
from common.errors import CannotCreateFile
from common.lvds import reorder_for_lvds
from frames.builder import FrameBuilder


def _use_tqdm() -> bool:
    # PREP_TQDM=1 shows a frame-level progress bar
    return str(os.getenv("PREP_TQDM", "0")).strip().lower() in {"1", "true", "yes", "y", "on"}


def write_output_file(config: PrepConfig, builder: FrameBuilder, frame_group_count: int,
                      table: Optional[np.ndarray] = None) -> Dict[str, int]:
    """
    Writes frame_group_count frame groups to config.output_file. Each group is the
    diagnostic frames followed by config.data_frames data frames; data frames are
    numbered across groups and lvds-reordered when 'table' is given.
    """
    filename = config.output_file
    try:
        ofile = open(filename, "wb")
    except OSError as e:
        raise CannotCreateFile(filename) from e

    frame_number = 0
    frames_written = 0
    total = frame_group_count * (config.diagnostic_frames + config.data_frames)

    with ofile:
        # one buffer for every frame of the file
        frame = builder.new_frame()
        bar = tqdm(total=total, desc="write (frames)", unit="frm") if _use_tqdm() else None
        try:
            for _ in range(frame_group_count):
                for value in config.diagnostic_values:
                    builder.build_diagnostic_frame(value, out=frame)
                    ofile.write(frame.tobytes())
                    frames_written += 1
                    if bar is not None:
                        bar.update(1)

                for _ in range(config.data_frames):
                    builder.build_data_frame(frame_number, out=frame)
                    frame_number += 1
                    if table is not None:
                        reorder_for_lvds(frame, table)
                    ofile.write(frame.tobytes())
                    frames_written += 1
                    if bar is not None:
                        bar.update(1)
        finally:
            if bar is not None:
                bar.close()

    return {
        "frame_groups": int(frame_group_count),
        "frames_written": int(frames_written),
        "data_frames_written": int(frame_number),
        "bytes_written": int(frames_written * config.cells_per_frame),
        "lvds": table is not None,
    }
