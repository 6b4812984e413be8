# frames/builder.py
from __future__ import annotations
from typing import Optional
import numpy as np

from common.config import PrepConfig
from definitions.distribution import DistributionList


class FrameBuilder:
    """
    Builds raw (logical order) frames from the distribution list.
    Pass 'out' to reuse one frame buffer across calls.
    """

    def __init__(self, config: PrepConfig, distribution: DistributionList):
        self.cells_per_frame = config.cells_per_frame
        self.quiescent = config.quiescent
        self.distribution = distribution

    def new_frame(self) -> np.ndarray:
        return np.empty(self.cells_per_frame, dtype=np.uint8)

    def _target(self, out: Optional[np.ndarray]) -> np.ndarray:
        if out is None:
            return self.new_frame()
        if out.dtype != np.uint8 or out.shape != (self.cells_per_frame,):
            raise ValueError(f"Frame buffer must be uint8[{self.cells_per_frame}]")
        return out

    def build_data_frame(self, frame_index: int, out: Optional[np.ndarray] = None) -> np.ndarray:
        frame = self._target(out)
        # every cell starts out quiescent
        frame.fill(self.quiescent)
        for rec in self.distribution:
            if frame_index < len(rec.values):
                frame[rec.cells] = rec.values[frame_index]
        return frame

    def build_diagnostic_frame(self, value: int, out: Optional[np.ndarray] = None) -> np.ndarray:
        frame = self._target(out)
        frame.fill(value)
        return frame
