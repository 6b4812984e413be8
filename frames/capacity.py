# frames/capacity.py
"""
Checks that the frame groups implied by the longest fragment sequence fit into the
contiguous buffer.

A "frame group" is a set of diagnostic frames followed by a set of data frames.
"""

from __future__ import annotations
from dataclasses import dataclass

from common.config import PrepConfig
from common.errors import CapacityExceeded, GeometryMismatch
from common.lvds import ROW_SIZE
from common.run_utils import count
from definitions.distribution import DistributionList


@dataclass(frozen=True)
class CapacityReport:
    longest_sequence: int
    frame_group_length: int
    frame_group_count: int
    max_frames: int
    total_frames: int
    total_bytes: int

    @property
    def fits(self) -> bool:
        return self.total_frames <= self.max_frames


def find_longest_sequence(distribution: DistributionList) -> int:
    return max((len(r.values) for r in distribution), default=0)


def compute_capacity(config: PrepConfig, distribution: DistributionList) -> CapacityReport:
    longest = find_longest_sequence(distribution)
    group_len = config.diagnostic_frames + config.data_frames
    # always at least one frame group, even for an empty distribution
    group_count = longest // config.data_frames + 1
    total_frames = group_count * group_len
    return CapacityReport(
        longest_sequence=longest,
        frame_group_length=group_len,
        frame_group_count=group_count,
        max_frames=config.contig_size // config.cells_per_frame,
        total_frames=total_frames,
        total_bytes=total_frames * config.cells_per_frame,
    )


def print_capacity_report(report: CapacityReport) -> None:
    print(f"{count(report.longest_sequence)} Frames in the longest fragment sequence")
    print(f"{count(report.frame_group_length)} Frames in a frame group")
    print(f"{count(report.frame_group_count)} Frame group(s) required")
    print(f"{count(report.max_frames)} Frames will fit into the contig buffer")
    print(f"{count(report.total_frames)} Frames required in total")
    print(f"{count(report.total_bytes)} Bytes required in total")


def verify_distribution_is_valid(config: PrepConfig, distribution: DistributionList,
                                 lvds: bool = True, verbose: bool = True) -> CapacityReport:
    """
    Returns the capacity report; report.frame_group_count is the number of frame groups
    to write. Raises GeometryMismatch or CapacityExceeded.
    """
    if lvds and config.cells_per_frame % ROW_SIZE != 0:
        raise GeometryMismatch(f"Config value 'cells_per_frame' must be a multiple of {ROW_SIZE}")

    report = compute_capacity(config, distribution)
    if verbose:
        print_capacity_report(report)
    if not report.fits:
        raise CapacityExceeded(report)
    return report
