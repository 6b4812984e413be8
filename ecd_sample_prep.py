#!/usr/bin/env python3
# ecd_sample_prep.py
"""
Builds an ECD sample data file from fragment and distribution definitions.

  -config <file>   configuration file (default: ecd_sample_prep.json)
  -nolvds          don't perform intra-row cell reordering
  -lvdsmap         display the LVDS reordering map, then exit
  -trace <cell>    instead of creating an output file, trace a cell in an existing file
"""

from __future__ import annotations
import argparse
import sys
from dataclasses import asdict
from typing import List, Optional

from common.config import DEFAULT_CONFIG_FILE, PrepConfig, load_config
from common.errors import CannotCreateFile, CapacityExceeded, EXIT_OK, SamplePrepError
from common.lvds import build_inverse_table, build_translation_table, format_lvds_map
from common.run_utils import write_json
from definitions.distribution import dump_distribution, load_distribution
from definitions.fragments import load_fragments
from frames.builder import FrameBuilder
from frames.capacity import verify_distribution_is_valid
from reader.trace import format_trace, trace_cell
from writer.write import write_output_file


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(
        prog="ecd_sample_prep",
        description="Generate an ECD sample data file",
    )
    ap.add_argument("-config", "--config", dest="config", default=DEFAULT_CONFIG_FILE,
                    help=f"configuration file (default: {DEFAULT_CONFIG_FILE})")
    ap.add_argument("-trace", "--trace", dest="trace", type=int, default=None, metavar="CELL",
                    help="print the value of a cell in every frame of an existing output file")
    ap.add_argument("-nolvds", "--nolvds", dest="nolvds", action="store_true",
                    help="don't perform intra-row cell reordering")
    ap.add_argument("-lvdsmap", "--lvdsmap", dest="lvdsmap", action="store_true",
                    help="display the LVDS reordering map, then exit")
    ap.add_argument("--dump", action="store_true",
                    help="print the distribution list after loading it")
    ap.add_argument("--report", type=str, default=None,
                    help="write a JSON run report to this path")
    return ap.parse_args(argv)


def generate(cfg: PrepConfig, lvds: bool = True, dump: bool = False) -> dict:
    fragments = load_fragments(cfg.fragment_file, strict=cfg.strict_integers)
    distribution = load_distribution(cfg.distribution_file, fragments, cfg.cells_per_frame,
                                     strict=cfg.strict_integers)
    if dump:
        dump_distribution(distribution)

    # validation happens before the output file is created
    report = verify_distribution_is_valid(cfg, distribution, lvds=lvds)

    table = build_translation_table() if lvds else None
    builder = FrameBuilder(cfg, distribution)
    stats = write_output_file(cfg, builder, report.frame_group_count, table=table)
    return {
        "fragments": len(fragments),
        "distribution_records": len(distribution),
        "capacity": asdict(report),
        "writer": stats,
    }


def execute(args: argparse.Namespace) -> int:
    if args.lvdsmap:
        print(format_lvds_map(build_translation_table()))
        return EXIT_OK

    cfg = load_config(args.config)

    if args.trace is not None:
        inverse = None if args.nolvds else build_inverse_table(build_translation_table())
        print(format_trace(trace_cell(cfg, args.trace, inverse=inverse)))
        return EXIT_OK

    result = generate(cfg, lvds=not args.nolvds, dump=args.dump)
    w = result["writer"]
    print("=== ECD Sample Prep ===")
    print(f"Output: {cfg.output_file}")
    print(f"Frame groups: {w['frame_groups']}, Frames: {w['frames_written']}, "
          f"Bytes: {w['bytes_written']:,}, LVDS: {w['lvds']}")

    if args.report:
        meta = asdict(cfg)
        meta.update(result)
        try:
            write_json(args.report, meta)
        except OSError as e:
            raise CannotCreateFile(args.report) from e
        print(f"Saved: {args.report}")
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    try:
        return execute(args)
    except CapacityExceeded as e:
        print(f"\n{e}", file=sys.stderr)
        return e.exit_code
    except SamplePrepError as e:
        print(e, file=sys.stderr)
        return e.exit_code


if __name__ == "__main__":
    sys.exit(main())
