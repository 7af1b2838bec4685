#!/usr/bin/env python3
# cli.py: command line front ends for latmap

import argparse
import fileinput
import logging
import sys

from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from latmap.core import HeatmapResult, build_heatmap
from latmap.errors import HeatmapError
from latmap.logging_config import setup_logging
from latmap.metrics import compute_stats
from latmap.models import TIME_UNITS, HeatmapConfig
from latmap.offsets import perf_offsets
from latmap.utils import format_number


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Generate a latency heat map SVG from a two-column "
        "<time> <latency> trace.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        epilog="eg, latmap --unitstime=us --unitslatency=us --minlat=2000 "
        "--maxlat=10000 trace.txt > heatmap.svg",
    )

    parser.add_argument(
        "infiles",
        nargs="*",
        help="Trace files to read (stdin if none)",
    )

    # Labels
    parser.add_argument("--title", default="Latency Heat Map", help="Title text")
    parser.add_argument(
        "--unitstime",
        default=None,
        help=f"Column 1 units: {', '.join(TIME_UNITS)} (default s)",
    )
    parser.add_argument(
        "--unitslatency",
        default="",
        help="Column 2 units (any string; used for labels)",
    )

    # Binning
    parser.add_argument("--minlat", type=float, default=0, help="Minimum latency to include")
    parser.add_argument("--maxlat", type=float, default=None, help="Maximum latency to include")
    parser.add_argument("--rows", type=int, default=50, help="Number of heat map rows")
    parser.add_argument(
        "--steplat",
        type=float,
        default=None,
        help="Instead of --rows, a latency step from which row count is automatic",
    )
    parser.add_argument("--stepsec", type=float, default=1.0, help="Seconds per column (fractions ok)")
    parser.add_argument(
        "--maxcol",
        type=int,
        default=None,
        help="Maximum number of columns to draw (truncate)",
    )
    parser.add_argument(
        "--limitcol",
        type=int,
        default=10000,
        help="Refuse to run if the trace would need more columns than this",
    )

    # Appearance
    parser.add_argument("--fonttype", default="Verdana", help="Font type")
    parser.add_argument("--fontsize", type=int, default=12, help="Font size")
    parser.add_argument(
        "--boxsize",
        type=int,
        default=8,
        help="Heat map box size in pixels; the last column is drawn in the "
        "10px side padding, so larger boxes are clipped on the right",
    )
    parser.add_argument("--grid", action="store_true", help="Draw grid lines")

    # Logging & Debugging
    parser.add_argument("--debug", action="store_true", help="Enable debug-level logging")
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Optional file to write logs to",
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Print a latency and grid summary to stderr",
    )

    return parser, parser.parse_args(argv)


def config_from_args(args) -> HeatmapConfig:
    return HeatmapConfig(
        font_type=args.fonttype,
        font_size=args.fontsize,
        box_size=args.boxsize,
        title=args.title,
        rows=args.rows,
        max_col=args.maxcol,
        step_lat=args.steplat,
        step_sec=args.stepsec,
        min_lat=args.minlat,
        max_lat=args.maxlat,
        units_lat=args.unitslatency,
        units_time=args.unitstime,
        limit_col=args.limitcol,
        grid=args.grid,
    )


def print_summary(result: HeatmapResult, console: Console | None = None) -> None:
    console = console or Console(stderr=True)
    stats = compute_stats(result.samples.latencies)
    grid = result.grid.stats
    units = result.config.units_lat

    table = Table(title="Heat map summary")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("samples", str(stats.count))
    table.add_row("lines discarded", str(result.samples.discarded))
    table.add_row("samples binned", str(grid.binned))
    table.add_row("samples skipped", str(grid.skipped))
    table.add_row("columns", str(grid.largest_column + 1))
    table.add_row("rows", str(grid.largest_row + 1))
    table.add_row("largest cell count", str(grid.largest_count))
    for name in ("min", "mean", "p50", "p90", "p95", "p99", "max"):
        value = getattr(stats, name)
        text = "-" if value is None else f"{format_number(round(value, 3))}{units}"
        table.add_row(f"latency {name}", text)
    console.print(table)


def main(argv=None):
    parser, args = parse_args(argv)

    log_level = "DEBUG" if args.debug else "INFO"
    setup_logging(level=log_level, log_file=args.log_file)

    try:
        config = config_from_args(args)
    except ValidationError as e:
        parser.error(str(e))

    with fileinput.input(
        files=args.infiles or ("-",), encoding="utf-8", errors="replace"
    ) as f:
        lines = list(f)

    try:
        result = build_heatmap(lines, config)
    except HeatmapError as e:
        logging.error(str(e))
        sys.exit(1)

    sys.stdout.write(result.svg)
    if args.stats:
        print_summary(result)


def parse_offsets_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Turn Linux 'perf script' output into time and sub-second "
        "offset rows for subsecond-offset heat maps.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("infiles", nargs="*", help="perf script output (stdin if none)")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--timezero", action="store_true", help="Scale times to start at 0.0")
    group.add_argument(
        "--timezerosecs",
        action="store_true",
        help="Scale seconds only to start at 0",
    )
    parser.add_argument(
        "--ms",
        action="store_true",
        help="Emit the sub-second column in milliseconds instead of microseconds",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug-level logging")
    return parser.parse_args(argv)


def offsets_main(argv=None):
    args = parse_offsets_args(argv)
    setup_logging(level="DEBUG" if args.debug else "INFO")

    with fileinput.input(
        files=args.infiles or ("-",), encoding="utf-8", errors="replace"
    ) as f:
        for row in perf_offsets(
            f, timezero=args.timezero, timezerosecs=args.timezerosecs, ms=args.ms
        ):
            sys.stdout.write(row + "\n")


if __name__ == "__main__":
    main()
