"""
dump2png
Visualise file data as a PNG, one coloured pixel per byte (or group of bytes).
Intended for memory dumps and other large binaries.

Usage:
  dump2png FILE [-o OUT.png] [-p PALETTE] [-w WIDTH] [-h HEIGHT] [-z ZOOM] [-k SKIP] [-s SEEK] [-H] [-M] [--debug]

Notes:
  By default the least significant bit of every channel is masked so the
  image cannot be converted back into the input. Use -M to keep it.
  This is not a structure-aware dump analyser: bytes are coloured by value only.
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path
from typing import List, Optional, Sequence

from .constants import (
    DEFAULT_MAX_HEIGHT,
    DEFAULT_OUTPUT,
    DEFAULT_PALETTE,
    DEFAULT_SEEK,
    DEFAULT_SKIP,
    DEFAULT_WIDTH,
    DEFAULT_ZOOM,
)
from .core_types import HeightPlan, Palette, RenderConfig, RenderStats
from .palette_data import describe_palettes, get_palette, palette_names
from .render import plan_file, render_file
from .utils import (
    RowProgress,
    debug_log,
    enable_line_buffered_stdout,
    error,
    format_byte_size,
    format_seconds_compact,
    format_total_duration_compact,
    key_value_pairs_to_string,
    log,
    print_config_line,
    warn,
)

# CLI args & small helpers


def _positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {text!r}") from None
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be > 0, got {value}")
    return value


def _non_negative_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {text!r}") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    """
    CLI parser.

    Options:
      file: input path
      output: PNG path
      palette: one of palette_names()
      width / height: pixels per row / maximum rows
      zoom: bytes averaged per pixel
      skip: keep 1 of every `skip` pixel windows
      seek: byte offset to start from
      no_autoscale: keep the full height even for small inputs
      no_mask: keep the least significant bit
      debug: timings and throughput
      quiet: no progress line
    """
    epilog = "palette types:\n" + "\n".join(f"  {line}" for line in describe_palettes())
    parser = argparse.ArgumentParser(
        prog="dump2png",
        description="Visualize file data as a png. Intended for memory dumps.",
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
    )
    parser.add_argument(
        "--help", action="help", help="Show this help message and exit"
    )
    parser.add_argument("file", type=Path, help="Input file")
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=Path(DEFAULT_OUTPUT),
        help=f"Output PNG (default: {DEFAULT_OUTPUT})",
    )
    parser.add_argument(
        "-p",
        "--palette",
        choices=palette_names(),
        default=DEFAULT_PALETTE,
        metavar="PALETTE",
        help=f"Palette type for colorization (default: {DEFAULT_PALETTE}); see below.",
    )
    parser.add_argument(
        "-w",
        "--width",
        type=_positive_int,
        default=DEFAULT_WIDTH,
        help=f"Pixels per row (default: {DEFAULT_WIDTH})",
    )
    parser.add_argument(
        "-h",
        "--height",
        type=_positive_int,
        default=DEFAULT_MAX_HEIGHT,
        help=f"Maximum rows (default: {DEFAULT_MAX_HEIGHT})",
    )
    parser.add_argument(
        "-z",
        "--zoom",
        type=_positive_int,
        default=DEFAULT_ZOOM,
        help="Averages multiple bytes; eg, 16 avgs 16 as 1",
    )
    parser.add_argument(
        "-k",
        "--skip",
        type=_positive_int,
        default=DEFAULT_SKIP,
        help="Skip factor; eg, 3 means show 1 out of 3",
    )
    parser.add_argument(
        "-s",
        "--seek",
        type=_non_negative_int,
        default=DEFAULT_SEEK,
        help="Byte offset of the input file to begin reading",
    )
    parser.add_argument(
        "-H",
        "--no-autoscale",
        dest="autoscale",
        action="store_false",
        help="Don't autoscale height",
    )
    parser.add_argument(
        "-M",
        "--no-mask",
        dest="mask",
        action="store_false",
        help="Don't mask least significant bit",
    )
    parser.add_argument("--debug", action="store_true", help="Timings and throughput")
    parser.add_argument("--quiet", action="store_true", help="No progress line")
    return parser


def parse_cli_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def _report_plan(plan: HeightPlan, config: RenderConfig) -> None:
    if plan.truncated:
        log(
            f"Truncating height: showing {plan.shown_bytes:,} of {plan.total_bytes:,} bytes. "
            "Use -h to allow larger heights."
        )
    log(f"Output image: height:{config.height}, width:{config.width}")


def _report_stats(
    stats: RenderStats, config: RenderConfig, seconds: float, debug: bool
) -> None:
    total_pixels = config.width * config.height
    if debug:
        debug_log(
            key_value_pairs_to_string(
                [
                    ("Rows", stats.rows),
                    ("Read", format_byte_size(stats.bytes_read)),
                    ("Data pixels", stats.data_pixels),
                    ("Black fill", total_pixels - stats.data_pixels),
                ]
            )
        )
        if seconds > 0:
            rate_mpx_s = (total_pixels / seconds) / 1e6
            debug_log(
                f"throughput {rate_mpx_s:.2f} MPx/s  "
                f"({total_pixels / 1e6:.2f} MPx in {format_seconds_compact(seconds)})"
            )


def run(args: argparse.Namespace) -> int:
    """Plan, render and report one file. Returns the process exit code."""
    t_start = time.perf_counter()
    palette: Palette = get_palette(args.palette)
    request = RenderConfig(
        width=args.width,
        height=args.height,
        zoom=args.zoom,
        skip=args.skip,
        seek=args.seek,
        mask=args.mask,
        autoscale=args.autoscale,
    )

    print_config_line(
        "run",
        [
            ("Palette", palette.name),
            ("Bytes/px", palette.bytes_per_pixel),
            ("Width", request.width),
            ("Zoom", request.zoom),
            ("Skip", request.skip),
            ("Seek", request.seek),
            ("Mask", request.mask),
        ],
        debug=args.debug,
    )
    if request.zoom > 1 and not palette.zoom_safe:
        warn(f"palette {palette.name} is not zoom safe; averaged colours may mislead")

    try:
        config, plan = plan_file(args.file, palette, request)
    except OSError as e:
        error(f"Can't access infile {args.file}: {e.strerror or e}")
        return 2
    if plan.total_bytes == 0:
        warn("no input bytes after the seek offset; the image will be black")
    _report_plan(plan, config)

    log(f"Writing {args.output}...")
    progress = None if args.quiet else RowProgress(args.output.name)
    t_render = time.perf_counter()
    try:
        stats = render_file(args.file, args.output, palette, config, progress=progress)
    except OSError as e:
        error(f"{e.filename or args.output}: {e.strerror or e}")
        return 2
    except ValueError as e:
        error(f"Error during png creation: {e}")
        return 2
    except MemoryError as e:
        error(f"Out of memory: {e}")
        return 2
    t_done = time.perf_counter()

    _report_stats(stats, config, t_done - t_render, args.debug)
    if args.debug:
        debug_log(
            f"Total {format_total_duration_compact(t_done - t_start)}  "
            f"(plan={format_seconds_compact(t_render - t_start)}, "
            f"render={format_seconds_compact(t_done - t_render)})"
        )
    else:
        log(f"Total time {format_total_duration_compact(t_done - t_start)}")
    return 0


# Entry point


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point. Exits non-zero on usage or I/O errors."""
    enable_line_buffered_stdout()
    args = parse_cli_args(argv)
    sys.exit(run(args))


if __name__ == "__main__":
    main()
