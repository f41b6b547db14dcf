import argparse
import logging
import sys
from typing import List, Optional

from tracksplit.core.config import DEFAULT_MAX_ACCURACY, DEFAULT_MAX_POINTS, DEFAULT_MIN_MOVEMENT, SplitConfig
from tracksplit.pipeline import TrackSplitter

logger = logging.getLogger("tracksplit")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Merge GPS track files and split them into per-day and fixed-size files."
    )
    parser.add_argument("--source", dest="source_dir", help="Directory holding the input .gpx/.csv files (default: gpx).")
    parser.add_argument("--dest", dest="dest_dir", help="Output directory. Is created if it doesn't exist (default: split).")
    parser.add_argument(
        "--max-points",
        dest="max_points",
        type=int,
        help=f"Maximum points per size-split file (default: {DEFAULT_MAX_POINTS}).",
    )
    parser.add_argument(
        "--tz-offset",
        dest="tz_offset_hours",
        type=float,
        help="Hours added to UTC before deciding which day a point belongs to (default: 0).",
    )
    parser.add_argument(
        "--max-accuracy",
        dest="max_accuracy",
        type=float,
        help=f"HDOP must be below this to keep a point when --filter-accuracy is set (default: {DEFAULT_MAX_ACCURACY}).",
    )
    parser.add_argument(
        "--min-movement",
        dest="min_movement",
        type=float,
        help=f"Minimum lat or lon change, in degrees, from the last kept point (default: {DEFAULT_MIN_MOVEMENT}).",
    )
    parser.add_argument("--prefix", help="Prefix for every output filename.")
    parser.add_argument("--ext", dest="extension", help="Output file extension (default: gpx).")
    parser.add_argument(
        "--no-filter",
        dest="filter_points",
        action="store_false",
        default=None,
        help="Keep every point; skip the movement/accuracy filter.",
    )
    parser.add_argument(
        "--filter-accuracy",
        dest="filter_accuracy",
        action="store_true",
        default=None,
        help="Also drop points whose HDOP is missing or not below --max-accuracy.",
    )
    parser.add_argument(
        "--no-sort",
        dest="sort_unordered",
        action="store_false",
        default=None,
        help="Do not sort unordered input. Date splitting then assumes sorted input anyway.",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Debug output.")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only warnings and errors.")
    return parser


def configure_logging(verbose: bool = False, quiet: bool = False):
    level = logging.INFO
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    logging.basicConfig(stream=sys.stdout, level=level, format="%(message)s")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose, args.quiet)

    try:
        config = SplitConfig.from_args(args)
    except ValueError as e:
        logger.error("Invalid configuration: %s", e)
        return 1

    try:
        result = TrackSplitter(config).run()
    except OSError as e:
        logger.error("Could not write output: %s", e)
        return 1

    if result.is_empty:
        return 0
    logger.info("Wrote %d files to %s", len(result.written), config.dest_dir)
    return 0


if __name__ == "__main__":
    sys.exit(main())
