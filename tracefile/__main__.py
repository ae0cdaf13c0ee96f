from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys

from .engine import ConversionOptions, run_conversion
from .errors import TracefileError

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def configure_logging(quiet: bool, log_level: str) -> None:
    """Configure the root logger; --quiet wins over a more verbose --log-level."""
    level = getattr(logging, log_level.upper(), logging.INFO)
    if quiet:
        level = max(level, logging.WARNING)
    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s", force=True)
    logging.getLogger().setLevel(level)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="python -m tracefile",
        description="Write an lcov tracefile from a coverage model snapshot.",
    )
    parser.add_argument("--input", required=True, help="JSON coverage snapshot to convert.")
    parser.add_argument("--out", required=True, help="Tracefile to write (e.g. coverage.dat).")
    parser.add_argument(
        "--summary",
        default=None,
        help="Optional JSON summary report of found/hit counts per source file.",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Reject snapshots with duplicate files, negative counts or bad line numbers.",
    )
    parser.add_argument("--log-level", default="INFO", choices=LOG_LEVELS, help="Logging level.")
    parser.add_argument("--quiet", action="store_true", help="Only log warnings and errors.")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv if argv is not None else sys.argv[1:])
    configure_logging(args.quiet, args.log_level)

    options = ConversionOptions(
        input_path=Path(args.input),
        output_path=Path(args.out),
        summary_path=Path(args.summary) if args.summary else None,
        strict=args.strict,
    )
    try:
        result = run_conversion(options)
    except TracefileError as exc:
        print(f"Conversion failed: {exc}", file=sys.stderr)
        return 1

    print(f"Wrote {len(result.coverage)} record(s) to {result.output_path}")
    if result.summary_path is not None:
        print(f"Wrote summary report: {result.summary_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
