# src/reportsheets/cli.py
"""Command-line entry point: convert an input tree of report files into workbooks."""

from __future__ import annotations

import argparse
from pathlib import Path

from reportsheets.logging_utils import get_logger
from reportsheets.pipeline import convert_input_tree


DEFAULT_INPUT_DIR = Path("Input")
DEFAULT_OUTPUT_DIR = Path("Output")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="reportsheets",
        description=(
            "Convert exported report JSON files into Excel workbooks with monthly "
            "gap filling, yearly accumulation per unit and per-metric pivot tables."
        ),
    )
    parser.add_argument(
        "--input-dir",
        type=Path,
        default=DEFAULT_INPUT_DIR,
        help="Directory with report files; each subdirectory becomes its own workbook (default: Input).",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=DEFAULT_OUTPUT_DIR,
        help="Directory where workbooks are written (default: Output).",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: INFO).",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logger = get_logger(level=args.log_level)

    try:
        written = convert_input_tree(logger, args.input_dir, args.output_dir)
    except FileNotFoundError as exc:
        logger.error(str(exc))
        return 1

    logger.info(f"Wrote {len(written)} workbook(s) to {args.output_dir}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
