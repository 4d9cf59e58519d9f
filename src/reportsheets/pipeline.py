# src/reportsheets/pipeline.py
"""
End-to-end conversion of exported report files into workbooks.

Per report (one JSON file -> one sheet):
1) Decode rows and load them into a frame (first row defines the columns)
2) Fill missing months per unit (only reports with month and unit columns)
3) Accumulate the year per unit, with the rule selected by the report name
4) Build pivot tables for the known metrics present
5) Assemble the flat sheet grid

Per directory: every *.json file becomes a sheet of one workbook. A report
that fails is logged and skipped; the rest of the directory still converts.

Input tree layout:
    Input/*.json          -> Output/General.xlsx
    Input/<unit>/*.json   -> Output/<unit>.xlsx
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Union

from reportsheets.extract.reports import ReportRows, read_report, rows_to_frame
from reportsheets.transforms import config
from reportsheets.transforms.accumulate import accumulate_report
from reportsheets.transforms.grid import Grid, assemble_grid
from reportsheets.transforms.months import fill_missing_months
from reportsheets.transforms.pivotize import build_pivot_tables, pivot_rows
from reportsheets.workbook import Workbook


PathLike = Union[str, Path]


def build_report_grid(logger, report_name: str, rows: ReportRows) -> Grid:
    """Run the transformation pipeline for one decoded report."""
    frame = rows_to_frame(rows)
    filled = fill_missing_months(frame)
    if len(filled) != len(frame):
        logger.info(f"Months filled: {len(frame)} -> {len(filled)} rows")

    accumulated = accumulate_report(report_name, filled, logger)
    tables = build_pivot_tables(filled, logger)

    return assemble_grid(filled, accumulated, pivot_rows(tables))


def list_report_files(directory: PathLike) -> List[Path]:
    """Report files directly inside `directory`, sorted by name."""
    ext = config.REPORT_EXTENSION
    return sorted(
        p for p in Path(directory).iterdir()
        if p.is_file() and p.name.lower().endswith(ext)
    )


def process_directory_to_workbook(
    logger,
    directory: PathLike,
    output_path: PathLike,
) -> Optional[Path]:
    """
    Convert every report in `directory` into one sheet of a workbook.

    Returns
    -------
    Path | None
        The written workbook, or None when there was nothing to write
        (missing directory, no report files, or no non-empty report).
    """
    directory = Path(directory)
    if not directory.is_dir():
        return None

    files = list_report_files(directory)
    if not files:
        return None

    output_path = Path(output_path)
    logger.info(f"Creating {output_path.name} with {len(files)} files...")

    workbook = Workbook()
    for path in files:
        try:
            rows = read_report(path)
            if not rows:
                logger.info(f"  - Skipped empty report: {path.name}")
                continue
            grid = build_report_grid(logger, path.name, rows)
            sheet_name = workbook.add_sheet(path.name, grid)
        except Exception as exc:
            logger.error(f"  ! Error processing {path.name}: {exc}")
            continue

        logger.info(f"  + Added sheet: {sheet_name}")

    if len(workbook) == 0:
        return None

    saved = workbook.save(output_path)
    logger.info(f"Saved workbook: {saved.name}")
    return saved


def convert_input_tree(logger, input_dir: PathLike, output_dir: PathLike) -> List[Path]:
    """
    Convert the root reports into General.xlsx and each unit subdirectory
    into <unit>.xlsx.

    Raises
    ------
    FileNotFoundError
        If `input_dir` does not exist.
    """
    input_dir = Path(input_dir)
    output_dir = Path(output_dir)
    if not input_dir.is_dir():
        raise FileNotFoundError(f"Input directory '{input_dir}' does not exist.")

    written: List[Path] = []

    logger.info("Processing General files...")
    general = process_directory_to_workbook(logger, input_dir, output_dir / config.GENERAL_WORKBOOK_NAME)
    if general is not None:
        written.append(general)

    subdirs = sorted(p for p in input_dir.iterdir() if p.is_dir())
    logger.info(f"Found {len(subdirs)} unit directories.")

    for unit_dir in subdirs:
        logger.info(f"Processing Unit: {unit_dir.name}")
        out = process_directory_to_workbook(logger, unit_dir, output_dir / f"{unit_dir.name}.xlsx")
        if out is not None:
            written.append(out)

    logger.info("Excel conversion complete.")
    return written
