"""
Grid assembly: one rectangular cell matrix per report sheet.

Layout (top to bottom):

    header + rows of the report            (columns = report columns)
    2 spacer rows, header + accumulation rows   (only if any)
    1 spacer row, then the pivot records        (only if any)

Pivot records are re-projected onto one fixed column order,
[Mes, units in display order], so every pivot block lines up vertically
whatever keys its records carry. A spacer is an empty row (`[]`).
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Sequence

import pandas as pd

from reportsheets.transforms import config
from reportsheets.transforms.pivotize.pivotize import order_units
from .values import is_missing


Grid = List[List[Any]]

EMPTY_CELL = ""


def _cell(value: Any) -> Any:
    return EMPTY_CELL if is_missing(value) else value


def report_block(frame: pd.DataFrame) -> Grid:
    """Header row (report columns) plus one row per report row, in order."""
    if len(frame.columns) == 0:
        return []
    block: Grid = [list(frame.columns)]
    block.extend([_cell(v) for v in row] for row in frame.itertuples(index=False, name=None))
    return block


def accumulation_block(accumulated: Sequence[Dict[str, Any]]) -> Grid:
    """Header row (every key seen, first-appearance order) plus one row per accumulation row."""
    if not accumulated:
        return []
    header = list(dict.fromkeys(k for row in accumulated for k in row))
    block: Grid = [header]
    block.extend([_cell(row.get(c)) for c in header] for row in accumulated)
    return block


def pivot_columns(records: Iterable[Dict[Any, Any]]) -> List[Any]:
    """Fixed pivot column order: label column, then every unit seen, in display order."""
    units: List[Any] = []
    for rec in records:
        if len(rec) > 1:
            units.extend(k for k in rec if k != config.PIVOT_LABEL_COL)
    return [config.PIVOT_LABEL_COL, *order_units(units)]


def pivot_block(records: Sequence[Dict[Any, Any]]) -> Grid:
    """
    Render pivot records:
    - {}            -> spacer row
    - single key    -> single-cell row (table title)
    - anything else -> projected onto `pivot_columns`, absent units blank
    """
    columns = pivot_columns(records)
    block: Grid = []
    for rec in records:
        if not rec:
            block.append([])
        elif len(rec) == 1:
            block.append([_cell(v) for v in rec.values()])
        else:
            block.append([_cell(rec.get(c)) for c in columns])
    return block


def assemble_grid(
    frame: pd.DataFrame,
    accumulated: Sequence[Dict[str, Any]] = (),
    pivot_records: Sequence[Dict[Any, Any]] = (),
) -> Grid:
    grid: Grid = report_block(frame)

    if accumulated:
        grid.extend([[], []])
        grid.extend(accumulation_block(accumulated))

    if pivot_records:
        grid.append([])
        grid.extend(pivot_block(pivot_records))

    return grid
