# src/reportsheets/workbook.py
"""
Workbook container and xlsx writer.

One Workbook collects the grids of every report in a directory, one sheet
per report. Excel constraints are enforced when a sheet is added, so a report
that cannot be written fails on its own instead of failing `save`:
- sheet names are at most 31 characters and not empty
- `: \\ / ? * [ ]` are forbidden in sheet names
- sheet names must be unique, ignoring case (collisions get `_1`, `_2`, ...)
- control characters are not allowed in cell text and are stripped
- nested JSON values (lists, objects) are written as JSON text
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Dict, List, Union

import msgspec
import pandas as pd
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE

from reportsheets.transforms import config


Grid = List[List[Any]]

_FORBIDDEN_RE = re.compile(config.FORBIDDEN_SHEET_CHARS)
_EXTENSION_RE = re.compile(re.escape(config.REPORT_EXTENSION) + "$", re.IGNORECASE)


def clean_sheet_name(name: str) -> str:
    """
    Report file name -> valid sheet name (extension dropped, forbidden chars
    -> '_', control chars removed, truncated).

    Raises
    ------
    ValueError
        If nothing is left of the name (e.g. a file called ".json").
    """
    clean = _EXTENSION_RE.sub("", name)
    clean = _FORBIDDEN_RE.sub("_", clean)
    clean = ILLEGAL_CHARACTERS_RE.sub("", clean)
    clean = clean[: config.MAX_SHEET_NAME_LENGTH]
    if not clean:
        raise ValueError(f"no usable sheet name in {name!r}")
    return clean


def writable_cell(value: Any) -> Any:
    if isinstance(value, str):
        return ILLEGAL_CHARACTERS_RE.sub("", value)
    if isinstance(value, (list, dict)):
        return ILLEGAL_CHARACTERS_RE.sub("", msgspec.json.encode(value).decode())
    return value


def writable_grid(grid: Grid) -> Grid:
    return [[writable_cell(v) for v in row] for row in grid]


class Workbook:
    """Ordered collection of named sheet grids."""

    def __init__(self):
        self._sheets: Dict[str, Grid] = {}

    def __len__(self) -> int:
        return len(self._sheets)

    @property
    def sheet_names(self) -> List[str]:
        return list(self._sheets)

    def sheet(self, name: str) -> Grid:
        return self._sheets[name]

    def unique_sheet_name(self, name: str) -> str:
        """
        First free name among `name`, `name_1`, `name_2`, ...

        Names are compared case-insensitively, as Excel does. The base is
        truncated so the suffixed name stays within the sheet name limit;
        at least 3 characters are always reserved for the suffix.
        """
        taken = {n.lower() for n in self._sheets}
        base = clean_sheet_name(name)
        final = base
        counter = 1
        while final.lower() in taken:
            suffix = f"_{counter}"
            room = max(len(suffix), 3)
            final = f"{base[: config.MAX_SHEET_NAME_LENGTH - room]}{suffix}"
            counter += 1
        return final

    def add_sheet(self, name: str, grid: Grid) -> str:
        """
        Append a sheet; returns the (possibly suffixed) name it was stored under.

        Raises ValueError when `name` yields no usable sheet name.
        """
        final = self.unique_sheet_name(name)
        self._sheets[final] = writable_grid(grid)
        return final

    def save(self, path: Union[str, Path]) -> Path:
        """Write every sheet to an .xlsx file (no header/index rows, ragged rows padded blank)."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            for name, grid in self._sheets.items():
                pd.DataFrame(grid, dtype=object).to_excel(
                    writer,
                    sheet_name=name,
                    header=False,
                    index=False,
                )
        return path
