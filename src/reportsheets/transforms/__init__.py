"""
Transformations for reportsheets.

This subpackage contains the report transformations applied to the frames
produced by `reportsheets.extract.rows_to_frame`:

- gap filling to a complete 12-month calendar per unit
- rule-dispatched annual accumulation per unit
- period-by-unit pivot tables with TOTAL rows
- assembly of everything into one flat sheet grid

Design principles:
- Transformations are pure frame/row logic; file I/O lives elsewhere.
- The first row of a report defines its columns.
- Functions are written to be unit-testable with small synthetic reports.
"""

from .accumulate import accumulate_report
from .durations import format_duration, parse_duration
from .grid import assemble_grid
from .months import fill_missing_months
from .pivotize import build_pivot_tables, pivot_rows

__all__ = [
    "accumulate_report",
    "assemble_grid",
    "build_pivot_tables",
    "fill_missing_months",
    "format_duration",
    "parse_duration",
    "pivot_rows",
]
