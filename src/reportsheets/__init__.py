# src/reportsheets/__init__.py
"""
reportsheets

Turns exported report JSON arrays into Excel workbooks: each report becomes
a sheet holding the 12-month series per unit, the yearly accumulation per
unit and per-metric cross-unit pivot tables.

Public API:
- get_logger
- build_report_grid
- process_directory_to_workbook
- convert_input_tree
- Workbook
"""

from __future__ import annotations

# Public logging utility
from .logging_utils import get_logger

# Public conversion pipeline
from .pipeline import build_report_grid, convert_input_tree, process_directory_to_workbook

# Sheet container / xlsx writer
from .workbook import Workbook, clean_sheet_name

__all__ = [
    "get_logger",
    "build_report_grid",
    "convert_input_tree",
    "process_directory_to_workbook",
    "Workbook",
    "clean_sheet_name",
]
