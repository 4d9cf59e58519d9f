# src/reportsheets/extract/reports.py
"""
Report file decoding.

Each report is one JSON array of flat row objects exported from a SQL query.
Rows are decoded with msgspec and loaded into an object-dtype DataFrame so the
raw scalars (ints, floats, text durations, None) reach the transforms untouched.

Column contract (must not change):
- the frame's columns are exactly the FIRST row's keys, in their order
- keys that only appear in later rows are ignored
- keys missing from a later row are stored as `ABSENT` (distinct from null)
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Union

import msgspec
import pandas as pd

from reportsheets.transforms.values import ABSENT


ReportRows = List[Dict[str, Any]]

_decoder = msgspec.json.Decoder(List[Dict[str, Any]])


def decode_report(content: Union[bytes, str]) -> ReportRows:
    """
    Decode one report payload.

    Raises
    ------
    msgspec.DecodeError
        Invalid JSON, or a payload that is not an array of objects
        (msgspec.ValidationError is a subclass).
    """
    return _decoder.decode(content)


def read_report(path: Union[str, Path]) -> ReportRows:
    """Read and decode a report file."""
    return decode_report(Path(path).read_bytes())


def report_columns(rows: ReportRows) -> List[str]:
    """Columns of a report: the first row's keys (empty for an empty report)."""
    if not rows:
        return []
    return list(rows[0].keys())


def rows_to_frame(rows: ReportRows) -> pd.DataFrame:
    """
    Load decoded rows into a DataFrame following the first-row column contract.

    dtype=object keeps JSON scalars as-is (no int -> float promotion when a
    column holds nulls).
    """
    columns = report_columns(rows)
    if not columns:
        return pd.DataFrame()
    return pd.DataFrame(
        [[row.get(c, ABSENT) for c in columns] for row in rows],
        columns=columns,
        dtype=object,
    )
