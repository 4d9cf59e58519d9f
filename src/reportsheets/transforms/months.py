"""
Canonical calendar and month/unit gap filling.

Monthly reports only contain the (month, unit) combinations that had data.
`fill_missing_months` completes them so that every unit has exactly one row
for each of the 12 canonical months, synthesizing zero rows where needed.

Output row order is period-major, unit-minor:

    Enero 2025   / Palacio
    Enero 2025   / Pierre
    Febrero 2025 / Palacio
    ...

which is the natural order of a freshly extracted report
(ORDER BY year, month, unit).
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence, Tuple

import pandas as pd

from reportsheets.transforms import config
from .durations import PADDED_ZERO_DURATION
from .values import is_missing


def build_calendar(year: int) -> Tuple[str, ...]:
    return tuple(f"{month} {year}" for month in config.MONTH_NAMES)


CANONICAL_CALENDAR = build_calendar(config.REPORT_YEAR)

ACCUMULATED_LABEL = f"{config.ACCUMULATED_PREFIX} {config.REPORT_YEAR}"


def period_index(label: Any, calendar: Sequence[str] = CANONICAL_CALENDAR) -> Optional[int]:
    """Position of `label` in the calendar, or None for unrecognized labels."""
    try:
        return list(calendar).index(label)
    except ValueError:
        return None


def zero_value(column: str) -> Any:
    """Default cell value for a synthesized month, chosen by column name."""
    if column.startswith(config.COUNT_PREFIXES) or column in config.RESERVED_COUNT_COLUMNS:
        return 0
    if config.DURATION_MARKER in column:
        return PADDED_ZERO_DURATION
    if config.PERCENTAGE_MARKER in column:
        return "0.00"
    return 0


def _unit_sort_key(unit: Any) -> str:
    return "" if is_missing(unit) else str(unit)


def fill_missing_months(
    frame: pd.DataFrame,
    calendar: Sequence[str] = CANONICAL_CALENDAR,
) -> pd.DataFrame:
    """
    Complete a report to one row per (unit, canonical period).

    Activation requires both the period and the unit column; otherwise (or
    for an empty report) the frame is returned unchanged.

    - existing rows are kept as-is; for duplicate (unit, period) rows only
      the first one survives
    - rows whose period is not in the calendar are dropped
    - missing combinations get a synthesized row whose cells are defaulted
      by column name (see `zero_value`)
    """
    p, u = config.PERIOD_COL, config.UNIT_COL
    if frame.empty or p not in frame.columns or u not in frame.columns:
        return frame

    calendar = list(calendar)
    columns = list(frame.columns)

    # 1) First existing row per (unit, period) within the calendar
    existing = frame.loc[frame[p].isin(calendar)].drop_duplicates(subset=[u, p], keep="first")

    # 2) Every (unit, period) combination for the units observed
    units = pd.unique(frame[u])
    full = pd.DataFrame(
        [(unit, period) for unit in units for period in calendar],
        columns=[u, p],
        dtype=object,
    )
    missing = (
        full.merge(existing[[u, p]], how="left", on=[u, p], indicator=True)
        .query("_merge == 'left_only'")
    )

    # 3) Synthesize zero rows for the gaps
    synthesized = []
    for unit, period in zip(missing[u], missing[p]):
        row: Dict[str, Any] = {}
        for c in columns:
            if c == p:
                row[c] = period
            elif c == u:
                row[c] = unit
            else:
                row[c] = zero_value(c)
        synthesized.append(row)

    filled = pd.concat(
        [existing, pd.DataFrame(synthesized, columns=columns, dtype=object)],
        ignore_index=True,
    )

    # 4) Period-major, unit-minor order
    order = {label: i for i, label in enumerate(calendar)}
    filled["_period_idx"] = filled[p].map(order)
    filled["_unit_key"] = filled[u].map(_unit_sort_key)
    filled = (
        filled.sort_values(["_period_idx", "_unit_key"], kind="mergesort")
        .drop(columns=["_period_idx", "_unit_key"])
        .reset_index(drop=True)
    )
    return filled.astype(object)
