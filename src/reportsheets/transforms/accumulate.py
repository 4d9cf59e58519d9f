"""
Rule-dispatched annual accumulation.

For every unit in a report, one "Acumulado" row summarizes the whole year.
Which columns are summed, and how, depends on the report: the report name
(not its content) selects a strategy through `AGGREGATION_RULES`, an ordered
table evaluated top-down where the first matching rule wins.

Strategies
----------
generic_counts
    Sum every column whose values are all numeric; leave text columns blank.
glitches
    Same as generic_counts, kept as its own case for glitch reports.
tickets_general
    Time-tracking reports: ticket counts, productive time, averages and the
    estimated/productive compliance percentage. The estimated total is
    reconstructed as sum(avg_estimated * ticket_count) per row, an
    approximation since only per-row averages are exported.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List

import pandas as pd

from reportsheets.transforms import config
from .durations import ZERO_DURATION, format_duration, parse_duration
from .months import ACCUMULATED_LABEL
from .values import ABSENT, is_missing, number_or_zero, to_fixed, to_number


class Strategy(str, Enum):
    GENERIC_COUNTS = "generic_counts"
    GLITCHES = "glitches"
    TICKETS_GENERAL = "tickets_general"


@dataclass(frozen=True)
class AggregationRule:
    name: str
    matches: Callable[[str], bool]
    strategy: Strategy


AGGREGATION_RULES = (
    AggregationRule(
        "maintenance_technology_lost_found",
        lambda key: any(marker in key for marker in config.GENERIC_COUNT_MARKERS),
        Strategy.GENERIC_COUNTS,
    ),
    AggregationRule(
        "glitches",
        lambda key: config.GLITCHES_MARKER in key,
        Strategy.GLITCHES,
    ),
    AggregationRule(
        "tickets_general",
        lambda key: key in config.TICKETS_GENERAL_NAMES or key.startswith(config.GENERAL_DATA_PREFIX),
        Strategy.TICKETS_GENERAL,
    ),
    AggregationRule(
        "tags_unit_department",
        lambda key: key == config.TAGS_REPORT_NAME,
        Strategy.GENERIC_COUNTS,
    ),
    AggregationRule(
        "fallback",
        lambda key: True,
        Strategy.GENERIC_COUNTS,
    ),
)

_EXTENSION_RE = re.compile(re.escape(config.REPORT_EXTENSION) + "$", re.IGNORECASE)


def report_key(report_name: str) -> str:
    """Rule-matching key: file extension stripped, upper-cased."""
    return _EXTENSION_RE.sub("", report_name).upper()


def select_rule(report_name: str) -> AggregationRule:
    key = report_key(report_name)
    for rule in AGGREGATION_RULES:
        if rule.matches(key):
            return rule
    # unreachable: the fallback rule always matches
    raise LookupError(f"No aggregation rule for report {report_name!r}")


# -----------------------------------------------------------------------------
# Strategies: each returns the aggregated columns for one unit group
# -----------------------------------------------------------------------------


def _values(group: pd.DataFrame, column: str) -> List[Any]:
    if column not in group.columns:
        return [None] * len(group)
    return group[column].tolist()


def accumulate_generic_counts(group: pd.DataFrame) -> Dict[str, Any]:
    """
    Sum all-numeric columns; a single non-numeric value blanks the whole column.

    Columns are the keys carried by the group's first row. A key absent from
    any other row of the group is not a number, so it blanks that column.
    """
    first = group.iloc[0]
    out: Dict[str, Any] = {}
    for c in group.columns:
        if c in (config.PERIOD_COL, config.UNIT_COL) or first[c] is ABSENT:
            continue
        numbers = [to_number(v) for v in group[c].tolist()]
        if any(math.isnan(n) for n in numbers):
            out[c] = ""
        else:
            out[c] = sum(numbers)
    return out


def accumulate_glitches(group: pd.DataFrame) -> Dict[str, Any]:
    return accumulate_generic_counts(group)


def accumulate_tickets_general(group: pd.DataFrame) -> Dict[str, Any]:
    counts = [number_or_zero(v) for v in _values(group, config.TICKET_COUNT_COL)]
    ticket_count = sum(counts)

    total_productive = sum(parse_duration(v) for v in _values(group, config.PRODUCTIVE_TIME_COL))

    # Weighted reconstruction: each row's average scaled by its own count
    total_estimated = sum(
        parse_duration(avg) * n
        for avg, n in zip(_values(group, config.AVG_ESTIMATED_TIME_COL), counts)
    )

    if ticket_count > 0:
        avg_productive = format_duration(total_productive / ticket_count)
        avg_estimated = format_duration(total_estimated / ticket_count)
    else:
        avg_productive = ZERO_DURATION
        avg_estimated = ZERO_DURATION

    if ticket_count > 0 and total_productive > 0:
        compliance = to_fixed(total_estimated / total_productive * 100)
    else:
        compliance = "0.00"

    return {
        config.TICKET_COUNT_COL: ticket_count,
        config.PRODUCTIVE_TIME_COL: format_duration(total_productive),
        config.AVG_PRODUCTIVE_TIME_COL: avg_productive,
        config.AVG_ESTIMATED_TIME_COL: avg_estimated,
        config.COMPLIANCE_PCT_COL: compliance,
    }


STRATEGIES: Dict[Strategy, Callable[[pd.DataFrame], Dict[str, Any]]] = {
    Strategy.GENERIC_COUNTS: accumulate_generic_counts,
    Strategy.GLITCHES: accumulate_glitches,
    Strategy.TICKETS_GENERAL: accumulate_tickets_general,
}


def _has_unit(value: Any) -> bool:
    return not is_missing(value) and value != ""


def accumulate_report(
    report_name: str,
    frame: pd.DataFrame,
    logger=None,
    *,
    label: str = ACCUMULATED_LABEL,
) -> List[Dict[str, Any]]:
    """
    Build one accumulation row per unit.

    Rows without a unit are dropped (no "unknown unit" accumulation).
    Units keep their first-appearance order.

    Returns
    -------
    list of dict
        {PERIOD_COL: label, UNIT_COL: unit, <aggregated columns>...}
    """
    if frame.empty or config.UNIT_COL not in frame.columns:
        return []

    rule = select_rule(report_name)
    if logger is not None:
        logger.info(f"Aggregating {report_key(report_name)} with rule '{rule.name}'")
    strategy = STRATEGIES[rule.strategy]

    units = frame[config.UNIT_COL]
    df = frame.loc[units.map(_has_unit).astype(bool)]

    rows: List[Dict[str, Any]] = []
    for unit, group in df.groupby(config.UNIT_COL, sort=False):
        summary: Dict[str, Any] = {config.PERIOD_COL: label, config.UNIT_COL: unit}
        summary.update(strategy(group))
        rows.append(summary)
    return rows
