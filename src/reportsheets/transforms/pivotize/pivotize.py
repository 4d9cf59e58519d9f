from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

import pandas as pd

from reportsheets.transforms import config
from reportsheets.transforms.durations import format_duration, parse_duration
from reportsheets.transforms.months import CANONICAL_CALENDAR, period_index
from reportsheets.transforms.values import is_missing, number_or_zero, to_fixed


class MetricKind(str, Enum):
    COUNT = "count"
    DURATION = "duration"
    AVERAGE_DURATION = "average_duration"
    PERCENTAGE = "percentage"


@dataclass
class PivotTable:
    """
    Period-by-unit comparison table for one metric.

    frame: index = period labels (display order) + TOTAL, columns = units
    (display order), every cell populated.
    """

    metric: str
    kind: Optional[MetricKind]
    frame: pd.DataFrame

    @property
    def title(self) -> str:
        return metric_title(self.metric)

    @property
    def units(self) -> List[Any]:
        return list(self.frame.columns)

    def to_rows(self) -> List[Dict[Any, Any]]:
        """Row records: spacer, title, header, one per period, totals."""
        label = config.PIVOT_LABEL_COL
        rows: List[Dict[Any, Any]] = [{}, {label: self.title}]
        rows.append({label: label, **{u: u for u in self.units}})
        for period, values in zip(self.frame.index, self.frame.itertuples(index=False, name=None)):
            rows.append({label: period, **dict(zip(self.units, values))})
        return rows


def metric_title(metric: str) -> str:
    return metric.replace("_", " ").upper()


def detect_metrics(frame: pd.DataFrame, metrics: Sequence[str] = config.KNOWN_METRICS) -> List[str]:
    """Known metrics present in the report (first-row columns), in `metrics` order."""
    return [m for m in metrics if m in frame.columns]


def order_units(units: Iterable[Any], preferred: Sequence[str] = config.PREFERRED_UNIT_ORDER) -> List[Any]:
    """Preferred units first (in their fixed order), then the others alphabetically."""
    distinct = [u for u in pd.unique(pd.Series(list(units), dtype=object)) if not is_missing(u)]
    head = [u for u in preferred if u in distinct]
    tail = sorted((u for u in distinct if u not in preferred), key=str)
    return head + tail


def order_periods(periods: Iterable[Any], calendar: Sequence[str] = CANONICAL_CALENDAR) -> List[Any]:
    """Calendar order for known labels; unknown labels follow in first-seen order."""
    distinct = [p for p in pd.unique(pd.Series(list(periods), dtype=object)) if not is_missing(p)]
    n = len(calendar)

    def key(label: Any) -> int:
        idx = period_index(label, calendar)
        return n if idx is None else idx

    return sorted(distinct, key=key)


def classify_metric(metric: str, sample: Any) -> MetricKind:
    """
    Infer the totals method from the metric name and one sample cell.

    - sample holds a ':'          -> duration (averaged for "Promedio_*" metrics)
    - name contains "Porcentaje"  -> percentage
    - otherwise                   -> count
    """
    if isinstance(sample, str) and ":" in sample:
        if metric.startswith(config.AVERAGE_METRIC_PREFIX):
            return MetricKind.AVERAGE_DURATION
        return MetricKind.DURATION
    if config.PERCENTAGE_MARKER in metric:
        return MetricKind.PERCENTAGE
    return MetricKind.COUNT


def compute_total(values: Sequence[Any], kind: MetricKind) -> Any:
    """
    Totals cell for one unit column.

    DURATION          sum of durations
    AVERAGE_DURATION  sum of durations / number of nonzero durations
                      (unweighted average of averages)
    PERCENTAGE        mean of strictly positive values, 2 decimals
    COUNT             numeric sum
    """
    if kind in (MetricKind.DURATION, MetricKind.AVERAGE_DURATION):
        seconds = [parse_duration(v) for v in values]
        total = sum(seconds)
        if kind == MetricKind.AVERAGE_DURATION:
            nonzero = sum(1 for s in seconds if s != 0)
            total = total / nonzero if nonzero else 0
        return format_duration(total)

    if kind == MetricKind.PERCENTAGE:
        positive = [n for n in (number_or_zero(v) for v in values) if n > 0]
        if not positive:
            return "0.00"
        return to_fixed(sum(positive) / len(positive))

    return sum(number_or_zero(v) for v in values)


def build_pivot_table(
    frame: pd.DataFrame,
    metric: str,
    *,
    kind: Optional[MetricKind] = None,
    units: Optional[Sequence[Any]] = None,
    periods: Optional[Sequence[Any]] = None,
) -> PivotTable:
    """
    Build the period-by-unit table for `metric`.

    Cells come from the first (period, unit) row of the report; missing
    combinations and null values become 0. The TOTAL row uses `kind` when
    given, otherwise each unit column is classified from its first period cell.
    """
    req = {config.PERIOD_COL, config.UNIT_COL, metric}
    missing = req - set(frame.columns)
    if missing:
        raise ValueError(f"report missing columns: {sorted(missing)}")

    p, u = config.PERIOD_COL, config.UNIT_COL
    if units is None:
        units = order_units(frame[u])
    if periods is None:
        periods = order_periods(frame[p])

    # 1) first value per (period, unit)
    lookup: Dict[tuple, Any] = {}
    for period, unit, value in zip(frame[p], frame[u], frame[metric]):
        lookup.setdefault((period, unit), value)

    def cell(period: Any, unit: Any) -> Any:
        value = lookup.get((period, unit))
        return 0 if is_missing(value) else value

    table = pd.DataFrame(
        [[cell(period, unit) for unit in units] for period in periods],
        index=pd.Index(list(periods), name=config.PIVOT_LABEL_COL, dtype=object),
        columns=list(units),
        dtype=object,
    )

    # 2) totals row
    totals = []
    for unit in units:
        column = table[unit].tolist()
        unit_kind = kind or classify_metric(metric, column[0] if column else None)
        totals.append(compute_total(column, unit_kind))
    table.loc[config.PIVOT_TOTAL_LABEL] = totals

    return PivotTable(metric=metric, kind=kind, frame=table)


def build_pivot_tables(
    frame: pd.DataFrame,
    logger=None,
    *,
    kinds: Optional[Mapping[str, MetricKind]] = None,
) -> List[PivotTable]:
    """
    One PivotTable per known metric present in the report.

    Reports without the period and unit columns, or without any known
    metric, produce no tables.
    """
    if frame.empty or config.PERIOD_COL not in frame.columns or config.UNIT_COL not in frame.columns:
        return []

    metrics = detect_metrics(frame)
    if not metrics:
        return []

    units = order_units(frame[config.UNIT_COL])
    periods = order_periods(frame[config.PERIOD_COL])
    if not units:
        return []
    kinds = kinds or {}

    tables = [
        build_pivot_table(frame, m, kind=kinds.get(m), units=units, periods=periods)
        for m in metrics
    ]
    if logger is not None:
        logger.info(f"Pivot tables built: {', '.join(metrics)}")
    return tables


def pivot_rows(tables: Iterable[PivotTable]) -> List[Dict[Any, Any]]:
    """Flatten tables into the row records consumed by the grid assembler."""
    rows: List[Dict[Any, Any]] = []
    for table in tables:
        rows.extend(table.to_rows())
    return rows
