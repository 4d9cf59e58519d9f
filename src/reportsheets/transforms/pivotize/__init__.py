"""
pivotize package

Cross-unit comparison tables: for each known metric present in a report,
a period-by-unit matrix with a computed TOTAL row.

Public API:
    - build_pivot_tables
    - pivot_rows

Utility functions (advanced use):
    - build_pivot_table
    - classify_metric
    - compute_total
    - detect_metrics
    - order_periods
    - order_units
"""

from .pivotize import MetricKind, PivotTable, build_pivot_tables, pivot_rows

__all__ = [
    # main entry points
    "build_pivot_tables",
    "pivot_rows",
    "MetricKind",
    "PivotTable",
]
