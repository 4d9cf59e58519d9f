"""
Global configuration for reportsheets transformations.

This module defines *policy-level* constants used across transformation
pipelines (gap filling, accumulation rules, pivot tables, sheet naming).

These values are intentionally centralized to:
- make heuristics explicit and auditable
- avoid hard-coded magic strings scattered across modules
- allow future user overrides if needed

This module MUST NOT contain any computation logic.
"""

from __future__ import annotations


# =============================================================================
# Privileged columns
# =============================================================================

# Period key: a canonical month-year label or the accumulation label
PERIOD_COL = "Mes_Anio"

# Unit key: organizational unit name
UNIT_COL = "Nombre_Unidad"


# =============================================================================
# Canonical calendar
# =============================================================================

REPORT_YEAR = 2025

MONTH_NAMES = (
    "Enero",
    "Febrero",
    "Marzo",
    "Abril",
    "Mayo",
    "Junio",
    "Julio",
    "Agosto",
    "Septiembre",
    "Octubre",
    "Noviembre",
    "Diciembre",
)

ACCUMULATED_PREFIX = "Acumulado"


# =============================================================================
# Gap-fill defaults (by column name)
# =============================================================================

# Columns starting with one of these prefixes are counters (default 0)
COUNT_PREFIXES = ("Cantidad", "Total_Tickets")

# Bookkeeping columns the database driver leaks into result sets
RESERVED_COUNT_COLUMNS = {"insertId", "affectedRows"}

# Substring marking a duration column (default "00:00:00")
DURATION_MARKER = "Tiempo"

# Substring marking a percentage column (default "0.00")
PERCENTAGE_MARKER = "Porcentaje"


# =============================================================================
# Accumulation rules (tested against the upper-cased, extension-less name)
# =============================================================================

GENERIC_COUNT_MARKERS = ("MANTENIMIENTO", "TECNOLOGIA", "LOST_AND_FOUND")

GLITCHES_MARKER = "GLITCHES"

TICKETS_GENERAL_NAMES = {"TICKETS_GENERAL", "DATOS_GENERALES_UNIDAD_DEPARTAMENTO"}

GENERAL_DATA_PREFIX = "DATOS_GENERALES"

TAGS_REPORT_NAME = "ETIQUETAS_UNIDAD_DEPARTAMENTO"

# Columns used by the tickets-general strategy
TICKET_COUNT_COL = "Cantidad_Tickets"
PRODUCTIVE_TIME_COL = "Total_Tiempo_Productivo"
AVG_PRODUCTIVE_TIME_COL = "Promedio_Tiempo_Productivo"
AVG_ESTIMATED_TIME_COL = "Promedio_Tiempo_Estimado"
COMPLIANCE_PCT_COL = "Porcentaje_Cumplimiento"


# =============================================================================
# Pivot tables
# =============================================================================

# Metrics that get a period-by-unit comparison table, in output order
KNOWN_METRICS = (
    "Cantidad_Tickets",
    "Total_Tickets",
    "Total_Tiempo_Productivo",
    "Promedio_Tiempo_Productivo",
    "Promedio_Tiempo_Estimado",
    "Porcentaje_Cumplimiento",
)

# Units shown first, in this order; any other unit follows alphabetically
PREFERRED_UNIT_ORDER = ("Pierre", "Palacio", "Princess")

# Metrics averaged (not summed) in the totals row when duration-valued
AVERAGE_METRIC_PREFIX = "Promedio_"

PIVOT_LABEL_COL = "Mes"
PIVOT_TOTAL_LABEL = "TOTAL"


# =============================================================================
# Workbook / sheet naming
# =============================================================================

MAX_SHEET_NAME_LENGTH = 31

FORBIDDEN_SHEET_CHARS = r"[:\\/?*\[\]]"

REPORT_EXTENSION = ".json"

GENERAL_WORKBOOK_NAME = "General.xlsx"
