"""
Scalar helpers shared by the accumulation and pivot stages.

Report cells are raw JSON scalars (int, float, str, None) kept in
object-dtype frames, so missing cells may show up as either None or NaN.
A key that a row object does not carry at all is stored as `ABSENT`, which
reads as missing everywhere except in numeric coercion, where it is not a
number (unlike null, which counts as 0).
"""

from __future__ import annotations

import math
import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Union

import numpy as np
import pandas as pd


Number = Union[int, float]


class _Absent:
    """Cell of a key the row object did not carry."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __reduce__(self):
        return (_Absent, ())


ABSENT = _Absent()

# Numeric text accepted by JavaScript's Number(): signed decimal literals
# (with optional exponent) or Infinity, and unsigned 0x / 0o / 0b integers.
_DECIMAL_RE = re.compile(r"[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_PREFIXED_RE = re.compile(r"0(?:[xX](?P<hex>[0-9a-fA-F]+)|[oO](?P<oct>[0-7]+)|[bB](?P<bin>[01]+))")


def is_missing(value: Any) -> bool:
    """True for None, NaN and ABSENT cells (scalar check only)."""
    if value is None or value is ABSENT:
        return True
    if isinstance(value, (float, np.floating)):
        return bool(np.isnan(value))
    return value is pd.NA or value is pd.NaT


def _integral(value: float) -> Number:
    if math.isfinite(value) and value.is_integer():
        return int(value)
    return value


def parse_number_text(text: str) -> Number:
    """Numeric value of already-stripped, non-empty text; NaN when not a number."""
    if _DECIMAL_RE.fullmatch(text):
        return _integral(float(text))
    m = _PREFIXED_RE.fullmatch(text)
    if m is None:
        return math.nan
    if m.group("hex"):
        return int(m.group("hex"), 16)
    if m.group("oct"):
        return int(m.group("oct"), 8)
    return int(m.group("bin"), 2)


def to_number(value: Any) -> Number:
    """
    Numeric coercion for report cells.

    - absent keys are not numbers (NaN)
    - null cells and blank text count as 0
    - booleans count as 0/1
    - numbers are returned unchanged
    - text is parsed as a number; anything else yields NaN

    Integral results are returned as int so sums of counters stay integers.
    """
    if value is ABSENT:
        return math.nan
    if is_missing(value):
        return 0
    if isinstance(value, (bool, np.bool_)):
        return int(value)
    if isinstance(value, (int, np.integer)):
        return int(value)
    if isinstance(value, (float, np.floating)):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        return parse_number_text(text)
    return math.nan


def is_numeric(value: Any) -> bool:
    return not math.isnan(to_number(value))


def number_or_zero(value: Any) -> Number:
    """`to_number`, with non-numeric values contributing 0."""
    n = to_number(value)
    return 0 if math.isnan(n) else n


def to_fixed(value: Number, digits: int = 2) -> str:
    """Fixed-point text of the exact binary value; exact ties round half up."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    quantum = Decimal(1).scaleb(-digits)
    return str(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))
