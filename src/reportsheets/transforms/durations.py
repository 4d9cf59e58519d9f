"""
Clock-duration codec.

Report queries export durations as text (``H:MM:SS``, ``HH:MM:SS`` or
``HHHH:MM:SS`` with an unbounded hour component, optionally with fractional
seconds such as ``01:33:11.493717``). Every time-based calculation converts
them to seconds, works on floats and renders the result back with
`format_duration`.

Malformed input is never an error: it reads as zero seconds.
"""

from __future__ import annotations

import math
import re
from typing import Any


# Aggregation default for "no time recorded" (unpadded hour)
ZERO_DURATION = "0:00:00"

# Gap-fill default for a synthesized month (padded hour)
PADDED_ZERO_DURATION = "00:00:00"

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_LEADING_REAL = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def _leading_int(text: str) -> int:
    m = _LEADING_INT.match(text)
    return int(m.group(1)) if m else 0


def _leading_real(text: str) -> float:
    m = _LEADING_REAL.match(text)
    return float(m.group(1)) if m else 0.0


def parse_duration(text: Any) -> float:
    """
    Convert ``H:MM:SS`` text to seconds.

    Hours and minutes are read as leading integers, seconds as a leading real
    number; any component that does not parse counts as 0. Returns 0 for
    None, non-string values and text with fewer than two ``:`` parts.
    """
    if not text or not isinstance(text, str):
        return 0
    parts = text.split(":")
    if len(parts) < 2:
        return 0

    hours = _leading_int(parts[0])
    minutes = _leading_int(parts[1])
    seconds = _leading_real(parts[2]) if len(parts) > 2 else 0.0

    return hours * 3600 + minutes * 60 + seconds


def format_duration(total_seconds: float) -> str:
    """Render seconds as ``H:MM:SS`` (hours unpadded, sub-second part floored away)."""
    hours = math.floor(total_seconds / 3600)
    remainder = total_seconds % 3600
    minutes = math.floor(remainder / 60)
    seconds = math.floor(remainder % 60)
    return f"{hours}:{minutes:02d}:{seconds:02d}"
