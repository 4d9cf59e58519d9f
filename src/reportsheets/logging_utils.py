# src/reportsheets/logging_utils.py
"""
Logging for the conversion run.

Progress lines ("Creating General.xlsx ...", "+ Added sheet ...") and
per-report failures go through the logger returned by `get_logger()`.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO, Union


def get_logger(
    name: str = "reportsheets",
    level: Union[int, str] = logging.INFO,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Return the conversion logger, writing bare messages to `stream` (stdout).

    Repeated calls reuse the handler already attached for the same stream.
    Level names are case-insensitive; unknown names fall back to INFO.
    """
    logger = logging.getLogger(name)
    stream = stream or sys.stdout

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger.setLevel(level)
    logger.propagate = False

    for h in logger.handlers:
        if isinstance(h, logging.StreamHandler) and h.stream is stream:
            h.setLevel(level)
            return logger

    handler = logging.StreamHandler(stream)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    return logger
