"""Human-readable rendering of byte counts and percentages."""

from __future__ import annotations

import math
from typing import Optional

SIZE_UNITS = ("B", "kB", "MB", "GB", "TB", "PB")
STEP = 1024


def bytes_to_size(value: float) -> str:
    """Format ``value`` bytes with binary scaling and a narrow unit suffix.

    >>> bytes_to_size(1536)
    '1.5kB'
    """
    if not math.isfinite(value):
        return ""

    magnitude = abs(value)
    unit_index = 0
    while magnitude >= STEP and unit_index < len(SIZE_UNITS) - 1:
        magnitude /= STEP
        unit_index += 1

    text = _trim_fraction(f"{magnitude:,.2f}")
    sign = "-" if value < 0 and text != "0" else ""
    return f"{sign}{text}{SIZE_UNITS[unit_index]}"


def format_percent(value: Optional[float]) -> str:
    if value is None or not math.isfinite(value):
        return "n/a"
    return f"{value:.2f}%"


def escape_pipes(text: str) -> str:
    return text.replace("|", "\\|")


def _trim_fraction(text: str) -> str:
    if "." not in text:
        return text
    return text.rstrip("0").rstrip(".")
