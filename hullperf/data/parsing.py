"""Cell-level parsing helpers shared by the loaders and the training pipeline."""

import math
from datetime import date, datetime
from typing import Any, Optional

_NULL_TOKENS = ("nan", "n/a", "-", "null", "none")


def safe_float(value: Any) -> Optional[float]:
    """Convert value to float, returning None for NaN/Infinity/non-numeric."""
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value or value.lower() in _NULL_TOKENS:
            return None
    try:
        val = float(value)
    except (ValueError, TypeError):
        return None

    if math.isnan(val) or math.isinf(val):
        return None
    return val


def safe_int(value: Any) -> Optional[int]:
    """Convert value to int. Integral floats ("3.0") are accepted, "3.5" is not."""
    val = safe_float(value)
    if val is None or not val.is_integer():
        return None
    return int(val)


def safe_str(value: Any) -> Optional[str]:
    """Convert value to stripped string, returning None for NaN/empty."""
    if value is None:
        return None
    if isinstance(value, float) and math.isnan(value):
        return None
    s = str(value).strip()
    return s if s else None


def parse_us_date(value: Any) -> Optional[date]:
    """
    Parse a month-first date such as "6/30/2023" (M/D/YYYY).

    Day-first values like "30/6/2023" fail the month range check and
    return None rather than being silently swapped.
    """
    text = safe_str(value)
    if text is None:
        return None

    parts = text.split("/")
    if len(parts) != 3:
        return None
    try:
        return date(int(parts[2].strip()), int(parts[0].strip()), int(parts[1].strip()))
    except ValueError:
        return None


def parse_event_date(value: Any) -> Optional[date]:
    """Date portion of an event timestamp ("2024-03-01 14:00:00" -> 2024-03-01)."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = safe_str(value)
    if text is None or len(text) < 10:
        return None
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None
