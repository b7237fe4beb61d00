"""Lenient value parsers shared by validation rules and normalization."""

import math
from datetime import date, datetime
from typing import Any, Optional

_DATE_FORMATS = (
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%B %d, %Y",
    "%b %d, %Y",
    "%B %d %Y",
    "%b %d %Y",
    "%d %B %Y",
    "%d %b %Y",
)


def is_blank(value: Any) -> bool:
    """True for None and the empty string."""
    return value is None or value == ""


def to_number(value: Any) -> Optional[float]:
    """
    Parse ints, floats and numeric strings ("  42 ", "98.6") to float.
    Returns None for blanks, booleans, non-numeric text and non-finite values.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def parse_blood_pressure(value: Any) -> tuple[Optional[float], Optional[float]]:
    """
    Split "systolic/diastolic" into two numbers.
    Missing or unparseable components come back as None; extra components are ignored.
    """
    if not isinstance(value, str):
        return None, None
    parts = value.split("/")
    systolic = to_number(parts[0])
    diastolic = to_number(parts[1]) if len(parts) > 1 else None
    return systolic, diastolic


def parse_visit_date(value: Any) -> Optional[date]:
    """Parse ISO dates/datetimes and a few common written formats."""
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        pass
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None
