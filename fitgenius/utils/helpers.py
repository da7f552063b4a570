"""Helper utility functions."""

import math
from datetime import date, datetime
from typing import Any, Optional


def to_number(value: Any) -> float:
    """Coerce a loosely typed numeric value to float.

    Absent, non-numeric, NaN and infinite values become 0.0. Numeric strings
    ("42", " 3.5 ") are parsed.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return 0.0
    else:
        try:
            number = float(value)
        except (TypeError, ValueError):
            return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(math.floor(value + 0.5))


def parse_datetime(value: Any) -> Optional[datetime]:
    """Parse ISO strings, dates and datetimes; returns None when unparseable."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, datetime.min.time())
    if isinstance(value, str) and value.strip():
        try:
            return datetime.fromisoformat(value.strip().replace('Z', '+00:00'))
        except ValueError:
            return None
    return None


def local_day(value: Any) -> Optional[date]:
    """Calendar day of a timestamp in local time, ignoring time-of-day.

    Aware datetimes are converted to the local timezone first; naive ones are
    taken as already local.
    """
    parsed = parse_datetime(value)
    if parsed is None:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone()
    return parsed.date()


def get_field(obj: Any, name: str, default: Any = None) -> Any:
    """Read ``name`` from a mapping or an attribute-bearing object."""
    if isinstance(obj, dict):
        return obj.get(name, default)
    return getattr(obj, name, default)
