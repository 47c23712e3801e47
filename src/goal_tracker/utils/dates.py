"""Date coercion helpers shared by the models and the engine."""

from datetime import date, datetime
from typing import Any, Optional


def to_date(value: Any) -> date:
    """
    Coerce a date, datetime or ISO string to a day-granularity date.

    Time of day is discarded. Raises ValueError for anything else.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            return datetime.fromisoformat(text).date()
    raise ValueError(f"Cannot interpret {value!r} as a date")


def parse_optional_datetime(value: Any) -> Optional[datetime]:
    """Parse an ISO datetime string; passes datetimes through."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)
