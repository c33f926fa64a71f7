"""
Calendar-day handling.

Every day key in the app is a ``datetime.date`` in the local time of the
running process. Naive datetimes are read as local wall-clock time, aware
ones are converted to local time first.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import List

from you_first.errors import InvalidInputError


def today() -> date:
    return date.today()


def day_key(value) -> date:
    """
    Normalize a date, datetime or ISO string to its local calendar day.

    Raises InvalidInputError for anything that is not a valid date.
    """
    # datetime is a subclass of date, so it has to be checked first
    if isinstance(value, datetime):
        if value != value:  # NaT
            raise InvalidInputError("Not a valid date: NaT")
        if value.tzinfo is not None:
            value = value.astimezone()
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as exc:
            raise InvalidInputError(f"Not a valid date: {value!r}") from exc
        return day_key(parsed)
    raise InvalidInputError(f"Not a valid date: {value!r}")


def iso_day(value) -> str:
    """
    'YYYY-MM-DD' for any value day_key() accepts.
    """
    return day_key(value).isoformat()


def daterange(start: date, end: date) -> List[date]:
    """
    Inclusive date range. Empty when start is after end.
    """
    days = []
    cur = start
    while cur <= end:
        days.append(cur)
        cur += timedelta(days=1)
    return days


def trailing_days(end: date, count: int) -> List[date]:
    """
    The `count` days ending at `end`, oldest first.
    """
    if count <= 0:
        return []
    return daterange(end - timedelta(days=count - 1), end)
