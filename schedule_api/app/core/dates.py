"""
Date and time helpers.

Events store their day as an ISO date string (``YYYY-MM-DD``) and their
times as zero padded 24‑hour ``HH:MM`` strings.  These helpers convert
between those strings and ``datetime`` objects and produce the labels
shown by the day view.  All values are naive local dates and times.
"""

from datetime import date, datetime, timedelta
from typing import Union

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"


def parse_day(value: Union[str, date]) -> date:
    """Parse an ISO date string; ``date`` instances are returned unchanged."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(value.strip(), DATE_FORMAT).date()


def format_day(day: date) -> str:
    return day.strftime(DATE_FORMAT)


def shift_days(day: date, days: int) -> date:
    return day + timedelta(days=days)


def format_heading(day: date) -> str:
    """``Monday, June 10, 2024``"""
    return f"{day.strftime('%A, %B')} {day.day}, {day.year}"


def format_short(day: date) -> str:
    """``June 10``"""
    return f"{day.strftime('%B')} {day.day}"


def format_time_12h(value: str) -> str:
    """Render an ``HH:MM`` string as ``9:00 AM``.

    Strings that do not parse are returned unchanged.
    """
    try:
        parsed = datetime.strptime(value, TIME_FORMAT)
    except ValueError:
        return value
    hour = parsed.hour % 12 or 12
    suffix = "AM" if parsed.hour < 12 else "PM"
    return f"{hour}:{parsed.minute:02d} {suffix}"


def normalize_day(value: str) -> str:
    """Re-emit a date string zero padded (``2024-6-1`` -> ``2024-06-01``).

    Raises ``ValueError`` when ``value`` is not a date.
    """
    return format_day(parse_day(value))


def normalize_time(value: str) -> str:
    """Re-emit a time string zero padded (``9:5`` -> ``09:05``).

    Raises ``ValueError`` when ``value`` is not a 24‑hour time.
    """
    return datetime.strptime(value.strip(), TIME_FORMAT).strftime(TIME_FORMAT)
