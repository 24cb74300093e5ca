"""
Day view presenter.

Turns a date, its events and the real current date into a
:class:`~schedule_api.app.schemas.day.DayRead`.  "Next week" always
counts from the current date, not from the selected one.
"""

from datetime import date
from typing import Iterable

from schedule_api.app.core.dates import format_day, format_heading, format_short, shift_days
from schedule_api.app.schemas.day import DayNavigation, DayRead
from schedule_api.app.schemas.event import EventRead

FREE_DAY_MESSAGE = "You have a free day ahead!"


def empty_day_message(day: date, today: date) -> str:
    if day == today:
        return FREE_DAY_MESSAGE
    return f"No events planned for {format_short(day)}"


def navigation_for(day: date, today: date) -> DayNavigation:
    return DayNavigation(
        previous=format_day(shift_days(day, -1)),
        next=format_day(shift_days(day, 1)),
        today=format_day(today),
        tomorrow=format_day(shift_days(today, 1)),
        next_week=format_day(shift_days(today, 7)),
    )


def build_day_view(day: date, events: Iterable[EventRead], today: date) -> DayRead:
    events = list(events)
    return DayRead(
        date=format_day(day),
        heading=format_heading(day),
        is_today=day == today,
        is_past=day < today,
        events=events,
        empty_message=None if events else empty_day_message(day, today),
        navigation=navigation_for(day, today),
    )
