"""Plain‑text rendering of the day screen and the event form."""

from typing import Iterable, List

from schedule_api.app.core.dates import format_time_12h
from schedule_api.app.schemas.day import DayRead
from schedule_api.app.schemas.event import EventRead
from schedule_api.app.ui.controller import FORM_FIELDS, EventForm, Notification

_FIELD_LABELS = {
    "title": "Title",
    "description": "Description (optional)",
    "date": "Date",
    "startTime": "Start Time",
    "endTime": "End Time",
}


def format_time_range(event: EventRead) -> str:
    return f"{format_time_12h(event.start_time)} - {format_time_12h(event.end_time)}"


def render_day(view: DayRead) -> str:
    heading = view.heading + ("  [Today]" if view.is_today else "")
    lines: List[str] = [heading, "-" * len(heading)]
    if not view.events:
        lines.append("No events scheduled")
        lines.append(view.empty_message or "")
        lines.append("Type 'add' to add your first event.")
    for number, event in enumerate(view.events, start=1):
        marker = " (past)" if view.is_past else ""
        lines.append(f"{number:>2}. {event.title}{marker}")
        if event.description:
            lines.append(f"    {event.description}")
        lines.append(f"    {format_time_range(event)}")
    lines.append("")
    # The today shortcut is disabled while today is shown.
    today = "(today)" if view.is_today else "[today]"
    lines.append(f"[prev] [next]   {today} [tomorrow] [week]")
    return "\n".join(lines)


def render_form(form: EventForm) -> str:
    title = "Edit Event" if form.is_editing else "Create New Event"
    lines = [title, "=" * len(title)]
    width = max(len(label) for label in _FIELD_LABELS.values())
    for name in FORM_FIELDS:
        label = _FIELD_LABELS[name]
        line = f"  {label:<{width}}  {form.values.get(name, '')}"
        if name in form.errors:
            line += f"   ! {form.errors[name]}"
        lines.append(line)
    submit = "update" if form.is_editing else "create"
    actions = f"set <field> <value> | save ({submit}) | cancel"
    if form.is_editing:
        actions += " | delete"
    lines.append(actions)
    return "\n".join(lines)


def render_notifications(notifications: Iterable[Notification]) -> str:
    icons = {"success": "OK", "error": "!!"}
    return "\n".join(f"[{icons.get(n.level, '--')}] {n.message}" for n in notifications)
