"""
Day controller: date cursor, event form and notifications.

The controller owns the state of the schedule screen:

* a :class:`DayCursor` over the selected date;
* an :class:`EventForm` whose mode is either :class:`CreateMode`
  (blank defaults) or :class:`EditMode` holding a snapshot of the event
  being edited;
* the events of the selected day and a queue of user notifications.

All store access goes through :class:`EventService`.  Failures never
escape the controller: they become error notifications (or inline field
errors for validation) and the user re‑attempts the action.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Dict, List, Optional, Union

from schedule_api.app.core.config import settings
from schedule_api.app.core.dates import format_day, normalize_day, normalize_time, parse_day, shift_days
from schedule_api.app.core.errors import NotFoundError, StoreUnavailableError, ValidationError
from schedule_api.app.schemas.day import DayRead
from schedule_api.app.schemas.event import EventRead
from schedule_api.app.services.event_service import EventService
from schedule_api.app.ui.day_view import build_day_view

logger = logging.getLogger(__name__)

FORM_FIELDS = ("title", "description", "date", "startTime", "endTime")

MSG_CREATED = "Event created successfully!"
MSG_UPDATED = "Event updated successfully!"
MSG_DELETED = "Event deleted successfully!"
MSG_NOT_FOUND = "This event no longer exists."
MSG_STORE_DOWN = "Could not reach the event store. Please try again."
MSG_UNEXPECTED = "Something went wrong. Please try again."

DATE_FORMAT_HINT = "Enter the date as YYYY-MM-DD"
TIME_FORMAT_HINT = "Enter the time as HH:MM (24-hour)"

# Form fields filled from a free text line instead of a picker.
_FIELD_FORMATS = {
    "date": (normalize_day, DATE_FORMAT_HINT),
    "startTime": (normalize_time, TIME_FORMAT_HINT),
    "endTime": (normalize_time, TIME_FORMAT_HINT),
}


@dataclass(frozen=True)
class CreateMode:
    """The form creates a new event."""


@dataclass(frozen=True)
class EditMode:
    """The form edits ``event``; the snapshot is taken when the form opens."""

    event: EventRead


FormMode = Union[CreateMode, EditMode]


@dataclass(frozen=True)
class Notification:
    level: str  # "success" or "error"
    message: str


class DayCursor:
    """The selected date plus the navigation shortcuts."""

    def __init__(
        self,
        selected: Optional[date] = None,
        today_provider: Callable[[], date] = date.today,
    ) -> None:
        self._today_provider = today_provider
        self.selected = selected or today_provider()

    def today(self) -> date:
        return self._today_provider()

    @property
    def is_today(self) -> bool:
        return self.selected == self.today()

    @property
    def is_past(self) -> bool:
        return self.selected < self.today()

    def previous_day(self) -> date:
        self.selected = shift_days(self.selected, -1)
        return self.selected

    def next_day(self) -> date:
        self.selected = shift_days(self.selected, 1)
        return self.selected

    def go_today(self) -> date:
        self.selected = self.today()
        return self.selected

    def go_tomorrow(self) -> date:
        self.selected = shift_days(self.today(), 1)
        return self.selected

    def go_next_week(self) -> date:
        # Counted from the real current date, not from the cursor.
        self.selected = shift_days(self.today(), 7)
        return self.selected

    def go_to(self, day: Union[str, date]) -> date:
        self.selected = parse_day(day)
        return self.selected


@dataclass
class EventForm:
    """Field values and inline errors of the create/edit form."""

    mode: FormMode = field(default_factory=CreateMode)
    values: Dict[str, str] = field(default_factory=dict)
    errors: Dict[str, str] = field(default_factory=dict)
    is_open: bool = False

    @property
    def is_editing(self) -> bool:
        return isinstance(self.mode, EditMode)

    def open_create(self, day: date, start_time: str, end_time: str) -> None:
        self.mode = CreateMode()
        self.values = {
            "title": "",
            "description": "",
            "date": format_day(day),
            "startTime": start_time,
            "endTime": end_time,
        }
        self.errors = {}
        self.is_open = True

    def open_edit(self, event: EventRead) -> None:
        self.mode = EditMode(event)
        self.values = {
            "title": event.title,
            "description": event.description or "",
            "date": event.date,
            "startTime": event.start_time,
            "endTime": event.end_time,
        }
        self.errors = {}
        self.is_open = True

    def close(self) -> None:
        self.mode = CreateMode()
        self.values = {}
        self.errors = {}
        self.is_open = False

    def set_field(self, name: str, value: str) -> None:
        """Set a field, zero padding dates and times.

        A date or time that does not parse is kept as typed and gets an
        inline error.
        """
        if name not in FORM_FIELDS:
            raise KeyError(name)
        self.values[name] = value
        self.errors.pop(name, None)
        error = self._normalize(name)
        if error:
            self.errors[name] = error

    def _normalize(self, name: str) -> Optional[str]:
        rule = _FIELD_FORMATS.get(name)
        if rule is None:
            return None
        normalize, hint = rule
        try:
            self.values[name] = normalize(self.values.get(name, ""))
        except ValueError:
            return hint
        return None

    def format_errors(self) -> Dict[str, str]:
        """Errors for date and time fields that do not parse."""
        errors = {}
        for name in _FIELD_FORMATS:
            error = self._normalize(name)
            if error:
                errors[name] = error
        return errors

    def payload(self) -> Dict[str, Optional[str]]:
        values: Dict[str, Optional[str]] = dict(self.values)
        if not (values.get("description") or "").strip():
            values["description"] = None
        return values


class DayController:
    """Drive the schedule screen on top of an :class:`EventService`."""

    def __init__(
        self,
        service: EventService,
        cursor: Optional[DayCursor] = None,
        default_start_time: Optional[str] = None,
        default_end_time: Optional[str] = None,
    ) -> None:
        self.service = service
        self.cursor = cursor or DayCursor()
        self.form = EventForm()
        self.events: List[EventRead] = []
        self.notifications: List[Notification] = []
        self.default_start_time = default_start_time or settings.default_start_time
        self.default_end_time = default_end_time or settings.default_end_time

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------
    async def refresh(self) -> List[EventRead]:
        """Load the selected day's events."""
        try:
            self.events = await self.service.list_events_for_day(self.cursor.selected)
        except Exception as exc:
            self.events = []
            self._notify_failure(exc)
        return self.events

    def view(self) -> DayRead:
        return build_day_view(self.cursor.selected, self.events, self.cursor.today())

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    async def previous_day(self) -> None:
        self.cursor.previous_day()
        await self.refresh()

    async def next_day(self) -> None:
        self.cursor.next_day()
        await self.refresh()

    async def go_today(self) -> None:
        self.cursor.go_today()
        await self.refresh()

    async def go_tomorrow(self) -> None:
        self.cursor.go_tomorrow()
        await self.refresh()

    async def go_next_week(self) -> None:
        self.cursor.go_next_week()
        await self.refresh()

    async def go_to(self, day: Union[str, date]) -> None:
        self.cursor.go_to(day)
        await self.refresh()

    # ------------------------------------------------------------------
    # Form
    # ------------------------------------------------------------------
    def open_create_form(self) -> None:
        self.form.open_create(self.cursor.selected, self.default_start_time, self.default_end_time)

    def open_edit_form(self, event: Union[EventRead, int]) -> EventRead:
        """Open the form for ``event`` or for the event at a list position (1‑based)."""
        if isinstance(event, int):
            if not 1 <= event <= len(self.events):
                raise IndexError(f"No event number {event} on this day")
            event = self.events[event - 1]
        self.form.open_edit(event)
        return event

    def close_form(self) -> None:
        self.form.close()

    async def submit(self) -> bool:
        """Validate and save the form.

        Returns ``True`` when the event was stored.  Validation failures
        are kept on the form and do not reach the store.
        """
        if not self.form.is_open:
            return False
        format_errors = self.form.format_errors()
        if format_errors:
            self.form.errors = format_errors
            return False
        mode = self.form.mode
        try:
            if isinstance(mode, EditMode):
                await self.service.update_event(mode.event.id, self.form.payload())
                message = MSG_UPDATED
            else:
                await self.service.create_event(self.form.payload())
                message = MSG_CREATED
        except ValidationError as exc:
            self.form.errors = exc.by_field()
            return False
        except Exception as exc:
            self._notify_failure(exc)
            return False
        self.form.close()
        self._notify("success", message)
        await self.refresh()
        return True

    async def delete_editing_event(self) -> bool:
        """Delete the event being edited and close the form."""
        mode = self.form.mode
        if not isinstance(mode, EditMode):
            return False
        self.form.close()
        try:
            await self.service.delete_event(mode.event.id)
        except Exception as exc:
            self._notify_failure(exc)
            await self.refresh()
            return False
        self._notify("success", MSG_DELETED)
        await self.refresh()
        return True

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------
    def drain_notifications(self) -> List[Notification]:
        pending, self.notifications = self.notifications, []
        return pending

    def _notify(self, level: str, message: str) -> None:
        self.notifications.append(Notification(level, message))

    def _notify_failure(self, exc: Exception) -> None:
        if isinstance(exc, NotFoundError):
            logger.warning("%s", exc)
            self._notify("error", MSG_NOT_FOUND)
        elif isinstance(exc, StoreUnavailableError):
            logger.error("Event store unavailable: %s", exc)
            self._notify("error", MSG_STORE_DOWN)
        else:
            logger.exception("Unexpected error in day controller")
            self._notify("error", MSG_UNEXPECTED)
