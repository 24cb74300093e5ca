"""
Domain errors shared by the stores, services, API and controller.

Every error is terminal for the action that triggered it: nothing in
the application retries.  ``ValidationError`` carries field‑scoped
messages keyed by the wire field names (``title``, ``endTime`` ...).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List


class ScheduleError(Exception):
    """Base class for all domain errors."""


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


class ValidationError(ScheduleError):
    """Raised when an event payload breaks one or more field rules."""

    def __init__(self, errors: Iterable[FieldError]) -> None:
        self.errors: List[FieldError] = list(errors)
        summary = "; ".join(f"{e.field}: {e.message}" for e in self.errors)
        super().__init__(summary or "Invalid event")

    def by_field(self) -> Dict[str, str]:
        """Return the first message for each offending field."""
        messages: Dict[str, str] = {}
        for error in self.errors:
            messages.setdefault(error.field, error.message)
        return messages

    def to_detail(self) -> List[Dict[str, str]]:
        return [{"field": e.field, "message": e.message} for e in self.errors]


class NotFoundError(ScheduleError):
    """Raised when an event identifier does not exist in the store."""

    def __init__(self, event_id: str) -> None:
        self.event_id = event_id
        super().__init__(f"Event {event_id} not found")


class StoreUnavailableError(ScheduleError):
    """Raised for any failure of the underlying event store."""
