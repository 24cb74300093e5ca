"""
Pydantic models for event data.

These schemas define the structure of event data exchanged via the
API and the console form.  ``EventBase`` contains the shared fields and
the field rules; ``EventCreate`` is the payload for new events,
``EventRead`` adds the store‑assigned ``id`` and ``createdAt`` and
``EventUpdate`` carries a partial payload.

On the wire the time fields use camelCase names (``startTime``,
``endTime``, ``createdAt``); in Python they are snake_case.  Both
spellings are accepted on input.

Only presence is checked for ``date`` and the times.  Values that parse
as a date or a 24‑hour time are re‑emitted zero padded, so ``2024-6-1``
is stored as ``2024-06-01`` and ``9:00`` as ``09:00``; anything else is
kept as given.  Times are compared as strings, which is chronological
for zero padded ``HH:MM`` values.
"""

from typing import Any, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticCustomError

from schedule_api.app.core.dates import normalize_day, normalize_time
from schedule_api.app.core.errors import FieldError, ValidationError

TITLE_REQUIRED = "Title is required"
END_BEFORE_START = "End time must be after start time"

# Python attribute name -> wire name, for error locations.
WIRE_NAMES = {
    "start_time": "startTime",
    "end_time": "endTime",
    "created_at": "createdAt",
}


def _padded(normalize, value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    try:
        return normalize(value)
    except ValueError:
        return value


def _require_title(value: str) -> str:
    if not value:
        raise PydanticCustomError("title_required", TITLE_REQUIRED)
    return value


def _require_end_after_start(start: Optional[str], end: str) -> str:
    if start is not None and end <= start:
        raise PydanticCustomError("end_before_start", END_BEFORE_START)
    return end


class EventBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., examples=["Standup"])
    description: Optional[str] = Field(None, examples=["Daily sync with the team"])
    date: str = Field(..., examples=["2024-06-10"])
    start_time: str = Field(..., alias="startTime", examples=["09:00"])
    end_time: str = Field(..., alias="endTime", examples=["09:15"])

    @field_validator("title")
    @classmethod
    def title_not_empty(cls, value: str) -> str:
        return _require_title(value)

    @field_validator("date")
    @classmethod
    def pad_date(cls, value: str) -> str:
        return _padded(normalize_day, value)

    @field_validator("start_time")
    @classmethod
    def pad_start_time(cls, value: str) -> str:
        return _padded(normalize_time, value)

    @field_validator("end_time")
    @classmethod
    def end_after_start(cls, value: str, info: ValidationInfo) -> str:
        # start_time is declared first, so it is already in info.data
        # unless it failed validation itself.
        value = _padded(normalize_time, value)
        return _require_end_after_start(info.data.get("start_time"), value)


class EventCreate(EventBase):
    """Schema for creating an event."""
    pass


class EventRead(EventBase):
    """Schema for an event as stored."""

    id: str
    created_at: int = Field(..., alias="createdAt")

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)


class EventUpdate(BaseModel):
    """Schema for updating an event.

    All fields are optional; only provided fields will be updated.  The
    cross‑field time rule is checked here only when both times are
    present; the merged record is validated again before it is stored.
    """

    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None
    description: Optional[str] = None
    date: Optional[str] = None
    start_time: Optional[str] = Field(None, alias="startTime")
    end_time: Optional[str] = Field(None, alias="endTime")

    @field_validator("title")
    @classmethod
    def title_not_empty(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return _require_title(value)

    @field_validator("date")
    @classmethod
    def pad_date(cls, value: Optional[str]) -> Optional[str]:
        return _padded(normalize_day, value)

    @field_validator("start_time")
    @classmethod
    def pad_start_time(cls, value: Optional[str]) -> Optional[str]:
        return _padded(normalize_time, value)

    @field_validator("end_time")
    @classmethod
    def end_after_start(cls, value: Optional[str], info: ValidationInfo) -> Optional[str]:
        if value is None:
            return value
        value = _padded(normalize_time, value)
        return _require_end_after_start(info.data.get("start_time"), value)

    def changes(self) -> dict:
        """Return the explicitly provided fields keyed by attribute name.

        ``description`` may be cleared with ``None``; ``None`` for any
        other field means "leave unchanged".
        """
        provided = self.model_dump(exclude_unset=True)
        return {k: v for k, v in provided.items() if v is not None or k == "description"}


def to_field_errors(exc: PydanticValidationError) -> List[FieldError]:
    """Convert pydantic error entries to field errors keyed by wire name."""
    errors: List[FieldError] = []
    for entry in exc.errors():
        loc = entry.get("loc") or ()
        field = str(loc[0]) if loc else "__root__"
        errors.append(FieldError(WIRE_NAMES.get(field, field), entry.get("msg", "Invalid value")))
    return errors


def validate_event_input(payload: Union[EventCreate, Mapping[str, Any]]) -> EventCreate:
    """Validate a candidate event payload.

    Returns the normalized ``EventCreate`` or raises
    :class:`~schedule_api.app.core.errors.ValidationError` listing every
    offending field.  Has no side effects.
    """
    if isinstance(payload, EventCreate):
        return payload
    try:
        return EventCreate.model_validate(dict(payload))
    except PydanticValidationError as exc:
        raise ValidationError(to_field_errors(exc)) from exc


def validate_event_update(payload: Union[EventUpdate, Mapping[str, Any]]) -> EventUpdate:
    """Validate a partial payload; see :func:`validate_event_input`."""
    if isinstance(payload, EventUpdate):
        return payload
    try:
        return EventUpdate.model_validate(dict(payload))
    except PydanticValidationError as exc:
        raise ValidationError(to_field_errors(exc)) from exc
