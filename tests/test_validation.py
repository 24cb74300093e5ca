"""Unit tests for the event payload rules."""

import pytest

from schedule_api.app.core.errors import ValidationError
from schedule_api.app.schemas.event import (
    END_BEFORE_START,
    TITLE_REQUIRED,
    EventUpdate,
    validate_event_input,
    validate_event_update,
)

from conftest import event_payload


def test_valid_payload_is_normalized():
    event = validate_event_input(event_payload(description="Daily sync"))
    assert event.title == "Standup"
    assert event.description == "Daily sync"
    assert event.date == "2024-06-10"
    assert event.start_time == "09:00"
    assert event.end_time == "09:15"


def test_snake_case_names_are_accepted():
    event = validate_event_input(
        {"title": "Lunch", "date": "2024-06-10", "start_time": "12:00", "end_time": "13:00"}
    )
    assert event.start_time == "12:00"
    assert event.model_dump(by_alias=True)["endTime"] == "13:00"


def test_description_is_optional():
    assert validate_event_input(event_payload()).description is None


def test_empty_title_is_rejected_on_title():
    with pytest.raises(ValidationError) as excinfo:
        validate_event_input(event_payload(title=""))
    assert excinfo.value.by_field() == {"title": TITLE_REQUIRED}


@pytest.mark.parametrize("start, end", [("10:00", "09:00"), ("10:00", "10:00")])
def test_end_not_after_start_is_rejected_on_end_time(start, end):
    with pytest.raises(ValidationError) as excinfo:
        validate_event_input(event_payload(startTime=start, endTime=end))
    assert excinfo.value.by_field() == {"endTime": END_BEFORE_START}


def test_missing_fields_are_reported_by_wire_name():
    with pytest.raises(ValidationError) as excinfo:
        validate_event_input({"title": "No times", "date": "2024-06-10"})
    assert set(excinfo.value.by_field()) == {"startTime", "endTime"}


def test_all_offending_fields_are_reported_together():
    with pytest.raises(ValidationError) as excinfo:
        validate_event_input(event_payload(title="", startTime="11:00", endTime="10:00"))
    assert set(excinfo.value.by_field()) == {"title", "endTime"}


@pytest.mark.parametrize(
    "title, start, end, valid",
    [
        ("A", "08:00", "08:01", True),
        ("A", "23:58", "23:59", True),
        ("A", "00:00", "00:00", False),
        ("", "08:00", "09:00", False),
        (" ", "08:00", "09:00", True),
        ("A", "09:30", "09:05", False),
    ],
)
def test_accepted_iff_title_present_and_start_before_end(title, start, end, valid):
    payload = event_payload(title=title, startTime=start, endTime=end)
    if valid:
        validate_event_input(payload)
    else:
        with pytest.raises(ValidationError):
            validate_event_input(payload)


def test_partial_update_checks_times_only_when_both_present():
    assert validate_event_update({"endTime": "08:00"}).changes() == {"end_time": "08:00"}
    with pytest.raises(ValidationError) as excinfo:
        validate_event_update({"startTime": "10:00", "endTime": "09:00"})
    assert "endTime" in excinfo.value.by_field()


def test_partial_update_rejects_empty_title():
    with pytest.raises(ValidationError):
        validate_event_update({"title": ""})


def test_update_changes_only_contain_provided_fields():
    update = EventUpdate.model_validate({"title": "Renamed", "description": None})
    assert update.changes() == {"title": "Renamed", "description": None}


def test_unpadded_date_and_times_are_stored_padded():
    event = validate_event_input(event_payload(date="2024-6-1", startTime="9:00", endTime="10:30"))
    assert (event.date, event.start_time, event.end_time) == ("2024-06-01", "09:00", "10:30")

    update = validate_event_update({"date": "2024-6-2", "endTime": "9:45"})
    assert update.changes() == {"date": "2024-06-02", "end_time": "09:45"}


def test_unparsable_date_is_kept_as_given():
    assert validate_event_input(event_payload(date="someday")).date == "someday"
