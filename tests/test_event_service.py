"""Tests for the query and mutation layer."""

from datetime import date

import pytest

from schedule_api.app.core.errors import NotFoundError, ValidationError
from schedule_api.app.services.event_service import EventService
from schedule_api.app.services.query_cache import DayQueryCache

from conftest import FIXED_NOW_MS, event_payload


async def test_standup_scenario(service):
    created = await service.create_event(event_payload())
    events = await service.list_events_for_day("2024-06-10")
    assert len(events) == 1
    stored = events[0]
    assert stored.id == created.id
    assert stored.created_at == FIXED_NOW_MS
    assert stored.model_dump(by_alias=True) == {
        "id": created.id,
        "title": "Standup",
        "description": None,
        "date": "2024-06-10",
        "startTime": "09:00",
        "endTime": "09:15",
        "createdAt": FIXED_NOW_MS,
    }


async def test_invalid_payload_never_reaches_the_store(service, memory_store):
    with pytest.raises(ValidationError) as excinfo:
        await service.create_event(event_payload(startTime="10:00", endTime="09:00"))
    assert list(excinfo.value.by_field()) == ["endTime"]
    assert memory_store.calls == []


async def test_day_query_filters_and_sorts_by_start_time(service):
    await service.create_event(event_payload(title="Lunch", startTime="12:00", endTime="13:00"))
    await service.create_event(event_payload(title="Other day", date="2024-06-11"))
    await service.create_event(event_payload(title="Standup", startTime="09:00", endTime="09:15"))
    await service.create_event(event_payload(title="Gym", startTime="07:30", endTime="08:30"))

    events = await service.list_events_for_day("2024-06-10")
    assert [e.title for e in events] == ["Gym", "Standup", "Lunch"]
    assert await service.list_events_for_day("2024-06-12") == []


async def test_equal_start_times_keep_store_order(service):
    for title in ("first", "second", "third"):
        await service.create_event(event_payload(title=title, startTime="10:00", endTime="11:00"))
    await service.create_event(event_payload(title="early", startTime="08:00", endTime="09:00"))
    events = await service.list_events_for_day("2024-06-10")
    assert [e.title for e in events] == ["early", "first", "second", "third"]


async def test_overlapping_events_are_allowed(service):
    await service.create_event(event_payload(title="A", startTime="09:00", endTime="11:00"))
    await service.create_event(event_payload(title="B", startTime="10:00", endTime="12:00"))
    assert len(await service.list_events_for_day("2024-06-10")) == 2


async def test_created_event_appears_exactly_once_after_cached_read(service):
    assert await service.list_events_for_day("2024-06-10") == []
    created = await service.create_event(event_payload())
    events = await service.list_events_for_day("2024-06-10")
    assert [e.id for e in events] == [created.id]


async def test_day_reads_are_cached_until_a_mutation(service, memory_store):
    await service.list_events_for_day("2024-06-10")
    await service.list_events_for_day("2024-06-10")
    assert memory_store.calls.count("get_all") == 1

    await service.create_event(event_payload())
    await service.list_events_for_day("2024-06-10")
    assert memory_store.calls.count("get_all") == 2


async def test_updating_date_moves_event_between_days(service):
    created = await service.create_event(event_payload())
    assert len(await service.list_events_for_day("2024-06-10")) == 1
    assert await service.list_events_for_day("2024-06-11") == []

    updated = await service.update_event(created.id, {"date": "2024-06-11"})
    assert updated.created_at == created.created_at
    assert updated.title == created.title
    assert await service.list_events_for_day("2024-06-10") == []
    assert [e.id for e in await service.list_events_for_day("2024-06-11")] == [created.id]


async def test_update_validates_the_merged_record(service, memory_store):
    created = await service.create_event(event_payload())
    with pytest.raises(ValidationError) as excinfo:
        await service.update_event(created.id, {"endTime": "08:00"})
    assert "endTime" in excinfo.value.by_field()
    assert "update" not in memory_store.calls


async def test_delete_removes_event_and_repeats_fail(service):
    created = await service.create_event(event_payload())
    assert len(await service.list_events_for_day("2024-06-10")) == 1
    await service.delete_event(created.id)
    assert await service.list_events_for_day("2024-06-10") == []
    with pytest.raises(NotFoundError):
        await service.delete_event(created.id)
    with pytest.raises(NotFoundError):
        await service.update_event(created.id, {"title": "again"})


async def test_day_can_be_given_as_date(service):
    await service.create_event(event_payload())
    assert len(await service.list_events_for_day(date(2024, 6, 10))) == 1


async def test_works_on_sqlite_without_cache(sqlite_store):
    service = EventService(sqlite_store, DayQueryCache(enabled=False))
    created = await service.create_event(event_payload(description="db"))
    assert (await service.get_event(created.id)).description == "db"
    await service.update_event(created.id, {"date": "2024-06-12"})
    assert [e.id for e in await service.list_events_for_day("2024-06-12")] == [created.id]
    assert len(await service.list_all_events()) == 1
