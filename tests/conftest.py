"""
Shared fixtures and test configuration for the schedule tests.
"""

import itertools
from datetime import date
from typing import Callable, Dict, List

import pytest

from schedule_api.app.core.errors import StoreUnavailableError
from schedule_api.app.services.event_service import EventService
from schedule_api.app.services.event_store import InMemoryEventStore, SQLiteEventStore
from schedule_api.app.ui.controller import DayController, DayCursor

FIXED_TODAY = date(2024, 6, 10)
FIXED_NOW_MS = 1_718_000_000_000


def sequential_ids() -> Callable[[], str]:
    counter = itertools.count(1)
    return lambda: f"evt-{next(counter)}"


def event_payload(**overrides) -> Dict[str, str]:
    """Factory function to create a valid event payload using wire names."""
    payload = {
        "title": "Standup",
        "date": "2024-06-10",
        "startTime": "09:00",
        "endTime": "09:15",
    }
    payload.update(overrides)
    return payload


class RecordingStore(InMemoryEventStore):
    """In-memory store that records which operations were called."""

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.calls: List[str] = []

    async def get_all(self):
        self.calls.append("get_all")
        return await super().get_all()

    async def get(self, event_id):
        self.calls.append("get")
        return await super().get(event_id)

    async def insert(self, payload):
        self.calls.append("insert")
        return await super().insert(payload)

    async def update(self, event_id, changes):
        self.calls.append("update")
        return await super().update(event_id, changes)

    async def delete(self, event_id):
        self.calls.append("delete")
        return await super().delete(event_id)


class UnavailableStore(InMemoryEventStore):
    """Store whose every operation fails like a broken backend."""

    async def get_all(self):
        raise StoreUnavailableError("disk on fire")

    async def get(self, event_id):
        raise StoreUnavailableError("disk on fire")

    async def insert(self, payload):
        raise StoreUnavailableError("disk on fire")

    async def update(self, event_id, changes):
        raise StoreUnavailableError("disk on fire")

    async def delete(self, event_id):
        raise StoreUnavailableError("disk on fire")


@pytest.fixture
def memory_store() -> RecordingStore:
    return RecordingStore(clock=lambda: FIXED_NOW_MS, id_factory=sequential_ids())


@pytest.fixture
async def sqlite_store(tmp_path) -> SQLiteEventStore:
    store = SQLiteEventStore(
        str(tmp_path / "schedule.db"), clock=lambda: FIXED_NOW_MS, id_factory=sequential_ids()
    )
    await store.open()
    return store


@pytest.fixture(params=["memory", "sqlite"])
async def store(request, tmp_path):
    """Every store backend, so the capability contract is checked on each."""
    if request.param == "memory":
        return InMemoryEventStore(clock=lambda: FIXED_NOW_MS, id_factory=sequential_ids())
    sqlite = SQLiteEventStore(
        str(tmp_path / "contract.db"), clock=lambda: FIXED_NOW_MS, id_factory=sequential_ids()
    )
    await sqlite.open()
    return sqlite


@pytest.fixture
def service(memory_store) -> EventService:
    return EventService(memory_store)


@pytest.fixture
def controller(service) -> DayController:
    cursor = DayCursor(today_provider=lambda: FIXED_TODAY)
    return DayController(service, cursor, default_start_time="09:00", default_end_time="10:00")
