"""
Business logic for events.

``EventService`` is the query and mutation layer shared by the REST
endpoints and the console controller.  Reads for a single day are
filtered and sorted here and cached per date; every successful
mutation invalidates the dates it touched so the next read re‑fetches
from the store.  Errors from validation and the store propagate
unchanged to the caller.
"""

import logging
from datetime import date
from typing import Any, List, Mapping, Optional, Union

from schedule_api.app.core.dates import format_day, parse_day
from schedule_api.app.schemas.event import (
    EventCreate,
    EventRead,
    EventUpdate,
    validate_event_input,
    validate_event_update,
)
from schedule_api.app.services.event_store import UPDATABLE_FIELDS, EventStore
from schedule_api.app.services.query_cache import DayQueryCache

logger = logging.getLogger(__name__)


class EventService:
    """Query and mutate events held by an :class:`EventStore`."""

    def __init__(self, store: EventStore, cache: Optional[DayQueryCache] = None) -> None:
        self.store = store
        self.cache = cache if cache is not None else DayQueryCache()

    async def list_all_events(self) -> List[EventRead]:
        """Return every event in store order."""
        return await self.store.get_all()

    async def list_events_for_day(self, day: Union[str, date]) -> List[EventRead]:
        """Return the events on ``day`` sorted by start time.

        Events sharing a start time keep their store order.  A day
        without events yields an empty list.
        """
        key = format_day(parse_day(day))
        cached = self.cache.get(key)
        if cached is not None:
            return cached
        events = [event for event in await self.store.get_all() if event.date == key]
        events.sort(key=lambda event: event.start_time)
        self.cache.put(key, events)
        return events

    async def get_event(self, event_id: str) -> EventRead:
        """Retrieve a single event.  Raises ``NotFoundError`` if absent."""
        return await self.store.get(event_id)

    async def create_event(self, payload: Union[EventCreate, Mapping[str, Any]]) -> EventRead:
        """Validate ``payload`` and insert it.

        Raises ``ValidationError`` before touching the store when the
        payload is invalid.
        """
        data = validate_event_input(payload)
        event = await self.store.insert(data)
        self.cache.invalidate(event.date)
        logger.info("Created event %s '%s' on %s", event.id, event.title, event.date)
        return event

    async def update_event(
        self, event_id: str, payload: Union[EventUpdate, Mapping[str, Any]]
    ) -> EventRead:
        """Apply a partial update to an existing event.

        Unspecified fields and ``createdAt`` are preserved.  The merged
        record must satisfy the same rules as a new event.  Both the old
        and the new date are invalidated, so an event moved to another
        day leaves the first day's results and joins the second's.
        """
        changes = validate_event_update(payload).changes()
        existing = await self.store.get(event_id)
        merged = existing.model_dump(include=set(UPDATABLE_FIELDS))
        merged.update(changes)
        validate_event_input(merged)
        updated = await self.store.update(event_id, changes)
        self.cache.invalidate(existing.date, updated.date)
        logger.info("Updated event %s (%s)", event_id, ", ".join(sorted(changes)) or "no changes")
        return updated

    async def delete_event(self, event_id: str) -> None:
        """Delete an event.  Raises ``NotFoundError`` if absent."""
        existing = await self.store.get(event_id)
        await self.store.delete(event_id)
        self.cache.invalidate(existing.date)
        logger.info("Deleted event %s from %s", event_id, existing.date)
