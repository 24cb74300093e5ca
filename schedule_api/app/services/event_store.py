"""
Event store backends.

``EventStore`` is the persistence capability the rest of the
application depends on: list every event, fetch one, insert, update
and delete.  The store assigns ``id`` and ``createdAt`` on insert and
never changes them afterwards.  Backends report missing identifiers
with ``NotFoundError`` and any failure of the underlying storage with
``StoreUnavailableError``.

Two backends live here: ``SQLiteEventStore`` (the default) and
``InMemoryEventStore``.  An HTTP backend that talks to a running
Schedule API is provided by ``schedule_api_client.RemoteEventStore``.
"""

import logging
import sqlite3
import time
import uuid
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Callable, Dict, Iterator, List, Mapping, Optional

from schedule_api.app.core.config import settings
from schedule_api.app.core.db import get_cursor, get_database_path, init_db
from schedule_api.app.core.errors import NotFoundError, StoreUnavailableError
from schedule_api.app.schemas.event import EventCreate, EventRead

logger = logging.getLogger(__name__)

# Fields a caller may change through ``update``.  ``id`` and
# ``created_at`` are owned by the store.
UPDATABLE_FIELDS = ("title", "description", "date", "start_time", "end_time")

_COLUMNS = "id, title, description, date, start_time, end_time, created_at"


def new_event_id() -> str:
    return uuid.uuid4().hex


def now_ms() -> int:
    return int(time.time() * 1000)


def _clean_changes(changes: Mapping[str, object]) -> Dict[str, object]:
    return {k: v for k, v in changes.items() if k in UPDATABLE_FIELDS}


class EventStore(ABC):
    """Persistence capability for event records."""

    async def open(self) -> None:
        """Prepare the backend for use.  The default does nothing."""

    @abstractmethod
    async def get_all(self) -> List[EventRead]:
        """Return every stored event, unfiltered, in store order."""

    @abstractmethod
    async def get(self, event_id: str) -> EventRead:
        """Return one event or raise ``NotFoundError``."""

    @abstractmethod
    async def insert(self, payload: EventCreate) -> EventRead:
        """Assign ``id`` and ``createdAt``, persist and return the record."""

    @abstractmethod
    async def update(self, event_id: str, changes: Mapping[str, object]) -> EventRead:
        """Merge ``changes`` into an existing record and return it."""

    @abstractmethod
    async def delete(self, event_id: str) -> None:
        """Remove a record or raise ``NotFoundError``."""


class InMemoryEventStore(EventStore):
    """Dictionary backed store.  Data lives only as long as the process."""

    def __init__(
        self,
        clock: Callable[[], int] = now_ms,
        id_factory: Callable[[], str] = new_event_id,
    ) -> None:
        self._events: Dict[str, EventRead] = {}
        self._clock = clock
        self._id_factory = id_factory

    async def get_all(self) -> List[EventRead]:
        return list(self._events.values())

    async def get(self, event_id: str) -> EventRead:
        try:
            return self._events[event_id]
        except KeyError:
            raise NotFoundError(event_id) from None

    async def insert(self, payload: EventCreate) -> EventRead:
        event = EventRead(
            id=self._id_factory(),
            created_at=self._clock(),
            **payload.model_dump(),
        )
        self._events[event.id] = event
        return event

    async def update(self, event_id: str, changes: Mapping[str, object]) -> EventRead:
        existing = await self.get(event_id)
        updated = existing.model_copy(update=_clean_changes(changes))
        self._events[event_id] = updated
        return updated

    async def delete(self, event_id: str) -> None:
        if self._events.pop(event_id, None) is None:
            raise NotFoundError(event_id)


class SQLiteEventStore(EventStore):
    """Store events in the ``events`` table of a SQLite database.

    A new connection is opened for every operation and closed when the
    operation finishes.  Rows are returned in insertion (``rowid``)
    order.
    """

    def __init__(
        self,
        db_path: Optional[str] = None,
        clock: Callable[[], int] = now_ms,
        id_factory: Callable[[], str] = new_event_id,
    ) -> None:
        self.db_path = get_database_path(db_path)
        self._clock = clock
        self._id_factory = id_factory

    @contextmanager
    def _cursor(self) -> Iterator[sqlite3.Cursor]:
        try:
            with get_cursor(self.db_path) as cursor:
                yield cursor
        except sqlite3.Error as exc:
            logger.error("SQLite event store failure (%s): %s", self.db_path, exc)
            raise StoreUnavailableError(f"Event store unavailable: {exc}") from exc

    async def open(self) -> None:
        try:
            version = init_db(self.db_path)
        except sqlite3.Error as exc:
            raise StoreUnavailableError(f"Cannot initialise event store: {exc}") from exc
        logger.info("SQLite event store ready at %s (schema v%s)", self.db_path, version)

    async def get_all(self) -> List[EventRead]:
        with self._cursor() as cursor:
            rows = cursor.execute(f"SELECT {_COLUMNS} FROM events ORDER BY rowid").fetchall()
        return [EventRead.model_validate(dict(row)) for row in rows]

    async def get(self, event_id: str) -> EventRead:
        with self._cursor() as cursor:
            row = cursor.execute(
                f"SELECT {_COLUMNS} FROM events WHERE id = ?", (event_id,)
            ).fetchone()
        if not row:
            raise NotFoundError(event_id)
        return EventRead.model_validate(dict(row))

    async def insert(self, payload: EventCreate) -> EventRead:
        event = EventRead(
            id=self._id_factory(),
            created_at=self._clock(),
            **payload.model_dump(),
        )
        with self._cursor() as cursor:
            cursor.execute(
                """
                INSERT INTO events (id, title, description, date, start_time, end_time, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    event.id,
                    event.title,
                    event.description,
                    event.date,
                    event.start_time,
                    event.end_time,
                    event.created_at,
                ),
            )
        return event

    async def update(self, event_id: str, changes: Mapping[str, object]) -> EventRead:
        updates = _clean_changes(changes)
        with self._cursor() as cursor:
            exists = cursor.execute("SELECT id FROM events WHERE id = ?", (event_id,)).fetchone()
            if not exists:
                raise NotFoundError(event_id)
            if updates:
                # Column names come from UPDATABLE_FIELDS, never from input.
                assignments = ", ".join(f"{key} = ?" for key in updates)
                values = list(updates.values()) + [event_id]
                cursor.execute(f"UPDATE events SET {assignments} WHERE id = ?", tuple(values))
            row = cursor.execute(
                f"SELECT {_COLUMNS} FROM events WHERE id = ?", (event_id,)
            ).fetchone()
        return EventRead.model_validate(dict(row))

    async def delete(self, event_id: str) -> None:
        with self._cursor() as cursor:
            cursor.execute("DELETE FROM events WHERE id = ?", (event_id,))
            if cursor.rowcount == 0:
                raise NotFoundError(event_id)


def build_store(backend: Optional[str] = None) -> EventStore:
    """Create the store selected by ``settings.store_backend``."""
    backend = (backend or settings.store_backend).lower()
    if backend == "memory":
        return InMemoryEventStore()
    if backend == "sqlite":
        return SQLiteEventStore()
    raise ValueError(f"Unknown STORE_BACKEND {backend!r}; expected 'sqlite' or 'memory'")
