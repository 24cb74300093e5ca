"""
Event endpoints for API v1.

These routes provide CRUD operations for events.  Listing accepts an
optional ``date`` filter which returns that day's events sorted by
start time; without it every stored event is returned in store order.
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from schedule_api.app.api.deps import get_event_service, http_error
from schedule_api.app.core.errors import ScheduleError
from schedule_api.app.schemas.event import EventCreate, EventRead, EventUpdate
from schedule_api.app.services.event_service import EventService


router = APIRouter()


@router.post("/", response_model=EventRead, status_code=status.HTTP_201_CREATED)
async def create_event(
    event: EventCreate,
    service: EventService = Depends(get_event_service),
) -> EventRead:
    """Create a new event.

    The store assigns ``id`` and ``createdAt``.  Invalid payloads are
    rejected with 422 and a list of field errors.
    """
    try:
        return await service.create_event(event)
    except ScheduleError as e:
        raise http_error(e) from e


@router.get("/", response_model=List[EventRead])
async def list_events(
    day: Optional[date] = Query(None, alias="date", description="Only events on this day (YYYY-MM-DD)"),
    service: EventService = Depends(get_event_service),
) -> List[EventRead]:
    """List events, optionally only those on one day."""
    try:
        if day is None:
            return await service.list_all_events()
        return await service.list_events_for_day(day)
    except ScheduleError as e:
        raise http_error(e) from e


@router.get("/{event_id}", response_model=EventRead)
async def get_event(
    event_id: str,
    service: EventService = Depends(get_event_service),
) -> EventRead:
    """Retrieve a single event by its ID.  Raises 404 if it does not exist."""
    try:
        return await service.get_event(event_id)
    except ScheduleError as e:
        raise http_error(e) from e


@router.put("/{event_id}", response_model=EventRead)
@router.patch("/{event_id}", response_model=EventRead)
async def update_event(
    event_id: str,
    updates: EventUpdate,
    service: EventService = Depends(get_event_service),
) -> EventRead:
    """Update an existing event.

    Partial updates are supported; any unspecified fields remain
    unchanged and ``createdAt`` is never modified.
    """
    try:
        return await service.update_event(event_id, updates)
    except ScheduleError as e:
        raise http_error(e) from e


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_event(
    event_id: str,
    service: EventService = Depends(get_event_service),
) -> Response:
    """Delete an event.  Deleting it a second time returns 404."""
    try:
        await service.delete_event(event_id)
    except ScheduleError as e:
        raise http_error(e) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)
