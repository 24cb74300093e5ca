"""
Day view endpoint for API v1.

Returns the read model behind the schedule screen: the heading for the
requested date, whether it is today or in the past, its events in
chronological order, the empty‑state message and the dates the
navigation shortcuts lead to.
"""

from datetime import date

from fastapi import APIRouter, Depends

from schedule_api.app.api.deps import get_event_service, get_today, http_error
from schedule_api.app.core.errors import ScheduleError
from schedule_api.app.schemas.day import DayRead
from schedule_api.app.services.event_service import EventService
from schedule_api.app.ui.day_view import build_day_view

router = APIRouter()


@router.get("/{day}", response_model=DayRead)
async def get_day(
    day: date,
    service: EventService = Depends(get_event_service),
    today: date = Depends(get_today),
) -> DayRead:
    try:
        events = await service.list_events_for_day(day)
    except ScheduleError as e:
        raise http_error(e) from e
    return build_day_view(day, events, today)
