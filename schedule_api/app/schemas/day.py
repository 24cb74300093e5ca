"""
Pydantic models for the day view.

``DayRead`` is the read model behind both ``GET /api/v1/days/{date}``
and the console screen: the selected date, its display labels, the
sorted events and the dates the navigation shortcuts lead to.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from schedule_api.app.schemas.event import EventRead


class DayNavigation(BaseModel):
    """Target dates of the navigation shortcuts, as ``YYYY-MM-DD``."""

    model_config = ConfigDict(populate_by_name=True)

    previous: str
    next: str
    today: str
    tomorrow: str
    next_week: str = Field(..., alias="nextWeek")


class DayRead(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    date: str = Field(..., examples=["2024-06-10"])
    heading: str = Field(..., examples=["Monday, June 10, 2024"])
    is_today: bool = Field(..., alias="isToday")
    is_past: bool = Field(..., alias="isPast")
    events: List[EventRead]
    empty_message: Optional[str] = Field(None, alias="emptyMessage")
    navigation: DayNavigation
