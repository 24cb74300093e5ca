"""
Top‑level router for version 1 of the API.

This router aggregates the resource routers under a unified prefix.
When new endpoints are added, update this file to include them.
"""

from fastapi import APIRouter

from .endpoints import days, events

router = APIRouter()

router.include_router(events.router, prefix="/events", tags=["events"])
router.include_router(days.router, prefix="/days", tags=["days"])
