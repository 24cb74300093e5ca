"""
Shared dependencies for API routes.

The application factory stores the event service and the clock on
``app.state``; these helpers hand them to route handlers via
``Depends`` and translate domain errors into HTTP errors.
"""

from datetime import date
from typing import Any, Callable, Dict, List, Optional

from fastapi import HTTPException, Request, status

from schedule_api.app.core.errors import (
    NotFoundError,
    ScheduleError,
    StoreUnavailableError,
    ValidationError,
)
from schedule_api.app.services.event_service import EventService


def get_event_service(request: Request) -> EventService:
    return request.app.state.event_service


def get_today(request: Request) -> date:
    today_provider: Callable[[], date] = request.app.state.today_provider
    return today_provider()


def http_error(exc: ScheduleError) -> HTTPException:
    """Map a domain error to the HTTP error returned to clients."""
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, ValidationError):
        return HTTPException(status_code=422, detail=exc.to_detail())
    if isinstance(exc, StoreUnavailableError):
        return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))


def field_error_detail(errors: List[Dict[str, Any]], wire_names: Optional[Dict[str, str]] = None) -> List[Dict[str, str]]:
    """Flatten FastAPI request validation errors to ``{field, message}`` entries."""
    wire_names = wire_names or {}
    detail: List[Dict[str, str]] = []
    for entry in errors:
        loc = [str(part) for part in entry.get("loc", ()) if part not in ("body", "query", "path")]
        field = loc[0] if loc else "__root__"
        detail.append({"field": wire_names.get(field, field), "message": entry.get("msg", "Invalid value")})
    return detail
