"""
Main entrypoint for the Schedule API.

This module assembles the FastAPI application, sets up logging and
includes versioned routers.  The ``create_app`` function builds and
configures the app, which is then instantiated at module import time
as ``app``.  Importing the app here makes it easy to run with uvicorn
or another ASGI server, e.g.::

    uvicorn schedule_api.app.main:app --reload

The event store backend is chosen by ``Settings.store_backend`` unless
a store is passed to ``create_app`` explicitly (as the tests do).
"""

from datetime import date
from typing import Callable, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .api.deps import field_error_detail
from .api.v1.router import router as v1_router
from .core.config import settings
from .core.errors import ValidationError
from .core.logging_config import setup_logging
from .schemas.event import WIRE_NAMES
from .services.event_service import EventService
from .services.event_store import EventStore, build_store
from .services.query_cache import DayQueryCache


def create_app(
    store: Optional[EventStore] = None,
    today_provider: Callable[[], date] = date.today,
) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    store : Optional[EventStore]
        Event store to serve.  Defaults to the backend named by
        ``settings.store_backend``.
    today_provider : Callable[[], date]
        Source of the current date for the day view.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    # Initialise logging before anything else so that the modules
    # below can safely log messages.
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)

    event_store = store if store is not None else build_store()
    app.state.event_service = EventService(
        event_store, DayQueryCache(enabled=settings.query_cache_enabled)
    )
    app.state.today_provider = today_provider

    app.include_router(v1_router, prefix="/api/v1")

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={"detail": field_error_detail(exc.errors(), WIRE_NAMES)},
        )

    @app.exception_handler(ValidationError)
    async def validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": exc.to_detail()})

    @app.on_event("startup")
    async def startup_event() -> None:
        # Creates the SQLite file and applies migrations when needed.
        await event_store.open()

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
