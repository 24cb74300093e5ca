"""
Application package initializer.

The application is split into a handful of layers: ``core`` (settings,
logging, database, errors and date helpers), ``schemas`` (pydantic
models and validation), ``services`` (event store backends, the query
cache and the event service), ``ui`` (the day controller and its text
renderer) and ``api`` (versioned FastAPI routers).  The REST API and
the console front‑end share the same services.

The ASGI application lives in ``schedule_api.app.main``; importing this
package does not build it.
"""
