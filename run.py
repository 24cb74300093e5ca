"""Entry point for serving the Schedule API.

This script starts the FastAPI application with uvicorn.  It is
intended to be executed from the project root, for example under
Docker, where you only specify a single Python file to run.

Host and port are read from the ``API_HOST`` and ``API_PORT``
environment variables (see ``schedule_api.app.core.config``).  The
console front‑end can then be pointed at the server with
``SCHEDULE_API_URL=http://<host>:<port> python schedule_console.py``.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from schedule_api.app.core.config import settings
from schedule_api.app.main import app


async def run_api() -> None:
    """Start the API using Uvicorn."""
    config = Config(
        app=app,
        host=settings.api_host,
        port=settings.api_port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


async def main() -> None:
    logging.getLogger(__name__).info(
        "Serving %s on %s:%s", settings.project_name, settings.api_host, settings.api_port
    )
    await run_api()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
