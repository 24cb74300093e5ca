"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so that
the API and the console front‑end start without any configuration.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Schedule API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Storage backend for events: ``sqlite`` (default) or ``memory``.
    # The in‑memory backend loses all data when the process exits.
    store_backend: str = os.getenv("STORE_BACKEND", "sqlite").lower()

    # Path to the SQLite database.  If a relative path is provided, it
    # will be resolved relative to the project root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "schedule.db")

    # Day query results are cached per date until a mutation touches
    # that date.  Disable to always read through to the store.
    query_cache_enabled: bool = os.getenv("QUERY_CACHE_ENABLED", "true").lower() in {"1", "true", "yes"}

    # Blank form defaults used when creating a new event.
    default_start_time: str = os.getenv("DEFAULT_START_TIME", "09:00")
    default_end_time: str = os.getenv("DEFAULT_END_TIME", "10:00")

    api_host: str = os.getenv("API_HOST", "127.0.0.1")
    api_port: int = int(os.getenv("API_PORT", "8000"))

    # Base URL of a running Schedule API.  When set, the console talks to
    # that server instead of opening a local store.
    schedule_api_url: str = os.getenv("SCHEDULE_API_URL", "")
    request_timeout: float = float(os.getenv("REQUEST_TIMEOUT", "15"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
