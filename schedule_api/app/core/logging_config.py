"""
Logging configuration shared by the API and the console.

The API logs to stderr (and optionally a file) like any server.  The
interactive console draws its own screen on stdout, so it calls
``setup_logging(..., console=False)``: records then go only to
``LOG_FILE`` when one is configured and are dropped otherwise.
"""

import logging
from pathlib import Path
from typing import List, Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO", logfile: Optional[str] = None, console: bool = True) -> None:
    """Configure the root logger unless something already did.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``, ``"INFO"``).  Case
        insensitive; unknown names fall back to ``INFO``.
    logfile : Optional[str]
        Path to a file to log messages to.
    console : bool
        Attach a stderr handler.  With ``console=False`` and no
        ``logfile`` a ``NullHandler`` is installed, which also keeps
        ``logging.lastResort`` from printing warnings to the terminal.
    """
    root = logging.getLogger()
    if root.handlers:
        # Configured by the host (uvicorn, pytest) or an earlier call.
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    handlers: List[logging.Handler] = []
    if console:
        handlers.append(logging.StreamHandler())
    if logfile:
        handlers.append(logging.FileHandler(Path(logfile).resolve(), encoding="utf-8"))
    if not handlers:
        handlers.append(logging.NullHandler())

    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
