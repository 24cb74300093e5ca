"""Interactive console for the schedule.

This module implements the schedule screen as a line‑oriented console
program.  It shows one day at a time, moves between days and drives the
create/edit form through the :class:`~schedule_api.app.ui.controller.DayController`:

* ``prev`` / ``next`` – move one day back or forward.
* ``today`` / ``tomorrow`` / ``week`` – jump to today, tomorrow or one
  week from today.
* ``goto YYYY-MM-DD`` – jump to a date.
* ``add`` – open the form for a new event on the shown day.
* ``edit N`` – open the form for event number ``N`` of the list.
* ``set FIELD VALUE`` – fill a form field (``title``, ``description``,
  ``date``, ``startTime``, ``endTime``).
* ``save`` / ``cancel`` / ``delete`` – submit, close, or delete the
  event being edited.
* ``list``, ``help``, ``quit``.

Events are read from a local store (SQLite by default, see
``STORE_BACKEND`` and ``DATABASE_URL``) or, when ``--api-url`` or
``SCHEDULE_API_URL`` is given, from a running Schedule API.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import shlex
import sys
from typing import Awaitable, Callable, Dict, List, Optional

from schedule_api.app.core.config import settings
from schedule_api.app.core.errors import StoreUnavailableError
from schedule_api.app.core.logging_config import setup_logging
from schedule_api.app.services.event_service import EventService
from schedule_api.app.services.event_store import EventStore, SQLiteEventStore, build_store
from schedule_api.app.services.query_cache import DayQueryCache
from schedule_api.app.ui.controller import FORM_FIELDS, DayController
from schedule_api.app.ui.render import render_day, render_form, render_notifications
from schedule_api_client import RemoteEventStore


logger = logging.getLogger(__name__)

HELP_TEXT = """Commands:
  prev | next | today | tomorrow | week | goto YYYY-MM-DD
  add | edit N | set FIELD VALUE | save | cancel | delete
  list | help | quit
Form fields: """ + ", ".join(FORM_FIELDS)


class ScheduleConsole:
    """Console front‑end around a :class:`DayController`."""

    def __init__(self, controller: DayController, output: Callable[[str], None] = print) -> None:
        self.controller = controller
        self.output = output
        self._commands: Dict[str, Callable[[List[str]], Awaitable[None]]] = {
            "prev": self._handle_prev,
            "next": self._handle_next,
            "today": self._handle_today,
            "tomorrow": self._handle_tomorrow,
            "week": self._handle_week,
            "goto": self._handle_goto,
            "add": self._handle_add,
            "edit": self._handle_edit,
            "set": self._handle_set,
            "save": self._handle_save,
            "cancel": self._handle_cancel,
            "delete": self._handle_delete,
            "list": self._handle_list,
            "help": self._handle_help,
        }

    # ------------------------------------------------------------------
    # Output helpers
    # ------------------------------------------------------------------
    def _show_day(self) -> None:
        self.output(render_day(self.controller.view()))

    def _show_form(self) -> None:
        self.output(render_form(self.controller.form))

    def _flush_notifications(self) -> None:
        pending = self.controller.drain_notifications()
        if pending:
            self.output(render_notifications(pending))

    # ------------------------------------------------------------------
    # Navigation handlers
    # ------------------------------------------------------------------
    async def _handle_prev(self, args: List[str]) -> None:
        await self.controller.previous_day()
        self._show_day()

    async def _handle_next(self, args: List[str]) -> None:
        await self.controller.next_day()
        self._show_day()

    async def _handle_today(self, args: List[str]) -> None:
        if self.controller.cursor.is_today:
            self.output("Already showing today.")
            return
        await self.controller.go_today()
        self._show_day()

    async def _handle_tomorrow(self, args: List[str]) -> None:
        await self.controller.go_tomorrow()
        self._show_day()

    async def _handle_week(self, args: List[str]) -> None:
        await self.controller.go_next_week()
        self._show_day()

    async def _handle_goto(self, args: List[str]) -> None:
        if len(args) != 1:
            self.output("Usage: goto YYYY-MM-DD")
            return
        try:
            await self.controller.go_to(args[0])
        except ValueError:
            self.output(f"Not a date: {args[0]} (expected YYYY-MM-DD)")
            return
        self._show_day()

    async def _handle_list(self, args: List[str]) -> None:
        await self.controller.refresh()
        self._show_day()

    async def _handle_help(self, args: List[str]) -> None:
        self.output(HELP_TEXT)

    # ------------------------------------------------------------------
    # Form handlers
    # ------------------------------------------------------------------
    async def _handle_add(self, args: List[str]) -> None:
        self.controller.open_create_form()
        self._show_form()

    async def _handle_edit(self, args: List[str]) -> None:
        if len(args) != 1 or not args[0].isdigit():
            self.output("Usage: edit N")
            return
        try:
            self.controller.open_edit_form(int(args[0]))
        except IndexError as exc:
            self.output(str(exc))
            return
        self._show_form()

    async def _handle_set(self, args: List[str]) -> None:
        if not self.controller.form.is_open:
            self.output("No form is open. Use 'add' or 'edit N' first.")
            return
        if not args:
            self.output("Usage: set FIELD VALUE")
            return
        name, value = args[0], " ".join(args[1:])
        try:
            self.controller.form.set_field(name, value)
        except KeyError:
            self.output(f"Unknown field {name!r}. Fields: {', '.join(FORM_FIELDS)}")
            return
        self._show_form()

    async def _handle_save(self, args: List[str]) -> None:
        if not self.controller.form.is_open:
            self.output("No form is open.")
            return
        saved = await self.controller.submit()
        self._flush_notifications()
        if saved:
            self._show_day()
        else:
            self._show_form()

    async def _handle_cancel(self, args: List[str]) -> None:
        self.controller.close_form()
        self._show_day()

    async def _handle_delete(self, args: List[str]) -> None:
        if not self.controller.form.is_editing:
            self.output("Open an event with 'edit N' to delete it.")
            return
        await self.controller.delete_editing_event()
        self._flush_notifications()
        self._show_day()

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------
    async def handle_command(self, line: str) -> bool:
        """Run one command line.  Returns ``False`` when the user quits."""
        try:
            parts = shlex.split(line)
        except ValueError as exc:
            self.output(f"Could not parse command: {exc}")
            return True
        if not parts:
            return True
        command, args = parts[0].lower(), parts[1:]
        if command in {"quit", "exit", "q"}:
            return False
        handler = self._commands.get(command)
        if handler is None:
            self.output(f"Unknown command {command!r}. Type 'help' for a list of commands.")
            return True
        await handler(args)
        self._flush_notifications()
        return True

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------
    async def run(self) -> None:
        """Show the current day and process commands until ``quit``."""
        await self.controller.refresh()
        self._show_day()
        self._flush_notifications()
        while True:
            try:
                line = await asyncio.to_thread(input, "schedule> ")
            except EOFError:
                break
            if not await self.handle_command(line):
                break
        logger.info("Console closed")


def build_event_store(api_url: Optional[str], backend: Optional[str], db_path: Optional[str]) -> EventStore:
    if api_url:
        return RemoteEventStore.from_url(api_url)
    if db_path:
        return SQLiteEventStore(db_path)
    return build_store(backend)


async def main_async(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Browse and edit the schedule from the terminal.")
    parser.add_argument("--api-url", default=settings.schedule_api_url or None, help="Base URL of a running Schedule API")
    parser.add_argument("--backend", choices=["sqlite", "memory"], default=None, help="Local store backend")
    parser.add_argument("--db", default=None, help="Path to the SQLite database file")
    args = parser.parse_args(argv)

    setup_logging(settings.log_level, settings.log_file or None, console=False)
    store = build_event_store(args.api_url, args.backend, args.db)
    try:
        await store.open()
    except StoreUnavailableError as exc:
        logger.error(str(exc))
        return 1
    service = EventService(store, DayQueryCache(enabled=settings.query_cache_enabled))
    await ScheduleConsole(DayController(service)).run()
    return 0


def main() -> None:
    try:
        sys.exit(asyncio.run(main_async()))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
