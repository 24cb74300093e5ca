"""
Per‑day cache for event queries.

Results of "events on day D" are cached under the ISO date string of
``D``.  Nothing expires on its own: the event service invalidates the
affected dates directly after every successful mutation, and the next
read for such a date goes back to the store.
"""

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from schedule_api.app.schemas.event import EventRead

logger = logging.getLogger(__name__)


class DayQueryCache:
    """Explicit cache of sorted day results keyed by ``YYYY-MM-DD``."""

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled
        self._entries: Dict[str, Tuple[EventRead, ...]] = {}
        self.hits = 0
        self.misses = 0

    def get(self, day: str) -> Optional[List[EventRead]]:
        if not self.enabled:
            return None
        entry = self._entries.get(day)
        if entry is None:
            self.misses += 1
            return None
        self.hits += 1
        return list(entry)

    def put(self, day: str, events: Iterable[EventRead]) -> None:
        if self.enabled:
            self._entries[day] = tuple(events)

    def invalidate(self, *days: str) -> None:
        for day in days:
            if self._entries.pop(day, None) is not None:
                logger.debug("Invalidated cached events for %s", day)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, day: str) -> bool:
        return day in self._entries

    def __len__(self) -> int:
        return len(self._entries)
