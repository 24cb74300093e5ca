"""Tests for the per-day query cache."""

from schedule_api.app.schemas.event import EventRead
from schedule_api.app.services.query_cache import DayQueryCache


def _event(event_id: str, day: str) -> EventRead:
    return EventRead(
        id=event_id, title="T", date=day, start_time="09:00", end_time="10:00", created_at=0
    )


def test_get_put_and_invalidate():
    cache = DayQueryCache()
    assert cache.get("2024-06-10") is None
    cache.put("2024-06-10", [_event("a", "2024-06-10")])
    cache.put("2024-06-11", [])
    assert [e.id for e in cache.get("2024-06-10")] == ["a"]
    assert cache.get("2024-06-11") == []
    cache.invalidate("2024-06-10", "2024-06-12")
    assert "2024-06-10" not in cache
    assert "2024-06-11" in cache
    assert (cache.hits, cache.misses) == (2, 1)


def test_returned_lists_do_not_alias_cache_entries():
    cache = DayQueryCache()
    cache.put("2024-06-10", [_event("a", "2024-06-10")])
    cache.get("2024-06-10").clear()
    assert len(cache.get("2024-06-10")) == 1


def test_disabled_cache_never_stores():
    cache = DayQueryCache(enabled=False)
    cache.put("2024-06-10", [])
    assert cache.get("2024-06-10") is None
    assert len(cache) == 0


def test_clear_drops_everything():
    cache = DayQueryCache()
    cache.put("2024-06-10", [])
    cache.put("2024-06-11", [])
    cache.clear()
    assert len(cache) == 0
