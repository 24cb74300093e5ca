"""Tests for the HTTP client and the remote event store.

Requests are routed into an in-process API through a session that
forwards to FastAPI's TestClient, so no network is used.
"""

import asyncio

import pytest
import requests
from fastapi.testclient import TestClient

from schedule_api.app.core.errors import NotFoundError, StoreUnavailableError, ValidationError
from schedule_api.app.main import create_app
from schedule_api.app.schemas.event import EventCreate
from schedule_api.app.services.event_service import EventService
from schedule_api.app.services.event_store import InMemoryEventStore
from schedule_api_client import RemoteEventStore, ScheduleAPIClient, raise_for_api_error

from conftest import FIXED_TODAY, event_payload


class TestClientSession:
    """Minimal stand-in for ``requests.Session`` backed by a TestClient."""

    def __init__(self, client: TestClient) -> None:
        self.client = client

    def request(self, method, url, params=None, json=None, headers=None, timeout=None):
        response = self.client.request(method, url, params=params, json=json, headers=headers)
        result = requests.Response()
        result.status_code = response.status_code
        result._content = response.content
        result.headers.update(response.headers)
        result.url = url
        return result


class RefusingSession:
    def request(self, *args, **kwargs):
        raise requests.ConnectionError("connection refused")


@pytest.fixture
def api_client():
    app = create_app(store=InMemoryEventStore(), today_provider=lambda: FIXED_TODAY)
    with TestClient(app) as test_client:
        yield ScheduleAPIClient(base_url="http://testserver", session=TestClientSession(test_client))


def test_client_round_trip(api_client):
    created, error = api_client.create_event(event_payload())
    assert error is None
    events, error = api_client.list_events("2024-06-10")
    assert error is None and [e["id"] for e in events] == [created["id"]]

    day, error = api_client.get_day("2024-06-10")
    assert error is None and day["isToday"] is True

    ok, error = api_client.delete_event(created["id"])
    assert ok and error is None
    _, error = api_client.get_event(created["id"])
    assert error["status_code"] == 404


def test_remote_store_through_event_service(api_client):
    service = EventService(RemoteEventStore(api_client))

    created = asyncio.run(service.create_event(event_payload(description="remote")))
    assert created.description == "remote"

    moved = asyncio.run(service.update_event(created.id, {"date": "2024-06-11"}))
    assert moved.created_at == created.created_at
    assert asyncio.run(service.list_events_for_day("2024-06-10")) == []
    assert [e.id for e in asyncio.run(service.list_events_for_day("2024-06-11"))] == [created.id]

    asyncio.run(service.delete_event(created.id))
    with pytest.raises(NotFoundError):
        asyncio.run(service.delete_event(created.id))


def test_remote_store_maps_server_validation_errors(api_client):
    store = RemoteEventStore(api_client)
    # Skip local validation to exercise the server-side check.
    payload = EventCreate.model_construct(
        title="Late", description=None, date="2024-06-10", start_time="10:00", end_time="09:00"
    )
    with pytest.raises(ValidationError) as excinfo:
        asyncio.run(store.insert(payload))
    assert "endTime" in excinfo.value.by_field()


def test_connection_failures_become_store_unavailable():
    store = RemoteEventStore(ScheduleAPIClient(base_url="http://nowhere", session=RefusingSession()))
    with pytest.raises(StoreUnavailableError):
        asyncio.run(store.get_all())


def test_server_errors_become_store_unavailable():
    with pytest.raises(StoreUnavailableError):
        raise_for_api_error({"status_code": 503, "detail": "down"})


class ProxyErrorSession:
    """Answers every request like a gateway whose error body is not an object."""

    def __init__(self, status_code: int, body: bytes) -> None:
        self.status_code = status_code
        self.body = body

    def request(self, method, url, **kwargs):
        result = requests.Response()
        result.status_code = self.status_code
        result._content = self.body
        result.headers["Content-Type"] = "application/json"
        result.url = url
        return result


@pytest.mark.parametrize("body", [b'["upstream", "timeout"]', b'"Bad Gateway"'])
def test_non_object_error_bodies_become_error_tuples(body):
    client = ScheduleAPIClient(base_url="http://proxy", session=ProxyErrorSession(502, body))
    data, error = client.get_event("evt-1")
    assert data is None
    assert error["status_code"] == 502
    assert error["detail"]

    with pytest.raises(StoreUnavailableError):
        asyncio.run(RemoteEventStore(client).get_all())
