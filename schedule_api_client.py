"""Schedule API client.

This module defines a small client wrapper around the Schedule REST
API and an :class:`~schedule_api.app.services.event_store.EventStore`
implementation built on top of it.  The client uses the ``requests``
library internally to make HTTP calls.

The client exposes high‑level methods mirroring the API:

* :meth:`ScheduleAPIClient.list_events` – all events, or one day's events.
* :meth:`ScheduleAPIClient.get_event` – fetch a single event by its identifier.
* :meth:`ScheduleAPIClient.create_event` – create an event.
* :meth:`ScheduleAPIClient.update_event` – apply a partial update.
* :meth:`ScheduleAPIClient.delete_event` – delete an event.
* :meth:`ScheduleAPIClient.get_day` – fetch the day view read model.

Each method returns a tuple ``(data, error)`` in the style of the
low‑level :meth:`ScheduleAPIClient._request`.  :class:`RemoteEventStore`
turns those errors into the application's error types so the console
controller can run against a remote server exactly as it does against
a local SQLite file.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

import requests

from schedule_api.app.core.config import settings
from schedule_api.app.core.errors import (
    FieldError,
    NotFoundError,
    StoreUnavailableError,
    ValidationError,
)
from schedule_api.app.schemas.event import WIRE_NAMES, EventCreate, EventRead
from schedule_api.app.services.event_store import EventStore, UPDATABLE_FIELDS


logger = logging.getLogger(__name__)

ApiError = Dict[str, Any]


class ScheduleAPIClient:
    """Client for interacting with the Schedule API."""

    EVENTS_PATH = "/api/v1/events/"
    EVENT_PATH = "/api/v1/events/{id}"
    DAY_PATH = "/api/v1/days/{date}"

    def __init__(
        self,
        *,
        base_url: str,
        api_key: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL for the API, e.g. ``http://127.0.0.1:8000``.
            api_key: Optional API key.  If set, an ``Authorization``
                header with the value ``Bearer <api_key>`` will be
                included in all requests.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Request timeout in seconds.  Defaults to
                ``settings.request_timeout``.
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.session = session or requests.Session()
        self.timeout = timeout if timeout is not None else settings.request_timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[ApiError]]:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PATCH``, ``DELETE``).
            path: Path relative to :attr:`base_url` (e.g. ``/api/v1/events/``).
            params: Query parameters to include in the request.
            json_body: JSON body to send with the request (for POST/PATCH).
        Returns:
            A tuple ``(data, error)``. ``data`` contains the parsed JSON
            response on success and ``error`` is ``None``. On failure,
            ``data`` is ``None`` and ``error`` is a dictionary with keys
            ``status_code`` and ``detail`` describing the issue.
        """
        url = f"{self.base_url}{path}"
        headers: Dict[str, str] = {}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            detail: Any = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    if isinstance(err_json, dict):
                        detail = err_json.get("detail") or err_json.get("message") or err_json
                    else:
                        detail = err_json
                except ValueError:
                    detail = exc.response.text
            if not detail:
                detail = str(exc)
            logger.error("API request failed (%s): %s", status, detail)
            return None, {"status_code": status, "detail": detail}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "detail": str(exc)}

    # ------------------------------------------------------------------
    # Event operations
    # ------------------------------------------------------------------
    def list_events(self, day: Optional[str] = None) -> Tuple[List[Dict[str, Any]], Optional[ApiError]]:
        """Retrieve all events, or only those on ``day`` (``YYYY-MM-DD``)."""
        params = {"date": day} if day else None
        data, error = self._request("GET", self.EVENTS_PATH, params=params)
        if error:
            return [], error
        return (data if isinstance(data, list) else []), None

    def get_event(self, event_id: str) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        return self._request("GET", self.EVENT_PATH.replace("{id}", str(event_id)))

    def create_event(self, payload: Mapping[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        return self._request("POST", self.EVENTS_PATH, json_body=dict(payload))

    def update_event(
        self, event_id: str, changes: Mapping[str, Any]
    ) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        return self._request(
            "PATCH", self.EVENT_PATH.replace("{id}", str(event_id)), json_body=dict(changes)
        )

    def delete_event(self, event_id: str) -> Tuple[bool, Optional[ApiError]]:
        _, error = self._request("DELETE", self.EVENT_PATH.replace("{id}", str(event_id)))
        return error is None, error

    def get_day(self, day: str) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        return self._request("GET", self.DAY_PATH.replace("{date}", day))


def raise_for_api_error(error: ApiError, event_id: Optional[str] = None) -> None:
    """Raise the application error matching an API error tuple entry."""
    status = error.get("status_code")
    detail = error.get("detail")
    if status == 404:
        raise NotFoundError(event_id or "")
    if status == 422 and isinstance(detail, list):
        raise ValidationError(
            FieldError(str(item.get("field", "__root__")), str(item.get("message", "")))
            for item in detail
            if isinstance(item, dict)
        )
    raise StoreUnavailableError(f"Schedule API error ({status}): {detail}")


class RemoteEventStore(EventStore):
    """Event store backed by a running Schedule API."""

    def __init__(self, client: ScheduleAPIClient) -> None:
        self.client = client

    @classmethod
    def from_url(cls, base_url: str, api_key: Optional[str] = None) -> "RemoteEventStore":
        return cls(ScheduleAPIClient(base_url=base_url, api_key=api_key))

    async def get_all(self) -> List[EventRead]:
        data, error = self.client.list_events()
        if error:
            raise_for_api_error(error)
        return [EventRead.model_validate(item) for item in data]

    async def get(self, event_id: str) -> EventRead:
        data, error = self.client.get_event(event_id)
        if error:
            raise_for_api_error(error, event_id)
        return EventRead.model_validate(data)

    async def insert(self, payload: EventCreate) -> EventRead:
        data, error = self.client.create_event(payload.model_dump(by_alias=True))
        if error:
            raise_for_api_error(error)
        return EventRead.model_validate(data)

    async def update(self, event_id: str, changes: Mapping[str, object]) -> EventRead:
        body = {WIRE_NAMES.get(k, k): v for k, v in changes.items() if k in UPDATABLE_FIELDS}
        data, error = self.client.update_event(event_id, body)
        if error:
            raise_for_api_error(error, event_id)
        return EventRead.model_validate(data)

    async def delete(self, event_id: str) -> None:
        _, error = self.client.delete_event(event_id)
        if error:
            raise_for_api_error(error, event_id)
