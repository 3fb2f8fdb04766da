"""Where the event page gets its data from.

``HttpEventSource`` talks to the server's REST surface. The server itself
serves the same protocol in-process (see ``events_api.services.source``).
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any, Protocol, TypeVar
from urllib.parse import quote

import requests
from pydantic import ValidationError

from events_api.models.events import Event
from events_api.models.volunteers import ScheduledSlot, ScheduledSlotList, SlotUpdate

from .errors import FetchError, FetchErrorKind

T = TypeVar("T")

logger = logging.getLogger("events_client.source")


def _validated(path: str, parse: Callable[[], T]) -> T:
    try:
        return parse()
    except ValidationError as e:
        logger.warning("Malformed response from %s: %s", path, e)
        raise FetchError(f"Malformed response from {path}", kind=FetchErrorKind.REMOTE) from e


class EventSource(Protocol):
    """Data needed to render one event page."""

    async def fetch_future_events(self) -> list[Event]:
        """Return every event starting on or after now."""
        ...

    async def fetch_scheduled_slots(self, scheduled_slots_ids: str) -> ScheduledSlotList:
        """Return the slots named in a comma-separated id list."""
        ...

    async def update_slot(self, slot_id: str, update: SlotUpdate) -> ScheduledSlot:
        """Apply an attendance change to one slot."""
        ...


class HttpEventSource:
    def __init__(self, base_url: str, session: requests.Session | None = None, timeout_sec: float = 10.0):
        self.base_url = base_url.rstrip("/")
        self.timeout_sec = timeout_sec
        self._session = session or requests.Session()

    def _request_sync(
        self,
        method: str,
        path: str,
        params: dict[str, str] | None = None,
        json_body: dict[str, Any] | None = None,
    ) -> Any:
        url = f"{self.base_url}{path}"
        try:
            resp = self._session.request(method, url, params=params, json=json_body, timeout=self.timeout_sec)
        except requests.RequestException as e:
            raise FetchError(str(e), kind=FetchErrorKind.TRANSPORT) from e
        if not resp.ok:
            try:
                data = resp.json()
            except ValueError:
                data = {}
            message = data.get("message") if isinstance(data, dict) else None
            raise FetchError(
                message or resp.reason or f"HTTP {resp.status_code}",
                kind=FetchErrorKind.REMOTE,
                status_code=resp.status_code,
            )
        try:
            return resp.json()
        except ValueError as e:
            raise FetchError(
                f"Invalid JSON from {path}",
                kind=FetchErrorKind.REMOTE,
                status_code=resp.status_code,
            ) from e

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        return await asyncio.to_thread(lambda: self._request_sync(method, path, **kwargs))

    async def fetch_future_events(self) -> list[Event]:
        data = await self._request("GET", "/api/events")
        if not isinstance(data, list):
            raise FetchError("Malformed response from /api/events", kind=FetchErrorKind.REMOTE)
        return _validated("/api/events", lambda: [Event.model_validate(e) for e in data])

    async def fetch_scheduled_slots(self, scheduled_slots_ids: str) -> ScheduledSlotList:
        data = await self._request("GET", "/api/volunteers", params={"scheduledSlotsIds": scheduled_slots_ids})
        return _validated("/api/volunteers", lambda: ScheduledSlotList.model_validate(data))

    async def update_slot(self, slot_id: str, update: SlotUpdate) -> ScheduledSlot:
        data = await self._request(
            "PATCH",
            f"/api/volunteers/{quote(slot_id, safe='')}",
            json_body=update.model_dump(by_alias=True, exclude_none=True),
        )
        return _validated(f"/api/volunteers/{slot_id}", lambda: ScheduledSlot.model_validate(data))

    def close(self) -> None:
        self._session.close()
