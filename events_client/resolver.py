"""Finding the requested event among all future events."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from events_api.models.events import Event

from .errors import FetchError
from .source import EventSource

logger = logging.getLogger("events_client.resolver")


class FetchStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass
class EventResolution:
    status: FetchStatus
    event: Event | None = None
    error: FetchError | None = None


def find_event(event_id: str | None, events: list[Event]) -> Event | None:
    for event in events:
        if event.id == event_id:
            return event
    return None


def resolve_event(event_id: str | None, events: list[Event]) -> Event:
    """Return the event with ``event_id`` or raise a ``not_found`` FetchError."""
    event = find_event(event_id, events)
    if event is None:
        logger.error("Something went wrong. Event %s not found in futureEvents list.", event_id)
        raise FetchError.not_found(event_id)
    return event


class EventResolver:
    """Fetches future events once and picks out one of them.

    Reports ``loading`` until the fetch completes. A missing id is an error,
    not an empty result.
    """

    def __init__(self, source: EventSource):
        self.source = source
        self.resolution = EventResolution(status=FetchStatus.IDLE)

    async def resolve(self, event_id: str | None) -> EventResolution:
        self.resolution = EventResolution(status=FetchStatus.LOADING)
        try:
            events = await self.source.fetch_future_events()
            event = resolve_event(event_id, events)
        except FetchError as e:
            self.resolution = EventResolution(status=FetchStatus.ERROR, error=e)
        except Exception as e:
            logger.exception("Fetching future events failed")
            self.resolution = EventResolution(status=FetchStatus.ERROR, error=FetchError.from_exception(e))
        else:
            self.resolution = EventResolution(status=FetchStatus.SUCCESS, event=event)
        return self.resolution
