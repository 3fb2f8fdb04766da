"""Loading and ordering the volunteer roster of one event."""

from __future__ import annotations

import logging

from events_api.models.events import Event
from events_api.models.volunteers import ScheduledSlot

from .errors import FetchError
from .source import EventSource

logger = logging.getLogger("events_client.roster")


def sort_slots(slots: list[ScheduledSlot]) -> list[ScheduledSlot]:
    """Order slots by first name, case-sensitively.

    Equal first names keep the order the store returned them in.
    """
    return sorted(slots, key=lambda slot: slot.fields.first_name)


class RosterLoader:
    def __init__(self, source: EventSource):
        self.source = source
        self.scheduled_slots_ids: str | None = None

    async def load(self, event: Event | None) -> list[ScheduledSlot]:
        """Fetch the slots of ``event``; fails before any request if it is None."""
        if event is None:
            raise FetchError.undefined_event()
        self.scheduled_slots_ids = ",".join(event.scheduled_slots)
        return await self._fetch(self.scheduled_slots_ids)

    async def refetch(self) -> list[ScheduledSlot]:
        """Re-issue the last request unchanged."""
        if self.scheduled_slots_ids is None:
            raise FetchError.undefined_event()
        return await self._fetch(self.scheduled_slots_ids)

    async def _fetch(self, scheduled_slots_ids: str) -> list[ScheduledSlot]:
        response = await self.source.fetch_scheduled_slots(scheduled_slots_ids)
        logger.debug("Fetched %d scheduled slots", len(response.records))
        return sort_slots(response.records)
