"""In-process event source backed directly by the record store."""

from zoneinfo import ZoneInfo

from events_api.cache import EventsCache
from events_api.models.events import Event
from events_api.models.volunteers import ScheduledSlot, ScheduledSlotList, SlotUpdate
from events_api.services.events import fetch_future_events
from events_api.services.volunteers import fetch_scheduled_slots, update_slot
from events_api.store import RemoteStoreClient, RemoteStoreError, RemoteStoreHTTPError
from events_client.errors import FetchError, FetchErrorKind


def to_fetch_error(exc: RemoteStoreError) -> FetchError:
    if isinstance(exc, RemoteStoreHTTPError):
        return FetchError(exc.message, kind=FetchErrorKind.REMOTE, status_code=exc.status_code)
    return FetchError(str(exc), kind=FetchErrorKind.TRANSPORT)


class StoreEventSource:
    def __init__(self, client: RemoteStoreClient, tz: ZoneInfo, cache: EventsCache | None = None):
        self.client = client
        self.tz = tz
        self.cache = cache

    async def fetch_future_events(self) -> list[Event]:
        try:
            return await fetch_future_events(self.client, self.tz, self.cache)
        except RemoteStoreError as e:
            raise to_fetch_error(e) from e

    async def fetch_scheduled_slots(self, scheduled_slots_ids: str) -> ScheduledSlotList:
        try:
            return await fetch_scheduled_slots(self.client, scheduled_slots_ids)
        except RemoteStoreError as e:
            raise to_fetch_error(e) from e

    async def update_slot(self, slot_id: str, update: SlotUpdate) -> ScheduledSlot:
        try:
            return await update_slot(self.client, slot_id, update, self.cache)
        except RemoteStoreError as e:
            raise to_fetch_error(e) from e
