import logging

from fastapi import APIRouter

from events_api.dependencies import OptionalEventsCache, StoreClient, Timezone
from events_api.errors import from_store_error
from events_api.models.events import Event
from events_api.services.events import fetch_future_events
from events_api.store import RemoteStoreError

logger = logging.getLogger("events_api.events")
router = APIRouter(prefix="/api/events", tags=["events"])


@router.get("", response_model=list[Event])
async def list_future_events(client: StoreClient, tz: Timezone, cache: OptionalEventsCache) -> list[Event]:
    logger.info("GET /api/events")
    try:
        return await fetch_future_events(client, tz, cache)
    except RemoteStoreError as e:
        logger.warning("Failed to fetch future events: %s", e)
        raise from_store_error(e) from e
