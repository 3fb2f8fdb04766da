import logging

from fastapi import APIRouter

from events_api.config import get_settings
from events_api.dependencies import OptionalEventsCache, StoreClient, Timezone
from events_api.services.source import StoreEventSource
from events_client.pipeline import EventPage
from events_client.view import PageView, compose_view

logger = logging.getLogger("events_api.event_view")
router = APIRouter(tags=["views"])


@router.get("/events/{event_id}/view", response_model=PageView)
async def view_event(
    event_id: str,
    client: StoreClient,
    tz: Timezone,
    cache: OptionalEventsCache,
):
    """Load one event page server-side and return its composed view."""
    logger.info("GET /events/%s/view", event_id)
    page = EventPage(StoreEventSource(client, tz, cache), event_id)
    snapshot = await page.load()
    return compose_view(snapshot, drivers_goal=get_settings().roster.drivers_goal)
