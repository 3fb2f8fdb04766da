"""Dependency injection for FastAPI endpoints.

This module provides FastAPI dependencies for accessing shared resources
like the record store client and the events cache, instead of reading
global state directly in controllers.

Usage in controllers:
    from events_api.dependencies import StoreClient, OptionalEventsCache

    @router.get("/api/example")
    async def example(client: StoreClient, cache: OptionalEventsCache):
        ...
"""

from typing import Annotated
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from fastapi import Depends

from events_api import state
from events_api.cache import EventsCache
from events_api.config import get_settings
from events_api.errors import ServiceUnavailableError
from events_api.store import RemoteStoreClient


def get_store_client() -> RemoteStoreClient:
    """Get the record store client.

    Raises:
        ServiceUnavailableError: If the client was not initialized.

    Returns:
        The RemoteStoreClient instance.
    """
    if state.store_client is None:
        raise ServiceUnavailableError(detail="Record store client not initialized")
    return state.store_client


def get_events_cache() -> EventsCache | None:
    """Get the events cache, or None when caching is off or Redis is absent."""
    settings = get_settings()
    if not settings.features.events_cache or state.redis_client is None:
        return None
    return EventsCache(state.redis_client, key=settings.cache.key, ttl_sec=settings.cache.ttl_sec)


def get_timezone() -> ZoneInfo:
    """Timezone events are displayed in.

    Raises:
        ServiceUnavailableError: If the configured zone is unknown.
    """
    name = get_settings().roster.timezone
    try:
        return ZoneInfo(name)
    except ZoneInfoNotFoundError:
        raise ServiceUnavailableError(detail=f"Unknown timezone {name!r}")


StoreClient = Annotated[RemoteStoreClient, Depends(get_store_client)]
OptionalEventsCache = Annotated[EventsCache | None, Depends(get_events_cache)]
Timezone = Annotated[ZoneInfo, Depends(get_timezone)]
