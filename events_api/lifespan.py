"""Application startup and shutdown.

Builds the shared resources once, publishes them on ``events_api.state``
and tears them down again on shutdown.
"""

import logging
from dataclasses import dataclass

import redis.asyncio as redis
from redis.asyncio import BlockingConnectionPool as RedisConnectionPool

from events_api import state
from events_api.config import get_settings
from events_api.store import RemoteStoreClient, RemoteStoreConfig

logger = logging.getLogger(__name__)


@dataclass
class LifespanResources:
    """Container for resources initialized during lifespan."""

    store_client: RemoteStoreClient | None = None
    redis_client: redis.Redis | None = None


async def init_redis() -> redis.Redis:
    """Initialize Redis connection with connection pool.

    Returns:
        Configured Redis client.
    """
    settings = get_settings()

    redis_pool = RedisConnectionPool(
        host=settings.redis.host,
        port=settings.redis.port,
        password=settings.redis.password if settings.redis.password else None,
        max_connections=settings.redis.max_connections,
        timeout=settings.redis.pool_timeout_sec,
        socket_timeout=settings.redis.socket_timeout,
        socket_connect_timeout=settings.redis.socket_connect_timeout,
    )

    candidate_client = redis.Redis(connection_pool=redis_pool, decode_responses=True)
    if hasattr(candidate_client, "__await__"):
        redis_client = await candidate_client
    else:
        redis_client = candidate_client
    return redis_client


def init_store_client() -> RemoteStoreClient:
    """Build the record store client for the configured environment."""
    settings = get_settings()
    config = RemoteStoreConfig.from_settings(settings.airtable)
    if not config.api_key:
        logger.warning("AIRTABLE_API_KEY is not set; record store calls will fail")
    if settings.debug.store:
        logging.getLogger("events_api.store").setLevel(logging.DEBUG)
    logger.info("Using record store base %s (%s)", config.base_id, settings.airtable.environment)
    return RemoteStoreClient(config)


async def setup_resources() -> LifespanResources:
    """Set up all shared resources.

    Returns:
        LifespanResources containing all initialized resources.
    """
    settings = get_settings()
    resources = LifespanResources()
    resources.store_client = init_store_client()

    if settings.features.events_cache:
        resources.redis_client = await init_redis()

    state.store_client = resources.store_client
    state.redis_client = resources.redis_client
    return resources


async def cleanup_resources(resources: LifespanResources) -> None:
    """Clean up all resources on shutdown.

    Args:
        resources: The resources to clean up.
    """
    if resources.store_client:
        resources.store_client.close()

    if resources.redis_client:
        aclose = getattr(resources.redis_client, "aclose", None)
        if callable(aclose):
            await aclose()
        else:
            close = getattr(resources.redis_client, "close", None)
            if callable(close):
                close()

    state.store_client = None
    state.redis_client = None
