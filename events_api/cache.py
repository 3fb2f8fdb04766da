"""Redis-backed cache for raw event records.

Only the store's raw event records are cached. Which events count as
"future" is decided on every request against the current clock, and any
slot mutation drops the cached copy so the next read goes to the store.
"""

import json
import logging
from typing import Any

import redis.asyncio as redis
from redis.exceptions import RedisError

logger = logging.getLogger("events_api.cache")


class EventsCache:
    def __init__(self, redis_client: redis.Redis, key: str = "events:records", ttl_sec: int = 60):
        self.redis_client = redis_client
        self.key = key
        self.ttl_sec = ttl_sec

    async def get(self) -> list[dict[str, Any]] | None:
        try:
            raw = await self.redis_client.get(self.key)
        except RedisError as e:
            logger.warning("events cache read failed: %r", e)
            return None
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning("events cache held undecodable payload; ignoring")
            return None

    async def set(self, records: list[dict[str, Any]]) -> None:
        try:
            await self.redis_client.setex(self.key, self.ttl_sec, json.dumps(records))
        except RedisError as e:
            logger.warning("events cache write failed: %r", e)

    async def invalidate(self) -> None:
        try:
            await self.redis_client.delete(self.key)
        except RedisError as e:
            logger.warning("events cache invalidation failed: %r", e)
