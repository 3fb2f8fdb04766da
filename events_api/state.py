from typing import Optional
import redis.asyncio as redis
from events_api.store import RemoteStoreClient

# Global runtime state initialized in lifespan.setup_resources
store_client: Optional[RemoteStoreClient] = None
redis_client: Optional[redis.Redis] = None
