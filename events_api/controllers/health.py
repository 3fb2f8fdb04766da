from fastapi import APIRouter
from typing import Dict

from events_api import state
from events_api.config import get_settings

router = APIRouter()


@router.get("/health")
async def health() -> Dict[str, str]:
    redis_status = "disabled"
    if state.redis_client:
        try:
            await state.redis_client.ping()
            redis_status = "healthy"
        except Exception:
            redis_status = "unhealthy"

    store_status = "ready" if state.store_client else "uninitialized"
    return {
        "status": "ok",
        "redis": redis_status,
        "store": store_status,
        "environment": get_settings().airtable.environment,
    }
