import logging

from fastapi import APIRouter

from events_api.dependencies import StoreClient
from events_api.errors import from_store_error
from events_api.models.drivers import ProcessedDriver
from events_api.services.drivers import fetch_drivers
from events_api.store import RemoteStoreError

logger = logging.getLogger("events_api.drivers")
router = APIRouter(prefix="/api/drivers", tags=["drivers"])


@router.get("", response_model=list[ProcessedDriver])
async def list_drivers(client: StoreClient) -> list[ProcessedDriver]:
    logger.info("GET /api/drivers")
    try:
        return await fetch_drivers(client)
    except RemoteStoreError as e:
        logger.warning("Failed to fetch drivers: %s", e)
        raise from_store_error(e) from e
