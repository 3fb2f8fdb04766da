import logging

from fastapi import APIRouter, Query

from events_api.dependencies import OptionalEventsCache, StoreClient
from events_api.errors import BadRequestError, from_store_error
from events_api.models.volunteers import ScheduledSlot, ScheduledSlotList, SlotUpdate
from events_api.services.volunteers import RECORD_ID_RE, fetch_scheduled_slots, update_slot
from events_api.store import RemoteStoreError

logger = logging.getLogger("events_api.volunteers")
router = APIRouter(prefix="/api/volunteers", tags=["volunteers"])


@router.get("", response_model=ScheduledSlotList)
async def list_scheduled_slots(
    client: StoreClient,
    scheduled_slots_ids: str = Query(
        "",
        alias="scheduledSlotsIds",
        description="Comma-separated scheduled slot record ids",
    ),
) -> ScheduledSlotList:
    logger.info("GET /api/volunteers ids=%d", scheduled_slots_ids.count(",") + 1 if scheduled_slots_ids else 0)
    try:
        return await fetch_scheduled_slots(client, scheduled_slots_ids)
    except RemoteStoreError as e:
        logger.warning("Failed to fetch scheduled slots: %s", e)
        raise from_store_error(e) from e


@router.patch("/{slot_id}", response_model=ScheduledSlot)
async def patch_scheduled_slot(
    slot_id: str,
    update: SlotUpdate,
    client: StoreClient,
    cache: OptionalEventsCache,
) -> ScheduledSlot:
    logger.info("PATCH /api/volunteers/%s fields=%s", slot_id, sorted(update.to_fields()))
    if not RECORD_ID_RE.match(slot_id):
        raise BadRequestError(detail=f"Invalid scheduled slot id: {slot_id}")
    try:
        return await update_slot(client, slot_id, update, cache)
    except RemoteStoreError as e:
        logger.warning("Failed to update scheduled slot %s: %s", slot_id, e)
        raise from_store_error(e) from e
