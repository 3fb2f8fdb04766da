"""Scheduled slot lookups and attendance updates."""

import logging
import re

from events_api.cache import EventsCache
from events_api.models.volunteers import ScheduledSlot, ScheduledSlotList, SlotUpdate
from events_api.store import RemoteStoreClient, schema

logger = logging.getLogger("events_api.volunteers")

RECORD_ID_RE = re.compile(r"^[A-Za-z0-9]+$")


def parse_slot_ids(raw: str | None) -> list[str]:
    """Split a comma-separated id list.

    Returns an empty list when the input is blank or any id is malformed;
    ids end up inside a store formula so only alphanumerics are accepted.
    """
    if not raw:
        return []
    ids = [part.strip() for part in raw.split(",") if part.strip()]
    if not all(RECORD_ID_RE.match(i) for i in ids):
        logger.warning("Rejecting malformed scheduled slot id list: %r", raw)
        return []
    return ids


def slot_filter_formula(ids: list[str]) -> str:
    clauses = ", ".join(f"RECORD_ID()='{i}'" for i in ids)
    return f"OR({clauses})"


async def fetch_scheduled_slots(client: RemoteStoreClient, raw_ids: str | None) -> ScheduledSlotList:
    ids = parse_slot_ids(raw_ids)
    if not ids:
        return ScheduledSlotList(records=[])
    records = await client.list_records(
        schema.SCHEDULED_SLOTS_TABLE, filter_formula=slot_filter_formula(ids)
    )
    return ScheduledSlotList.model_validate({"records": records})


async def update_slot(
    client: RemoteStoreClient,
    slot_id: str,
    update: SlotUpdate,
    cache: EventsCache | None = None,
) -> ScheduledSlot:
    record = await client.update_record(schema.SCHEDULED_SLOTS_TABLE, slot_id, update.to_fields())
    # Event totals are rollups over slots, so the cached events are stale now.
    if cache is not None:
        await cache.invalidate()
    return ScheduledSlot.model_validate(record)
