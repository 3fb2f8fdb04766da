"""Fetching future events and reshaping them for the front-end."""

import logging
from datetime import datetime, timezone
from typing import Any
from zoneinfo import ZoneInfo

from events_api.cache import EventsCache
from events_api.models.events import Event
from events_api.store import RemoteStoreClient, schema

logger = logging.getLogger("events_api.events")

# Narrows the store query; the exact "on or after now" cut happens in Python.
RECENT_EVENTS_FORMULA = f"IS_AFTER({{{schema.EVENT_START_TIME}}}, DATEADD(TODAY(), -1, 'days'))"


def parse_start_time(value: Any) -> datetime | None:
    if not isinstance(value, str) or not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _count(fields: dict[str, Any], key: str) -> int:
    value = fields.get(key)
    if isinstance(value, list):
        return len(value)
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


def _main_location(value: Any) -> str:
    if isinstance(value, list):
        return str(value[0]) if value else ""
    return str(value or "")


def process_event(record: dict[str, Any], tz: ZoneInfo) -> Event | None:
    """Reshape a raw event record, or return None if it has no start time.

    Drivers and packers overlap: a volunteer doing both is counted in each
    total but once in the participant total.
    """
    fields = record.get("fields", {})
    start = parse_start_time(fields.get(schema.EVENT_START_TIME))
    if start is None:
        logger.debug("Skipping event %s without start time", record.get("id"))
        return None

    local = start.astimezone(tz)
    num_drivers = _count(fields, schema.EVENT_TOTAL_DRIVERS)
    num_packers = _count(fields, schema.EVENT_TOTAL_PACKERS)
    num_total = _count(fields, schema.EVENT_TOTAL_VOLUNTEERS)
    num_both = max(0, num_drivers + num_packers - num_total)

    return Event(
        id=record["id"],
        date_display=f"{local:%A, %B} {local.day}",
        date=start,
        time=f"{local:%I:%M %p}".lstrip("0"),
        main_location=_main_location(fields.get(schema.EVENT_PICKUP_ADDRESS)),
        num_drivers=num_drivers,
        num_packers=num_packers,
        num_total_participants=num_total,
        num_only_drivers=num_drivers - num_both,
        num_only_packers=num_packers - num_both,
        num_both_drivers_and_packers=num_both,
        num_special_groups=_count(fields, schema.EVENT_SPECIAL_GROUPS),
        scheduled_slots=list(fields.get(schema.EVENT_SCHEDULED_SLOTS) or []),
    )


def select_future_events(records: list[dict[str, Any]], now: datetime, tz: ZoneInfo) -> list[Event]:
    """Events on or after the local calendar date of ``now``, earliest first.

    An event that already started today still counts.
    """
    today = now.astimezone(tz).date()
    events = []
    for record in records:
        event = process_event(record, tz)
        if event is not None and event.date.astimezone(tz).date() >= today:
            events.append(event)
    events.sort(key=lambda e: e.date)
    return events


async def load_event_records(client: RemoteStoreClient, cache: EventsCache | None = None) -> list[dict[str, Any]]:
    if cache is not None:
        cached = await cache.get()
        if cached is not None:
            logger.debug("events cache hit (%d records)", len(cached))
            return cached
    records = await client.list_records(schema.EVENTS_TABLE, filter_formula=RECENT_EVENTS_FORMULA)
    if cache is not None:
        await cache.set(records)
    return records


async def fetch_future_events(
    client: RemoteStoreClient,
    tz: ZoneInfo,
    cache: EventsCache | None = None,
    now: datetime | None = None,
) -> list[Event]:
    records = await load_event_records(client, cache)
    now = now or datetime.now(timezone.utc)
    events = select_future_events(records, now, tz)
    logger.info("Resolved %d future events out of %d records", len(events), len(records))
    return events
