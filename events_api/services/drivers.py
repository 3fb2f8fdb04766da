"""Driver roster reshaping."""

import logging
from typing import Any

from events_api.models.drivers import ProcessedDriver
from events_api.store import RemoteStoreClient, schema

logger = logging.getLogger("events_api.drivers")


def process_driver(record: dict[str, Any]) -> ProcessedDriver:
    fields = record.get("fields", {})
    restricted = fields.get(schema.DRIVER_RESTRICTED_LOCATIONS) or []
    if isinstance(restricted, str):
        restricted = [restricted]
    try:
        delivery_count = int(fields.get(schema.DRIVER_DELIVERY_COUNT) or 0)
    except (TypeError, ValueError):
        delivery_count = 0
    return ProcessedDriver(
        id=record["id"],
        first_name=fields.get(schema.DRIVER_FIRST_NAME, ""),
        last_name=fields.get(schema.DRIVER_LAST_NAME, ""),
        time_slot=str(fields.get(schema.DRIVER_TIME_SLOT) or ""),
        delivery_count=delivery_count,
        zip_code=str(fields.get(schema.DRIVER_ZIP_CODE) or ""),
        vehicle=str(fields.get(schema.DRIVER_VEHICLE) or ""),
        restricted_locations=[str(r) for r in restricted],
    )


async def fetch_drivers(client: RemoteStoreClient) -> list[ProcessedDriver]:
    records = await client.list_records(schema.DRIVERS_TABLE)
    drivers = [process_driver(r) for r in records]
    drivers.sort(key=lambda d: d.first_name)
    logger.info("Fetched %d drivers", len(drivers))
    return drivers
