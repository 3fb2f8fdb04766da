"""HTTP client for the hosted record store (Airtable REST API)."""

from __future__ import annotations

import asyncio
import dataclasses
import logging
from typing import Any
from urllib.parse import quote

import requests

from events_api.config import AirtableSettings

from .errors import RemoteStoreConfigError, RemoteStoreHTTPError, RemoteStoreTransportError

logger = logging.getLogger("events_api.store")


@dataclasses.dataclass(frozen=True, slots=True)
class RemoteStoreConfig:
    """Connection details for one record store base."""

    api_key: str
    base_id: str
    api_url: str = "https://api.airtable.com/v0"
    timeout_sec: float = 10.0
    page_size: int = 100

    @classmethod
    def from_settings(cls, settings: AirtableSettings) -> RemoteStoreConfig:
        """Build configuration for the base selected by ``settings.environment``."""
        return cls(
            api_key=settings.api_key,
            base_id=settings.base_id,
            api_url=settings.api_url.rstrip("/"),
            timeout_sec=settings.timeout_sec,
            page_size=settings.page_size,
        )


class RemoteStoreClient:
    """Translates record operations into REST calls against one base.

    Calls are blocking ``requests`` calls pushed onto a worker thread. A
    failed call is never retried.
    """

    def __init__(self, config: RemoteStoreConfig, session: requests.Session | None = None) -> None:
        self.config = config
        self._session = session or requests.Session()

    def table_url(self, table: str) -> str:
        return f"{self.config.api_url}/{self.config.base_id}/{quote(table, safe='')}"

    def _headers(self) -> dict[str, str]:
        if not self.config.api_key:
            raise RemoteStoreConfigError.missing_api_key()
        return {
            "Authorization": f"Bearer {self.config.api_key}",
            "Content-Type": "application/json",
        }

    def _request_sync(
        self,
        method: str,
        url: str,
        params: dict[str, Any] | None = None,
        json_body: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        logger.debug("store request → %s %s params=%s", method, url, params)
        try:
            resp = self._session.request(
                method,
                url,
                headers=self._headers(),
                params=params,
                json=json_body,
                timeout=self.config.timeout_sec,
            )
        except requests.RequestException as e:
            logger.warning("store transport failure: %s %s err=%r", method, url, e)
            raise RemoteStoreTransportError(f"Record store unreachable: {e}") from e
        logger.debug("store response status=%s", resp.status_code)
        if not resp.ok:
            try:
                payload = resp.json()
            except ValueError:
                payload = None
            err = RemoteStoreHTTPError.from_payload(resp.status_code, payload, resp.reason or "")
            logger.warning("store non-OK response: %s %s", resp.status_code, err.message)
            raise err
        try:
            return resp.json()
        except ValueError as e:
            raise RemoteStoreHTTPError(
                "Record store returned a non-JSON body", status_code=resp.status_code
            ) from e

    async def _request(
        self,
        method: str,
        url: str,
        params: dict[str, Any] | None = None,
        json_body: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        return await asyncio.to_thread(self._request_sync, method, url, params, json_body)

    async def list_records(
        self,
        table: str,
        *,
        filter_formula: str | None = None,
        page_size: int | None = None,
    ) -> list[dict[str, Any]]:
        """Return every record of ``table`` matching ``filter_formula``.

        Follows the store's ``offset`` cursor until the last page and keeps
        records in the order the store returned them.
        """
        url = self.table_url(table)
        params: dict[str, Any] = {"pageSize": page_size or self.config.page_size}
        if filter_formula:
            params["filterByFormula"] = filter_formula

        records: list[dict[str, Any]] = []
        while True:
            data = await self._request("GET", url, params=dict(params))
            records.extend(data.get("records", []))
            offset = data.get("offset")
            if not offset:
                break
            params["offset"] = offset
        logger.info("Fetched %d records from %s", len(records), table)
        return records

    async def update_record(self, table: str, record_id: str, fields: dict[str, Any]) -> dict[str, Any]:
        """Patch the given fields of one record and return the updated record."""
        url = f"{self.table_url(table)}/{quote(record_id, safe='')}"
        record = await self._request("PATCH", url, json_body={"fields": fields})
        logger.info("Updated record %s in %s fields=%s", record_id, table, sorted(fields))
        return record

    def close(self) -> None:
        self._session.close()
