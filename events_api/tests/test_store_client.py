"""Tests for the record store HTTP client."""

from unittest.mock import MagicMock

import pytest
import requests

from events_api.store import (
    RemoteStoreClient,
    RemoteStoreConfig,
    RemoteStoreConfigError,
    RemoteStoreHTTPError,
    RemoteStoreTransportError,
)


def _response(status_code=200, payload=None, reason="OK"):
    resp = MagicMock()
    resp.status_code = status_code
    resp.ok = status_code < 400
    resp.reason = reason
    if isinstance(payload, Exception):
        resp.json.side_effect = payload
    else:
        resp.json.return_value = payload
    return resp


def _client(*responses, api_key="key123"):
    session = MagicMock()
    session.request.side_effect = list(responses)
    config = RemoteStoreConfig(api_key=api_key, base_id="appTEST", api_url="https://store.test/v0")
    return RemoteStoreClient(config, session=session), session


class TestListRecords:
    @pytest.mark.asyncio
    async def test_single_page(self):
        client, session = _client(_response(payload={"records": [{"id": "rec1", "fields": {}}]}))

        records = await client.list_records("Scheduled Slots", filter_formula="OR(RECORD_ID()='rec1')")

        assert records == [{"id": "rec1", "fields": {}}]
        args, kwargs = session.request.call_args
        assert args == ("GET", "https://store.test/v0/appTEST/Scheduled%20Slots")
        assert kwargs["params"] == {"pageSize": 100, "filterByFormula": "OR(RECORD_ID()='rec1')"}
        assert kwargs["headers"]["Authorization"] == "Bearer key123"
        assert kwargs["timeout"] == 10.0

    @pytest.mark.asyncio
    async def test_follows_offset_and_keeps_order(self):
        client, session = _client(
            _response(payload={"records": [{"id": "rec2"}, {"id": "rec1"}], "offset": "itr1/rec1"}),
            _response(payload={"records": [{"id": "rec3"}]}),
        )

        records = await client.list_records("Supplier Pickup Events")

        assert [r["id"] for r in records] == ["rec2", "rec1", "rec3"]
        first, second = session.request.call_args_list
        assert "offset" not in first.kwargs["params"]
        assert second.kwargs["params"]["offset"] == "itr1/rec1"

    @pytest.mark.asyncio
    async def test_flat_message_error(self):
        client, _ = _client(_response(429, {"message": "rate limited"}, reason="Too Many Requests"))

        with pytest.raises(RemoteStoreHTTPError) as exc_info:
            await client.list_records("Scheduled Slots")
        assert exc_info.value.message == "rate limited"
        assert exc_info.value.status_code == 429

    @pytest.mark.asyncio
    async def test_nested_error_message(self):
        payload = {"error": {"type": "INVALID_FILTER_BY_FORMULA", "message": "Invalid formula"}}
        client, _ = _client(_response(422, payload, reason="Unprocessable Entity"))

        with pytest.raises(RemoteStoreHTTPError) as exc_info:
            await client.list_records("Scheduled Slots")
        assert exc_info.value.message == "Invalid formula"

    @pytest.mark.asyncio
    async def test_error_code_and_reason_fallbacks(self):
        client, _ = _client(
            _response(404, {"error": "NOT_FOUND"}, reason="Not Found"),
            _response(500, ValueError("no json"), reason="Internal Server Error"),
        )

        with pytest.raises(RemoteStoreHTTPError) as first:
            await client.list_records("Drivers")
        assert first.value.message == "NOT_FOUND"

        with pytest.raises(RemoteStoreHTTPError) as second:
            await client.list_records("Drivers")
        assert second.value.message == "Internal Server Error"

    @pytest.mark.asyncio
    async def test_transport_failure(self):
        client, _ = _client(requests.ConnectionError("dns failure"))

        with pytest.raises(RemoteStoreTransportError):
            await client.list_records("Drivers")

    @pytest.mark.asyncio
    async def test_missing_api_key_makes_no_request(self):
        client, session = _client(api_key="")

        with pytest.raises(RemoteStoreConfigError):
            await client.list_records("Drivers")
        session.request.assert_not_called()


class TestUpdateRecord:
    @pytest.mark.asyncio
    async def test_patches_fields(self):
        updated = {"id": "rec1", "fields": {"Confirmed?": True}, "createdTime": "t"}
        client, session = _client(_response(payload=updated))

        result = await client.update_record("Scheduled Slots", "rec1", {"Confirmed?": True})

        assert result == updated
        args, kwargs = session.request.call_args
        assert args == ("PATCH", "https://store.test/v0/appTEST/Scheduled%20Slots/rec1")
        assert kwargs["json"] == {"fields": {"Confirmed?": True}}

    @pytest.mark.asyncio
    async def test_no_retry_on_failure(self):
        client, session = _client(_response(503, {"message": "down"}), _response(payload={}))

        with pytest.raises(RemoteStoreHTTPError):
            await client.update_record("Scheduled Slots", "rec1", {"Confirmed?": True})
        assert session.request.call_count == 1


def test_config_from_settings_selects_base():
    from events_api.config import AirtableSettings

    settings = AirtableSettings(api_key="k", environment="production", api_url="https://x.test/v0/")
    config = RemoteStoreConfig.from_settings(settings)
    assert config.base_id == settings.base_id_prod
    assert config.api_url == "https://x.test/v0"
