"""Tests for lifespan management."""

import os
from unittest.mock import MagicMock, patch

import pytest

from events_api import state


class TestLifespanResources:
    def test_defaults(self):
        from events_api.lifespan import LifespanResources

        resources = LifespanResources()
        assert resources.store_client is None
        assert resources.redis_client is None


class TestInitStoreClient:
    def test_uses_configured_base(self):
        from events_api.config import clear_settings_cache
        from events_api.lifespan import init_store_client

        env = {"AIRTABLE_API_KEY": "pat", "AIRTABLE_ENVIRONMENT": "production"}
        with patch.dict(os.environ, env, clear=True):
            clear_settings_cache()
            try:
                client = init_store_client()
            finally:
                clear_settings_cache()
        assert client.config.base_id == "app7zige4DRGqIaL2"
        assert client.config.api_key == "pat"
        client.close()


class TestSetupAndCleanup:
    @pytest.mark.asyncio
    async def test_without_cache_no_redis(self):
        from events_api.lifespan import cleanup_resources, setup_resources

        with patch("events_api.lifespan.get_settings") as mock_settings, \
                patch("events_api.lifespan.init_store_client") as mock_init_store, \
                patch("events_api.lifespan.init_redis") as mock_init_redis:
            mock_settings.return_value.features.events_cache = False
            store_client = MagicMock()
            mock_init_store.return_value = store_client

            resources = await setup_resources()

            assert resources.redis_client is None
            assert state.store_client is store_client
            mock_init_redis.assert_not_called()

            await cleanup_resources(resources)
            store_client.close.assert_called_once()
            assert state.store_client is None

    @pytest.mark.asyncio
    async def test_init_redis_creates_client(self):
        from events_api.lifespan import init_redis

        mock_redis_class = MagicMock()
        mock_client = MagicMock(spec=["get", "set"])
        mock_redis_class.return_value = mock_client

        with patch("events_api.lifespan.redis.Redis", mock_redis_class):
            with patch("events_api.lifespan.get_settings") as mock_settings:
                mock_settings.return_value.redis.host = "localhost"
                mock_settings.return_value.redis.port = 6379
                mock_settings.return_value.redis.password = ""
                mock_settings.return_value.redis.max_connections = 10
                mock_settings.return_value.redis.pool_timeout_sec = 5.0
                mock_settings.return_value.redis.socket_timeout = 5.0
                mock_settings.return_value.redis.socket_connect_timeout = 5.0

                result = await init_redis()

                assert result is mock_client
                mock_redis_class.assert_called_once()
