import os
import sys
REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

import pytest
from fastapi.testclient import TestClient
import fakeredis.aioredis as fakeredis

import events_api.lifespan as lifespan
from events_api.config import clear_settings_cache
from events_api.dependencies import get_store_client
from events_api.tests.fakes import FakeStoreClient


class _AwaitableRedis:
    def __init__(self, client):
        self._client = client

    def __await__(self):
        async def _coro():
            return self._client

        return _coro().__await__()


@pytest.fixture
def store():
    return FakeStoreClient()


def _make_client(monkeypatch, store, env):
    for key, value in env.items():
        monkeypatch.setenv(key, value)
    clear_settings_cache()

    def fake_redis_constructor(*_args, **_kwargs):
        fake = fakeredis.FakeRedis(decode_responses=True)
        return _AwaitableRedis(fake)

    monkeypatch.setattr(lifespan.redis, "Redis", fake_redis_constructor)

    import events_api.main as main

    main.app.dependency_overrides[get_store_client] = lambda: store
    return main.app


@pytest.fixture
def client(monkeypatch, store):
    app = _make_client(monkeypatch, store, {"ENABLE_EVENTS_CACHE": "0"})
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    clear_settings_cache()


@pytest.fixture
def cached_client(monkeypatch, store):
    app = _make_client(monkeypatch, store, {"ENABLE_EVENTS_CACHE": "1"})
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    clear_settings_cache()
