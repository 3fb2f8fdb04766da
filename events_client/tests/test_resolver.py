import pytest

from events_client.errors import FetchError, FetchErrorKind
from events_client.resolver import EventResolver, FetchStatus, find_event, resolve_event
from events_client.tests.sources import FakeSource, make_event


def test_resolve_returns_matching_event():
    events = [make_event("ev1"), make_event("ev2")]
    assert resolve_event("ev2", events) is events[1]


def test_resolve_missing_event_raises_not_found():
    with pytest.raises(FetchError) as exc_info:
        resolve_event("ev9", [make_event("ev1")])
    assert exc_info.value.kind is FetchErrorKind.NOT_FOUND


def test_undefined_id_never_matches():
    assert find_event(None, [make_event("ev1")]) is None


@pytest.mark.asyncio
async def test_resolver_reports_success():
    resolver = EventResolver(FakeSource(events=[make_event("ev1")]))
    assert resolver.resolution.status is FetchStatus.IDLE

    resolution = await resolver.resolve("ev1")

    assert resolution.status is FetchStatus.SUCCESS
    assert resolution.event.id == "ev1"
    assert resolution.error is None


@pytest.mark.asyncio
async def test_resolver_reports_missing_event_as_error():
    resolution = await EventResolver(FakeSource(events=[make_event("ev1")])).resolve("ev2")
    assert resolution.status is FetchStatus.ERROR
    assert resolution.event is None
    assert resolution.error.kind is FetchErrorKind.NOT_FOUND


@pytest.mark.asyncio
async def test_resolver_carries_fetch_error():
    source = FakeSource()
    source.events_error = FetchError("rate limited", kind=FetchErrorKind.REMOTE, status_code=502)

    resolution = await EventResolver(source).resolve("ev1")

    assert resolution.status is FetchStatus.ERROR
    assert resolution.error.message == "rate limited"
