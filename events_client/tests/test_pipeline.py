import asyncio

import pytest

from events_client.errors import FetchError, FetchErrorKind, InvalidTransitionError
from events_client.pipeline import EventPage, PageState
from events_client.resolver import FetchStatus
from events_client.tests.sources import FakeSource, make_event, make_slot


def _source():
    return FakeSource(
        events=[make_event("ev1", ["r1", "r2"])],
        slots=[make_slot("r1", "Bob"), make_slot("r2", "Ann")],
    )


class TestLoad:
    @pytest.mark.asyncio
    async def test_event_then_roster(self):
        source = _source()
        page = EventPage(source, "ev1")
        assert page.state is PageState.IDLE

        snapshot = await page.load()

        assert snapshot.state is PageState.READY
        assert snapshot.event_status is FetchStatus.SUCCESS
        assert snapshot.scheduled_slots_status is FetchStatus.SUCCESS
        assert [s.fields.first_name for s in snapshot.scheduled_slots] == ["Ann", "Bob"]
        assert source.slot_calls == ["r1,r2"]

    @pytest.mark.asyncio
    async def test_event_failure_never_starts_roster(self):
        source = _source()
        source.events_error = FetchError("rate limited", kind=FetchErrorKind.REMOTE)

        snapshot = await EventPage(source, "ev1").load()

        assert snapshot.state is PageState.ERROR
        assert snapshot.event_status is FetchStatus.ERROR
        assert snapshot.scheduled_slots_status is FetchStatus.IDLE
        assert snapshot.error.message == "rate limited"
        assert source.slot_calls == []

    @pytest.mark.asyncio
    async def test_unknown_event_never_starts_roster(self):
        source = _source()

        snapshot = await EventPage(source, "ev404").load()

        assert snapshot.state is PageState.ERROR
        assert snapshot.error.kind is FetchErrorKind.NOT_FOUND
        assert source.slot_calls == []

    @pytest.mark.asyncio
    async def test_roster_failure(self):
        source = _source()
        source.slots_error = FetchError("timed out", kind=FetchErrorKind.TRANSPORT)

        snapshot = await EventPage(source, "ev1").load()

        assert snapshot.state is PageState.ERROR
        assert snapshot.event_status is FetchStatus.SUCCESS
        assert snapshot.scheduled_slots_status is FetchStatus.ERROR
        assert snapshot.error.kind is FetchErrorKind.TRANSPORT

    @pytest.mark.asyncio
    async def test_reload_after_error(self):
        source = _source()
        source.events_error = FetchError("down", kind=FetchErrorKind.TRANSPORT)
        page = EventPage(source, "ev1")
        await page.load()

        source.events_error = None
        snapshot = await page.load()

        assert snapshot.state is PageState.READY
        assert snapshot.error is None

    @pytest.mark.asyncio
    async def test_unclassified_event_failure_ends_in_error(self):
        source = _source()
        source.events_error = ValueError("unexpected payload")
        page = EventPage(source, "ev1")

        snapshot = await page.load()

        assert snapshot.state is PageState.ERROR
        assert snapshot.error.kind is FetchErrorKind.TRANSPORT
        assert snapshot.error.message == "unexpected payload"

        source.events_error = None
        snapshot = await page.load()
        assert snapshot.state is PageState.READY

    @pytest.mark.asyncio
    async def test_unclassified_roster_failure_ends_in_error(self):
        source = _source()
        source.slots_error = KeyError("records")

        snapshot = await EventPage(source, "ev1").load()

        assert snapshot.state is PageState.ERROR
        assert snapshot.scheduled_slots_status is FetchStatus.ERROR
        assert snapshot.error.kind is FetchErrorKind.TRANSPORT

    @pytest.mark.asyncio
    async def test_reload_while_load_in_flight(self):
        source = _source()
        page = EventPage(source, "ev1")
        gate = asyncio.Event()
        source.events_gate = gate
        first = asyncio.create_task(page.load())
        await asyncio.sleep(0)
        assert page.state is PageState.LOADING_EVENT

        source.events_gate = None
        snapshot = await page.load()
        assert snapshot.state is PageState.READY

        gate.set()
        snapshot = await first
        assert snapshot.state is PageState.READY
        assert source.event_calls == 2


class TestRefetch:
    @pytest.mark.asyncio
    async def test_refetch_replaces_roster(self):
        source = _source()
        page = EventPage(source, "ev1")
        await page.load()

        source.slots = [make_slot("r1", "Bob"), make_slot("r2", "Ann"), make_slot("r3", "Al")]
        snapshot = await page.refetch_scheduled_slots()

        assert source.slot_calls == ["r1,r2", "r1,r2"]
        assert [s.fields.first_name for s in snapshot.scheduled_slots] == ["Al", "Ann", "Bob"]
        assert snapshot.state is PageState.READY

    @pytest.mark.asyncio
    async def test_refetch_before_event_resolves(self):
        with pytest.raises(FetchError) as exc_info:
            await EventPage(_source(), "ev1").refetch_scheduled_slots()
        assert exc_info.value.kind is FetchErrorKind.UNDEFINED_EVENT

    @pytest.mark.asyncio
    async def test_mark_attendance_updates_then_refetches(self):
        source = _source()
        page = EventPage(source, "ev1")
        await page.load()

        await page.mark_attendance("r2", True)
        await page.mark_cant_come("r1")

        assert source.updates == [("r2", {"Confirmed?": True}), ("r1", {"Can't Come": True})]
        assert len(source.slot_calls) == 3

    @pytest.mark.asyncio
    async def test_last_completed_refetch_wins(self):
        source = _source()
        page = EventPage(source, "ev1")
        await page.load()

        gate = asyncio.Event()
        source.slots_gate = gate
        source.slots = [make_slot("r1", "Stale")]
        slow = asyncio.create_task(page.refetch_scheduled_slots())
        await asyncio.sleep(0)

        source.slots_gate = None
        source.slots = [make_slot("r1", "Fresh")]
        await page.refetch_scheduled_slots()
        assert [s.fields.first_name for s in page.scheduled_slots] == ["Fresh"]

        gate.set()
        await slow
        assert [s.fields.first_name for s in page.scheduled_slots] == ["Stale"]
        assert page.state is PageState.READY

    @pytest.mark.asyncio
    async def test_reload_while_refetch_in_flight(self):
        source = _source()
        page = EventPage(source, "ev1")
        await page.load()

        gate = asyncio.Event()
        source.slots_gate = gate
        source.slots = [make_slot("r1", "Stale")]
        slow = asyncio.create_task(page.refetch_scheduled_slots())
        await asyncio.sleep(0)
        assert page.state is PageState.LOADING_ROSTER

        source.slots_gate = None
        source.slots = [make_slot("r1", "Fresh")]
        snapshot = await page.load()
        assert snapshot.state is PageState.READY
        assert [s.fields.first_name for s in snapshot.scheduled_slots] == ["Fresh"]

        gate.set()
        await slow
        assert [s.fields.first_name for s in page.scheduled_slots] == ["Stale"]
        assert page.state is PageState.READY

    @pytest.mark.asyncio
    async def test_roster_landing_during_reload_keeps_page_loading(self):
        source = _source()
        page = EventPage(source, "ev1")
        await page.load()

        slots_gate = asyncio.Event()
        source.slots_gate = slots_gate
        refetch = asyncio.create_task(page.refetch_scheduled_slots())
        await asyncio.sleep(0)

        events_gate = asyncio.Event()
        source.events_gate = events_gate
        source.slots_gate = None
        reload = asyncio.create_task(page.load())
        await asyncio.sleep(0)
        assert page.state is PageState.LOADING_EVENT

        slots_gate.set()
        await refetch
        assert page.state is PageState.LOADING_EVENT
        assert page.event_status is FetchStatus.LOADING

        events_gate.set()
        snapshot = await reload
        assert snapshot.state is PageState.READY

    @pytest.mark.asyncio
    async def test_failed_update_is_recorded_on_the_page(self):
        source = _source()
        page = EventPage(source, "ev1")
        await page.load()
        source.update_error = FetchError("record is locked", kind=FetchErrorKind.REMOTE, status_code=422)

        snapshot = await page.mark_attendance("r2", True)

        assert snapshot.state is PageState.ERROR
        assert snapshot.error.kind is FetchErrorKind.REMOTE
        assert snapshot.error.message == "record is locked"
        assert source.slot_calls == ["r1,r2"]

        source.update_error = None
        snapshot = await page.mark_attendance("r2", True)
        assert snapshot.state is PageState.READY
        assert snapshot.error is None


def test_roster_stage_needs_a_resolved_event():
    page = EventPage(_source(), "ev1")
    with pytest.raises(InvalidTransitionError):
        page._move(PageState.LOADING_ROSTER)
