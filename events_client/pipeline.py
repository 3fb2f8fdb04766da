"""Two-stage loading of an event page.

The page first resolves its event, then loads that event's roster. The
roster stage is only entered once the event stage has succeeded, because it
needs the event's slot ids as input.

States: idle, loading_event, loading_roster, ready, error. A load walks
idle -> loading_event -> loading_roster -> ready, dropping to error from
either loading stage. ``ready`` re-enters ``loading_roster`` on refetch,
and ``error`` may be left by reloading the whole page or refetching the
roster. A reload is accepted from every state and is the only way out of
``idle``. Concurrent fetches are not de-duplicated: whichever finishes last
sets the roster, and a roster result landing during a reload does not move
the page out of ``loading_event``. Any failure, classified or not, ends in
``error`` so the page can always be reloaded.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable
from dataclasses import dataclass, field
from enum import Enum

from events_api.models.events import Event
from events_api.models.volunteers import ScheduledSlot, SlotUpdate

from .errors import FetchError, InvalidTransitionError
from .resolver import EventResolver, FetchStatus
from .roster import RosterLoader
from .source import EventSource

logger = logging.getLogger("events_client.pipeline")


class PageState(str, Enum):
    IDLE = "idle"
    LOADING_EVENT = "loading_event"
    LOADING_ROSTER = "loading_roster"
    READY = "ready"
    ERROR = "error"


TRANSITIONS: dict[PageState, frozenset[PageState]] = {
    PageState.IDLE: frozenset({PageState.LOADING_EVENT}),
    PageState.LOADING_EVENT: frozenset({PageState.LOADING_EVENT, PageState.LOADING_ROSTER, PageState.ERROR}),
    PageState.LOADING_ROSTER: frozenset({PageState.LOADING_EVENT, PageState.LOADING_ROSTER, PageState.READY, PageState.ERROR}),
    PageState.READY: frozenset({PageState.LOADING_EVENT, PageState.LOADING_ROSTER, PageState.READY, PageState.ERROR}),
    PageState.ERROR: frozenset({PageState.LOADING_EVENT, PageState.LOADING_ROSTER, PageState.READY, PageState.ERROR}),
}


@dataclass
class PageSnapshot:
    """Everything the view needs, frozen at one point in time."""

    state: PageState
    event: Event | None = None
    event_status: FetchStatus = FetchStatus.IDLE
    event_error: FetchError | None = None
    scheduled_slots: list[ScheduledSlot] = field(default_factory=list)
    scheduled_slots_status: FetchStatus = FetchStatus.IDLE
    scheduled_slots_error: FetchError | None = None

    @property
    def error(self) -> FetchError | None:
        return self.event_error or self.scheduled_slots_error


class EventPage:
    def __init__(self, source: EventSource, event_id: str | None):
        self.source = source
        self.event_id = event_id
        self.resolver = EventResolver(source)
        self.roster = RosterLoader(source)
        self.state = PageState.IDLE
        self.event: Event | None = None
        self.event_status = FetchStatus.IDLE
        self.event_error: FetchError | None = None
        self.scheduled_slots: list[ScheduledSlot] = []
        self.scheduled_slots_status = FetchStatus.IDLE
        self.scheduled_slots_error: FetchError | None = None

    def _move(self, to: PageState) -> None:
        if to not in TRANSITIONS[self.state]:
            raise InvalidTransitionError(f"cannot move from {self.state.value} to {to.value}")
        logger.debug("page %s: %s -> %s", self.event_id, self.state.value, to.value)
        self.state = to

    def snapshot(self) -> PageSnapshot:
        return PageSnapshot(
            state=self.state,
            event=self.event,
            event_status=self.event_status,
            event_error=self.event_error,
            scheduled_slots=list(self.scheduled_slots),
            scheduled_slots_status=self.scheduled_slots_status,
            scheduled_slots_error=self.scheduled_slots_error,
        )

    async def load(self) -> PageSnapshot:
        """Resolve the event, then load its roster."""
        self._move(PageState.LOADING_EVENT)
        self.event = None
        self.event_status = FetchStatus.LOADING
        self.event_error = None
        self.scheduled_slots = []
        self.scheduled_slots_status = FetchStatus.IDLE
        self.scheduled_slots_error = None

        resolution = await self.resolver.resolve(self.event_id)
        self.event_status = resolution.status
        if resolution.status is not FetchStatus.SUCCESS:
            self.event_error = resolution.error or FetchError.not_found(self.event_id)
            self._move(PageState.ERROR)
            return self.snapshot()

        self.event = resolution.event
        self._move(PageState.LOADING_ROSTER)
        self.scheduled_slots_status = FetchStatus.LOADING
        await self._run_roster(self.roster.load(self.event))
        return self.snapshot()

    async def refetch_scheduled_slots(self) -> PageSnapshot:
        """Run the roster request again; the current roster stays visible meanwhile."""
        if self.event_status is not FetchStatus.SUCCESS:
            raise FetchError.undefined_event()
        self._move(PageState.LOADING_ROSTER)
        if not self.scheduled_slots:
            self.scheduled_slots_status = FetchStatus.LOADING
        await self._run_roster(self.roster.refetch())
        return self.snapshot()

    async def mark_attendance(self, slot_id: str, confirmed: bool) -> PageSnapshot:
        """Confirm (or un-confirm) one volunteer, then reload the roster."""
        return await self._update_then_refetch(slot_id, SlotUpdate(confirmed=confirmed))

    async def mark_cant_come(self, slot_id: str, cant_come: bool = True) -> PageSnapshot:
        return await self._update_then_refetch(slot_id, SlotUpdate(cant_come=cant_come))

    async def _update_then_refetch(self, slot_id: str, update: SlotUpdate) -> PageSnapshot:
        if self.event_status is not FetchStatus.SUCCESS:
            raise FetchError.undefined_event()
        try:
            await self.source.update_slot(slot_id, update)
        except Exception as e:
            logger.warning("Updating slot %s failed: %s", slot_id, e)
            self._fail_roster(FetchError.from_exception(e))
            return self.snapshot()
        return await self.refetch_scheduled_slots()

    async def _run_roster(self, fetch: Awaitable[list[ScheduledSlot]]) -> None:
        try:
            slots = await fetch
        except FetchError as e:
            self._fail_roster(e)
        except Exception as e:
            logger.exception("Loading roster for %s failed", self.event_id)
            self._fail_roster(FetchError.from_exception(e))
        else:
            self._finish_roster(slots)

    def _finish_roster(self, slots: list[ScheduledSlot]) -> None:
        self.scheduled_slots = slots
        self.scheduled_slots_status = FetchStatus.SUCCESS
        self.scheduled_slots_error = None
        self._settle(PageState.READY)

    def _fail_roster(self, error: FetchError) -> None:
        self.scheduled_slots_status = FetchStatus.ERROR
        self.scheduled_slots_error = error
        self._settle(PageState.ERROR)

    def _settle(self, to: PageState) -> None:
        # A reload started meanwhile owns the page state; the roster result is kept as data only.
        if self.state is PageState.LOADING_EVENT:
            return
        self._move(to)
