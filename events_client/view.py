"""View models for the event page.

``compose_view`` turns a pipeline snapshot into exactly one of three
states: loading, error or loaded. A UI binds to whichever it gets.
"""

from __future__ import annotations

import logging
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field

from events_api.models.events import Event
from events_api.models.volunteers import ScheduledSlot

from .errors import FetchErrorKind
from .pipeline import PageSnapshot
from .resolver import FetchStatus

logger = logging.getLogger("events_client.view")

DEFAULT_DRIVERS_GOAL = 30


class LoadingView(BaseModel):
    state: Literal["loading"] = "loading"


class ErrorView(BaseModel):
    state: Literal["error"] = "error"
    message: str = "Error..."
    kind: FetchErrorKind | None = None


class EventHeader(BaseModel):
    date_display: str
    time: str
    main_location: str
    total_participants: int


class ParticipantBreakdown(BaseModel):
    num_drivers: int
    drivers_goal: int
    drivers_display: str
    drivers_goal_met: bool
    num_packers: int
    num_both_drivers_and_packers: int
    num_only_drivers: int
    num_only_packers: int
    num_special_groups: int


class RosterRow(BaseModel):
    id: str
    first_name: str
    last_name: str
    time_slot: Any = None
    roles: list[str] = Field(default_factory=list)
    confirmed: bool = False
    volunteer_status: str = ""
    email: str = ""
    volunteer_group: str | None = None
    cant_come: bool = False


class EventView(BaseModel):
    state: Literal["loaded"] = "loaded"
    event_id: str
    header: EventHeader
    breakdown: ParticipantBreakdown
    roster: list[RosterRow]


PageView = Annotated[Union[LoadingView, ErrorView, EventView], Field(discriminator="state")]


def _is_outstanding(snapshot: PageSnapshot) -> bool:
    if FetchStatus.LOADING in (snapshot.event_status, snapshot.scheduled_slots_status):
        return True
    if snapshot.event_status is FetchStatus.IDLE:
        return True
    # The roster has not started yet but will, since the event resolved.
    return snapshot.event_status is FetchStatus.SUCCESS and snapshot.scheduled_slots_status is FetchStatus.IDLE


def header_for(event: Event) -> EventHeader:
    return EventHeader(
        date_display=event.date_display,
        time=event.time,
        main_location=event.main_location,
        total_participants=event.num_total_participants,
    )


def breakdown_for(event: Event, drivers_goal: int = DEFAULT_DRIVERS_GOAL) -> ParticipantBreakdown:
    return ParticipantBreakdown(
        num_drivers=event.num_drivers,
        drivers_goal=drivers_goal,
        drivers_display=f"{event.num_drivers}/{drivers_goal}",
        drivers_goal_met=event.num_drivers >= drivers_goal,
        num_packers=event.num_packers,
        num_both_drivers_and_packers=event.num_both_drivers_and_packers,
        num_only_drivers=event.num_only_drivers,
        num_only_packers=event.num_only_packers,
        num_special_groups=event.num_special_groups,
    )


def roster_row(slot: ScheduledSlot) -> RosterRow:
    f = slot.fields
    return RosterRow(
        id=slot.id,
        first_name=f.first_name,
        last_name=f.last_name,
        time_slot=f.slot_time,
        roles=list(f.type),
        confirmed=f.confirmed,
        volunteer_status=f.volunteer_status,
        email=f.email,
        volunteer_group=f.volunteer_group,
        cant_come=f.cant_come,
    )


def compose_view(snapshot: PageSnapshot, drivers_goal: int = DEFAULT_DRIVERS_GOAL) -> LoadingView | ErrorView | EventView:
    if _is_outstanding(snapshot):
        return LoadingView()

    error = snapshot.error
    if error is not None:
        logger.error("Event page failed (%s): %s", error.kind.value, error.message)
        return ErrorView(kind=error.kind)
    if snapshot.event is None:
        logger.error("Something went wrong. Event not found in futureEvents list.")
        return ErrorView(kind=FetchErrorKind.NOT_FOUND)
    if FetchStatus.ERROR in (snapshot.event_status, snapshot.scheduled_slots_status):
        logger.error("Event page failed without an error attached")
        return ErrorView()

    event = snapshot.event
    return EventView(
        event_id=event.id,
        header=header_for(event),
        breakdown=breakdown_for(event, drivers_goal),
        roster=[roster_row(slot) for slot in snapshot.scheduled_slots],
    )
