"""Front-end data layer for the event page.

Resolves an event, loads its roster and composes the page view.
"""

from events_client.errors import FetchError, FetchErrorKind, InvalidTransitionError
from events_client.pipeline import EventPage, PageSnapshot, PageState
from events_client.resolver import EventResolution, EventResolver, FetchStatus, resolve_event
from events_client.roster import RosterLoader, sort_slots
from events_client.source import EventSource, HttpEventSource
from events_client.view import ErrorView, EventView, LoadingView, PageView, compose_view

__all__ = [
    # Pipeline
    "EventPage",
    "PageSnapshot",
    "PageState",
    # Stages
    "EventResolution",
    "EventResolver",
    "FetchStatus",
    "RosterLoader",
    "resolve_event",
    "sort_slots",
    # Sources
    "EventSource",
    "HttpEventSource",
    # Views
    "ErrorView",
    "EventView",
    "LoadingView",
    "PageView",
    "compose_view",
    # Errors
    "FetchError",
    "FetchErrorKind",
    "InvalidTransitionError",
]
