"""Errors raised while loading an event page.

Every failure the view can show carries a kind, even though the view only
ever renders one generic message.
"""

from __future__ import annotations

from enum import Enum


class FetchErrorKind(str, Enum):
    TRANSPORT = "transport"
    REMOTE = "remote"
    NOT_FOUND = "not_found"
    UNDEFINED_EVENT = "undefined_event"


class FetchError(Exception):
    """A fetch for the event page failed."""

    def __init__(self, message: str, *, kind: FetchErrorKind, status_code: int | None = None) -> None:
        self.message = message
        self.kind = kind
        self.status_code = status_code
        super().__init__(message)

    @classmethod
    def undefined_event(cls) -> FetchError:
        return cls("Undefined event", kind=FetchErrorKind.UNDEFINED_EVENT)

    @classmethod
    def from_exception(cls, exc: Exception) -> FetchError:
        """Wrap a failure the source did not classify; treated as transport."""
        if isinstance(exc, FetchError):
            return exc
        return cls(str(exc) or exc.__class__.__name__, kind=FetchErrorKind.TRANSPORT)

    @classmethod
    def not_found(cls, event_id: str | None) -> FetchError:
        return cls(
            f"Event {event_id} not found in future events list",
            kind=FetchErrorKind.NOT_FOUND,
        )


class InvalidTransitionError(RuntimeError):
    """Raised when the page pipeline is asked to make an illegal move."""
