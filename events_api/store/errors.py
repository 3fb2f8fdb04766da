"""Record store errors."""

from __future__ import annotations


class RemoteStoreError(RuntimeError):
    """Base class for failures talking to the record store."""


class RemoteStoreHTTPError(RemoteStoreError):
    """Raised when the record store answers with a non-success status."""

    def __init__(self, message: str, *, status_code: int) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)

    @classmethod
    def from_payload(cls, status_code: int, payload: object, reason: str = "") -> RemoteStoreHTTPError:
        """Build an error from the store's JSON error body.

        The store reports errors as ``{"error": {"type": ..., "message": ...}}``
        or ``{"error": "NOT_FOUND"}``; proxies in front of it may answer with
        a flat ``{"message": ...}``.
        """
        message = None
        if isinstance(payload, dict):
            if isinstance(payload.get("message"), str):
                message = payload["message"]
            else:
                error = payload.get("error")
                if isinstance(error, dict) and isinstance(error.get("message"), str):
                    message = error["message"]
                elif isinstance(error, str):
                    message = error
        if not message:
            message = reason or f"Record store HTTP {status_code}"
        return cls(message, status_code=status_code)


class RemoteStoreTransportError(RemoteStoreError):
    """Raised when the record store could not be reached at all."""


class RemoteStoreConfigError(RemoteStoreError):
    """Raised when the record store client is misconfigured."""

    @classmethod
    def missing_api_key(cls) -> RemoteStoreConfigError:
        """Return an error when no API key is configured."""
        return cls("AIRTABLE_API_KEY is required for the record store")
