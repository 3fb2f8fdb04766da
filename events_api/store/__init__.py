"""Access to the hosted record store holding events, slots and drivers."""

from .client import RemoteStoreClient, RemoteStoreConfig
from .errors import (
    RemoteStoreConfigError,
    RemoteStoreError,
    RemoteStoreHTTPError,
    RemoteStoreTransportError,
)

__all__ = [
    "RemoteStoreClient",
    "RemoteStoreConfig",
    "RemoteStoreConfigError",
    "RemoteStoreError",
    "RemoteStoreHTTPError",
    "RemoteStoreTransportError",
]
