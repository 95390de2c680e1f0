"""Services package."""

from freelancer_dashboard.services.storage import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStore,
    MalformedStoredDataError,
    StorageError,
    StorageWriteError,
    UserStore,
)

__all__ = [
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "KeyValueStore",
    "MalformedStoredDataError",
    "StorageError",
    "StorageWriteError",
    "UserStore",
]
