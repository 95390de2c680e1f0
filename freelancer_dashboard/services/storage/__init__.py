"""
Storage Services Package

Provides the key-value store interface, its implementations and the
UserStore that lays the dashboard's schema on top of it.
"""

from freelancer_dashboard.services.storage.interface import (
    KeyValueStore,
    MalformedStoredDataError,
    StorageError,
    StorageWriteError,
)
from freelancer_dashboard.services.storage.json_file import JsonFileKeyValueStore
from freelancer_dashboard.services.storage.memory import InMemoryKeyValueStore
from freelancer_dashboard.services.storage.user_store import (
    CURRENT_USER_KEY,
    USERS_KEY,
    UserStore,
    user_data_key,
)

__all__ = [
    # Interface
    "KeyValueStore",
    # Exceptions
    "MalformedStoredDataError",
    "StorageError",
    "StorageWriteError",
    # Implementations
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    # Schema
    "CURRENT_USER_KEY",
    "USERS_KEY",
    "UserStore",
    "user_data_key",
]
