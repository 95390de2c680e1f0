"""
Component Factory for Freelancer Dashboard

Ties together storage, logging and the session manager from settings.
The UI never builds these pieces itself.
"""

from pathlib import Path
from typing import Optional

from freelancer_dashboard.activity import ActivityLogger, configure_logging
from freelancer_dashboard.config import get_settings
from freelancer_dashboard.services.storage import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStore,
    UserStore,
)
from freelancer_dashboard.session import SessionManager


def create_store(
    backend: Optional[str] = None,
    data_file: Optional[Path] = None,
) -> KeyValueStore:
    """
    Build the configured key-value store.

    Args:
        backend: 'json_file' or 'memory'; defaults to the storage settings
        data_file: Overrides the configured JSON file location
    """
    storage_settings = get_settings().storage
    backend = backend or storage_settings.backend

    if backend == "memory":
        return InMemoryKeyValueStore()
    if backend == "json_file":
        return JsonFileKeyValueStore(data_file or storage_settings.data_file)
    raise ValueError(f"Unknown storage backend: {backend}")


def create_app_components(
    store: Optional[KeyValueStore] = None,
) -> tuple[SessionManager, UserStore]:
    """
    Factory function to create all application components.

    Args:
        store: Key-value store to use. Built from settings when omitted.

    Returns:
        (session_manager, user_store)
    """
    configure_logging(get_settings().app.effective_log_level)

    activity_logger = ActivityLogger()
    user_store = UserStore(store or create_store(), activity_logger=activity_logger)
    session_manager = SessionManager(user_store, activity_logger=activity_logger)

    return session_manager, user_store
