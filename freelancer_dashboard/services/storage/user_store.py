"""
User Store

Maps the dashboard's storage schema onto any KeyValueStore:

    users                -> JSON object {username: password}
    currentUser          -> the active username, absent when logged out
    userData_<username>  -> JSON object {"clients": [...], "projects": [...]}

DESIGN DECISION: Reads are maximally forgiving. A missing or malformed
value reads as an empty default and a malformed record inside a valid blob
is skipped. Both cases are logged, never raised. Writes are strict: a
failed write raises StorageWriteError to the caller.
"""

import json
from typing import Optional, TypeVar

from pydantic import BaseModel, ValidationError

from freelancer_dashboard.activity import ActivityLogger
from freelancer_dashboard.models.client import Client
from freelancer_dashboard.models.project import Project
from freelancer_dashboard.models.user_data import UserData
from freelancer_dashboard.services.storage.interface import (
    KeyValueStore,
    MalformedStoredDataError,
)


USERS_KEY = "users"
CURRENT_USER_KEY = "currentUser"
USER_DATA_KEY_PREFIX = "userData_"

RecordT = TypeVar("RecordT", bound=BaseModel)


def user_data_key(username: str) -> str:
    """Storage key of a user's data blob."""
    return f"{USER_DATA_KEY_PREFIX}{username}"


def decode_registry(raw: str) -> dict[str, str]:
    """
    Parse the stored user registry.

    Raises:
        MalformedStoredDataError: If the value is not a JSON object
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise MalformedStoredDataError(USERS_KEY, str(e))
    if not isinstance(data, dict):
        raise MalformedStoredDataError(USERS_KEY, "expected a JSON object")
    return {str(name): password for name, password in data.items() if isinstance(password, str)}


def decode_user_blob(key: str, raw: str) -> dict:
    """
    Parse a stored user data blob into its raw clients/projects lists.

    Raises:
        MalformedStoredDataError: If the value is not a JSON object
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise MalformedStoredDataError(key, str(e))
    if not isinstance(data, dict):
        raise MalformedStoredDataError(key, "expected a JSON object")

    blob = {}
    for field in ("clients", "projects"):
        items = data.get(field) or []
        if not isinstance(items, list):
            raise MalformedStoredDataError(key, f"'{field}' is not a list")
        blob[field] = items
    return blob


class UserStore:
    """Reads and writes users, the current-user marker and data blobs."""

    def __init__(
        self,
        store: KeyValueStore,
        activity_logger: Optional[ActivityLogger] = None,
    ):
        self._store = store
        self._activity_logger = activity_logger or ActivityLogger()

    @property
    def store(self) -> KeyValueStore:
        return self._store

    # ------------------------------------------------------------------
    # Registry
    # ------------------------------------------------------------------

    def load_registry(self) -> dict[str, str]:
        """All known users and their passwords; empty if missing or malformed."""
        raw = self._store.get_item(USERS_KEY)
        if raw is None:
            return {}
        try:
            return decode_registry(raw)
        except MalformedStoredDataError as e:
            self._activity_logger.log_stored_data_malformed(USERS_KEY, str(e))
            return {}

    def register_user(self, username: str, password: str) -> None:
        """Add a user to the registry. Existing entries are never removed."""
        registry = self.load_registry()
        registry[username] = password
        self._store.set_item(USERS_KEY, json.dumps(registry))

    # ------------------------------------------------------------------
    # Current user marker
    # ------------------------------------------------------------------

    def get_current_user(self) -> Optional[str]:
        return self._store.get_item(CURRENT_USER_KEY) or None

    def set_current_user(self, username: str) -> None:
        self._store.set_item(CURRENT_USER_KEY, username)

    def clear_current_user(self) -> None:
        self._store.remove_item(CURRENT_USER_KEY)

    # ------------------------------------------------------------------
    # Data blobs
    # ------------------------------------------------------------------

    def load_user_data(self, username: str) -> UserData:
        """Load a user's clients and projects, forgiving any malformed content."""
        key = user_data_key(username)
        raw = self._store.get_item(key)
        if raw is None:
            return UserData()

        try:
            blob = decode_user_blob(key, raw)
        except MalformedStoredDataError as e:
            self._activity_logger.log_stored_data_malformed(key, str(e))
            return UserData()

        return UserData(
            clients=self._decode_records(key, "client", blob["clients"], Client),
            projects=self._decode_records(key, "project", blob["projects"], Project),
        )

    def save_user_data(self, username: str, data: UserData) -> None:
        """Rewrite the user's whole blob."""
        self._store.set_item(user_data_key(username), json.dumps(data.to_storage_dict()))

    def _decode_records(
        self,
        key: str,
        entity_type: str,
        items: list,
        model: type[RecordT],
    ) -> list[RecordT]:
        records = []
        for item in items:
            try:
                records.append(model.model_validate(item))
            except ValidationError as e:
                # Skip malformed records
                self._activity_logger.log_stored_record_skipped(key, entity_type, str(e))
        return records
