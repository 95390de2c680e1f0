"""
Abstract Storage Interface

DESIGN DECISION: The dashboard persists through a plain string key-value
store, the same shape as a browser's local storage. This allows us to:
1. Keep data in a JSON file on disk for the real app
2. Use in-memory storage for testing
3. Swap the backend without touching session or domain code

The interface is intentionally tiny. Everything that knows about keys,
users and JSON blobs lives one level up in UserStore.
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStore(ABC):
    """
    Abstract interface for a string key-value store.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """
        Read the value stored under a key.

        Returns:
            The stored string, or None if the key is absent

        Raises:
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """
        Store a value under a key, replacing any previous value.

        Raises:
            StorageWriteError: If the value could not be written
        """
        pass

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """
        Remove a key. Removing an absent key is a no-op.

        Raises:
            StorageWriteError: If the removal could not be written
        """
        pass

    @abstractmethod
    def keys(self) -> list[str]:
        """List every stored key."""
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageWriteError(StorageError):
    """A write did not reach the backend."""

    def __init__(self, key: str, message: str):
        self.key = key
        super().__init__(f"Failed to write '{key}': {message}")


class MalformedStoredDataError(StorageError):
    """A stored value could not be decoded into the expected shape."""

    def __init__(self, key: str, message: str):
        self.key = key
        super().__init__(f"Malformed value under '{key}': {message}")
