"""
JSON File Storage Implementation

DESIGN DECISION: One JSON file holds the whole key → value mapping, the
on-disk equivalent of a browser's local storage:
1. Human readable, the user can open and back up a single file
2. No database setup required
3. Same string-valued schema as the original local storage

TRADEOFFS:
- Every write rewrites the whole file (fine for one freelancer's data)
- Two processes sharing the file race, last write wins
- Writes go to a temp file first and are renamed into place, so a crash
  never leaves a half-written file behind
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Optional

import structlog
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from freelancer_dashboard.services.storage.interface import (
    KeyValueStore,
    StorageError,
    StorageWriteError,
)


logger = structlog.get_logger(__name__)


class JsonFileKeyValueStore(KeyValueStore):
    """
    File-backed implementation of the key-value store.

    The file is re-read on every access so that edits made by another
    process are picked up before the next write.
    """

    def __init__(self, path: Path):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        """Load the whole mapping. A missing or unparsable file reads as empty."""
        if not self._path.exists():
            return {}
        try:
            raw = self._path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            logger.warning("storage_file_malformed", path=str(self._path), error=str(e))
            return {}
        except OSError as e:
            raise StorageError(f"Failed to read {self._path}: {e}")

        if not raw.strip():
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning("storage_file_malformed", path=str(self._path), error=str(e))
            return {}
        if not isinstance(data, dict):
            logger.warning("storage_file_malformed", path=str(self._path), error="not an object")
            return {}

        # Only string values are valid, anything else is dropped
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.1, min=0.1, max=1),
        retry=retry_if_exception_type(OSError),
        reraise=True,
    )
    def _write_all(self, items: dict[str, str]) -> None:
        """Atomically replace the file with the given mapping."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self._path.name}.",
            suffix=".tmp",
            dir=self._path.parent,
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(items, f, indent=2, ensure_ascii=False)
            os.replace(tmp_name, self._path)
        except OSError:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    def get_item(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def _read_for_write(self, key: str) -> dict[str, str]:
        """Read before a write; an unreadable file fails the write."""
        try:
            return self._read_all()
        except StorageError as e:
            raise StorageWriteError(key, str(e))

    def set_item(self, key: str, value: str) -> None:
        items = self._read_for_write(key)
        items[key] = value
        try:
            self._write_all(items)
        except OSError as e:
            raise StorageWriteError(key, str(e))

    def remove_item(self, key: str) -> None:
        items = self._read_for_write(key)
        if key not in items:
            return
        del items[key]
        try:
            self._write_all(items)
        except OSError as e:
            raise StorageWriteError(key, str(e))

    def keys(self) -> list[str]:
        return list(self._read_all())
