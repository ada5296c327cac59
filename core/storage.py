# core/storage.py

"""
Key-value storage adapters for persisted gradebook blobs.

A storage adapter maps string keys to string values, mirroring browser local storage:
    - `get(key)` returns the stored string, or None when the key has never been written.
    - `set(key, value)` overwrites the stored string in full. The last write always wins.

Two adapters are provided:
    - `InMemoryStorage` keeps blobs in a dictionary and is discarded with the process.
    - `JsonFileStorage` writes one `<key>.json` file per key inside a directory.

Adapters never interpret the blobs they hold; parsing is the caller's responsibility.
"""

import os
import re
from typing import Protocol

from core.logger import get_logger

logger = get_logger(__name__)


class StorageAdapter(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class InMemoryStorage:

    def __init__(self, initial: dict[str, str] | None = None):
        self._blobs: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._blobs.get(key)

    def set(self, key: str, value: str) -> None:
        self._blobs[key] = value

    def __contains__(self, key: str) -> bool:
        return key in self._blobs

    def __len__(self) -> int:
        return len(self._blobs)


class JsonFileStorage:
    """
    Directory-backed storage: every key is persisted as `<dir_path>/<key>.json`.

    Notes:
        - The directory is created on the first write, not on construction.
        - Characters outside `[A-Za-z0-9_.-]` are replaced with underscores when building file names.
    """

    def __init__(self, dir_path: str):
        self._dir_path = os.path.abspath(os.path.expanduser(dir_path))

    @property
    def dir_path(self) -> str:
        return self._dir_path

    def path_for(self, key: str) -> str:
        safe_key = re.sub(r"[^A-Za-z0-9_.-]", "_", key)
        return os.path.join(self._dir_path, f"{safe_key}.json")

    def get(self, key: str) -> str | None:
        try:
            with open(self.path_for(key), "r", encoding="utf-8") as f:
                return f.read()

        except FileNotFoundError:
            return None

    def set(self, key: str, value: str) -> None:
        os.makedirs(self._dir_path, exist_ok=True)

        # intentionally overwrites existing data
        with open(self.path_for(key), "w", encoding="utf-8") as f:
            f.write(value)

        logger.debug("wrote %d characters to %s", len(value), self.path_for(key))
