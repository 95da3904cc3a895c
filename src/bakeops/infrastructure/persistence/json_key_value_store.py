"""JSON-file-backed implementation of KeyValueStore.

All keys live in one JSON object on disk.  Every call re-reads the file,
so every store opened on the same file sees the others' writes.  Stores
on the same path share one lock, so read-modify-write steps from them
never interleave within a process.
"""

from __future__ import annotations

import json
import os
import threading
from pathlib import Path
from typing import Any, Callable

from bakeops.domain.exceptions import StorageError
from bakeops.domain.repository.key_value_store import KeyValueStore

_path_locks: dict[Path, threading.RLock] = {}
_path_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.RLock:
    with _path_locks_guard:
        return _path_locks.setdefault(path.resolve(), threading.RLock())


class JsonKeyValueStore(KeyValueStore):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._lock = _lock_for(file_path)

    # --- KeyValueStore interface ----------------------------------------------

    def get(self, key: str) -> Any | None:
        with self._lock:
            return self._load().get(key)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            data = self._load()
            data[key] = value
            self._persist(data)

    def remove(self, key: str) -> None:
        with self._lock:
            data = self._load()
            if data.pop(key, None) is not None:
                self._persist(data)

    def update(self, key: str, fn: Callable[[Any | None], Any | None]) -> None:
        with self._lock:
            data = self._load()
            value = fn(data.get(key))
            if value is None:
                return
            data[key] = value
            self._persist(data)

    # --- File helpers ---------------------------------------------------------

    def _load(self) -> dict[str, Any]:
        if not self._file_path.exists():
            return {}
        try:
            data = json.loads(self._file_path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise StorageError(f"Cannot read {self._file_path}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise StorageError(f"Corrupted store {self._file_path}: {exc}") from exc
        if not isinstance(data, dict):
            raise StorageError(f"Corrupted store {self._file_path}: not a JSON object")
        return data

    def _persist(self, data: dict[str, Any]) -> None:
        tmp_path = self._file_path.with_suffix(self._file_path.suffix + ".tmp")
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(
                json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
            )
            os.replace(tmp_path, self._file_path)
        except (OSError, TypeError, ValueError) as exc:
            raise StorageError(f"Cannot write {self._file_path}: {exc}") from exc
