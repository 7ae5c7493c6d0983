"""Keyed record store: get / put / insert / delete of JSON documents by key.

Two backends share the interface:
- JsonFileStore: one file per record under <base_dir>/<collection>/<key>.json,
  written atomically (tmp file + fsync + rename).
- MemoryStore: process-local dict, used by unit tests and `APP_STORE=memory`.

Records are plain dicts; the typed stores above this layer own serialization.
There are no ordering guarantees across keys.
"""
from __future__ import annotations

import copy
import json
import os
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Iterator, Optional

from notekeeper.errors import AlreadyExists, ConfigurationError, StorageError


def _check_key(key: str) -> str:
    # keys become file names; keep them away from path traversal
    if not key or any(ch in key for ch in ("/", "\\")) or ".." in key or key.startswith("."):
        raise ValueError("Invalid key")
    return key


def _atomic_write_json(path: Path, data: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    with tmp_path.open("w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)
        f.flush()
        os.fsync(f.fileno())
    tmp_path.replace(path)


class RecordStore(ABC):
    @abstractmethod
    def get(self, key: str) -> Optional[dict[str, Any]]:
        """Return the record stored under key, or None."""

    @abstractmethod
    def put(self, key: str, record: dict[str, Any]) -> None:
        """Create or overwrite the record under key."""

    @abstractmethod
    def insert(self, key: str, record: dict[str, Any]) -> None:
        """Create the record; raise AlreadyExists if the key is taken."""

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Remove the record; return whether one existed."""

    @abstractmethod
    def values(self) -> Iterator[dict[str, Any]]:
        """Iterate over every record in the collection."""


class JsonFileStore(RecordStore):
    def __init__(self, base_dir: Path, collection: str):
        self.base_dir = base_dir
        self.collection = _check_key(collection)
        # serializes insert's check-then-write inside this process
        self._write_lock = threading.Lock()

    @property
    def root(self) -> Path:
        return self.base_dir / self.collection

    def _path(self, key: str) -> Path:
        return self.root / f"{_check_key(key)}.json"

    def get(self, key: str) -> Optional[dict[str, Any]]:
        p = self._path(key)
        if not p.exists():
            return None
        try:
            return json.loads(p.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise StorageError(f"Unreadable record {self.collection}/{key}") from exc

    def put(self, key: str, record: dict[str, Any]) -> None:
        p = self._path(key)
        try:
            _atomic_write_json(p, record)
        except OSError as exc:
            raise StorageError(f"Could not write record {self.collection}/{key}") from exc

    def insert(self, key: str, record: dict[str, Any]) -> None:
        p = self._path(key)
        with self._write_lock:
            if p.exists():
                raise AlreadyExists(f"{self.collection}/{key} already exists")
            self.put(key, record)

    def delete(self, key: str) -> bool:
        p = self._path(key)
        try:
            p.unlink()
        except FileNotFoundError:
            return False
        except OSError as exc:
            raise StorageError(f"Could not delete record {self.collection}/{key}") from exc
        return True

    def values(self) -> Iterator[dict[str, Any]]:
        if not self.root.exists():
            return
        for p in sorted(self.root.glob("*.json")):
            try:
                yield json.loads(p.read_text(encoding="utf-8"))
            except (OSError, json.JSONDecodeError) as exc:
                raise StorageError(f"Unreadable record {self.collection}/{p.stem}") from exc


class MemoryStore(RecordStore):
    def __init__(self) -> None:
        self._records: dict[str, dict[str, Any]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[dict[str, Any]]:
        with self._lock:
            rec = self._records.get(_check_key(key))
            # hand out copies so callers can't mutate stored state in place
            return copy.deepcopy(rec) if rec is not None else None

    def put(self, key: str, record: dict[str, Any]) -> None:
        with self._lock:
            self._records[_check_key(key)] = copy.deepcopy(record)

    def insert(self, key: str, record: dict[str, Any]) -> None:
        with self._lock:
            if _check_key(key) in self._records:
                raise AlreadyExists(f"{key} already exists")
            self._records[key] = copy.deepcopy(record)

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._records.pop(_check_key(key), None) is not None

    def values(self) -> Iterator[dict[str, Any]]:
        with self._lock:
            snapshot = [copy.deepcopy(r) for r in self._records.values()]
        return iter(snapshot)


def open_store(backend: str, base_dir: Path, collection: str) -> RecordStore:
    if backend == "file":
        return JsonFileStore(base_dir, collection)
    if backend == "memory":
        return MemoryStore()
    raise ConfigurationError(f"Unknown store backend: {backend}")
