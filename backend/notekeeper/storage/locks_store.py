"""Per-key mutual exclusion for read-modify-write on stored aggregates.

Every note mutation reads a whole per-user document, edits it and writes it back.
Holding the user's lock across that sequence serializes writers for the same
user, while different users proceed in parallel. Locks are in-process: running
several worker processes against one data dir needs a store-level mechanism
instead.
"""
from __future__ import annotations

import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator, Optional

from notekeeper.errors import StorageTimeout


@dataclass
class _Entry:
    lock: threading.Lock = field(default_factory=threading.Lock)
    holders: int = 0  # threads holding or waiting on the lock


class KeyedLocks:
    def __init__(self, default_timeout: Optional[float] = 5.0):
        self.default_timeout = default_timeout
        self._entries: dict[str, _Entry] = {}
        self._registry = threading.Lock()

    def _checkout(self, key: str) -> _Entry:
        with self._registry:
            entry = self._entries.get(key)
            if entry is None:
                entry = self._entries[key] = _Entry()
            entry.holders += 1
            return entry

    def _checkin(self, key: str, entry: _Entry) -> None:
        with self._registry:
            entry.holders -= 1
            if entry.holders == 0:
                # drop idle entries so the registry doesn't grow with every user ever seen
                self._entries.pop(key, None)

    @contextmanager
    def hold(self, key: str, timeout: Optional[float] = None) -> Iterator[None]:
        """Hold the lock for key; raise StorageTimeout if it can't be taken in time.

        timeout=None uses the default; a negative default waits forever.
        """
        wait = self.default_timeout if timeout is None else timeout
        if wait is None or wait < 0:
            wait = -1

        entry = self._checkout(key)
        try:
            if not entry.lock.acquire(timeout=wait):
                raise StorageTimeout(f"Timed out waiting for lock on {key}")
            try:
                yield
            finally:
                entry.lock.release()
        finally:
            self._checkin(key, entry)

    def __len__(self) -> int:
        with self._registry:
            return len(self._entries)
