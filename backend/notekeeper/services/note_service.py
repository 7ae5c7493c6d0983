"""Per-user note aggregate manager.

Each user's notes live in one stored document (a NoteAggregate). Every mutation
is read-modify-write on that whole document, performed while holding the user's
lock, so concurrent writers for one user are serialized and none of their
changes is lost. Reads also take the lock so they never observe a half-applied
sequence of writes.

Note ids are assigned here from the aggregate's counter; callers cannot pick them.
"""
from __future__ import annotations

from typing import Any, Optional

from notekeeper.errors import NotFound
from notekeeper.storage.locks_store import KeyedLocks
from notekeeper.storage.notes_store import Note, NoteAggregate, NotesStore
from notekeeper.utils.logging import get_logger

logger = get_logger(__name__)

PATCHABLE_FIELDS = ("title", "description", "category", "priority", "reminders")


class NoteAggregateManager:
    def __init__(self, store: NotesStore, locks: KeyedLocks):
        self.store = store
        self.locks = locks

    def _require_aggregate(self, user_id: str) -> NoteAggregate:
        agg = self.store.load(user_id)
        if agg is None:
            logger.info("note_aggregate_missing", user_id=user_id)
            raise NotFound("Note not found")
        return agg

    def _require_note(self, agg: NoteAggregate, note_id: int) -> Note:
        note = agg.find(note_id)
        if note is None:
            logger.info("note_missing", user_id=agg.user_id, note_id=note_id)
            raise NotFound("Note not found")
        return note

    def create_note(
        self,
        user_id: str,
        title: str,
        description: str = "",
        category: Optional[str] = None,
        priority: Optional[str] = None,
        reminders: tuple[str, ...] = (),
        timeout: Optional[float] = None,
    ) -> Note:
        with self.locks.hold(user_id, timeout):
            agg = self.store.load(user_id) or NoteAggregate(user_id=user_id)
            note = agg.append(title, description, category, priority, tuple(reminders))
            self.store.save(agg)
        logger.info("note_created", user_id=user_id, note_id=note.note_id)
        return note

    def get_note(self, user_id: str, note_id: int, timeout: Optional[float] = None) -> Note:
        with self.locks.hold(user_id, timeout):
            agg = self._require_aggregate(user_id)
            return self._require_note(agg, note_id)

    def get_all_notes(self, user_id: str, timeout: Optional[float] = None) -> list[Note]:
        """Notes in insertion order; [] for an existing but empty aggregate."""
        with self.locks.hold(user_id, timeout):
            return list(self._require_aggregate(user_id).notes)

    def update_note(
        self,
        user_id: str,
        note_id: int,
        patch: dict[str, Any],
        timeout: Optional[float] = None,
    ) -> Note:
        """Apply the supplied fields to one note, leaving its position unchanged."""
        unknown = set(patch) - set(PATCHABLE_FIELDS)
        if unknown:
            raise ValueError(f"Fields cannot be updated: {sorted(unknown)}")

        with self.locks.hold(user_id, timeout):
            agg = self._require_aggregate(user_id)
            self._require_note(agg, note_id)
            updated = agg.replace(note_id, patch)
            self.store.save(agg)
        logger.info("note_updated", user_id=user_id, note_id=note_id, fields=sorted(patch))
        return updated

    def delete_note(self, user_id: str, note_id: int, timeout: Optional[float] = None) -> bool:
        with self.locks.hold(user_id, timeout):
            agg = self._require_aggregate(user_id)
            self._require_note(agg, note_id)
            removed = agg.remove(note_id)
            self.store.save(agg)
        logger.info("note_deleted", user_id=user_id, note_id=note_id)
        return removed

    def delete_all_notes(self, user_id: str, timeout: Optional[float] = None) -> bool:
        with self.locks.hold(user_id, timeout):
            if not self.store.delete(user_id):
                logger.info("note_aggregate_missing", user_id=user_id)
                raise NotFound("Note not found")
        logger.info("notes_deleted", user_id=user_id)
        return True
