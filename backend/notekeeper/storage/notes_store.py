from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Optional

from notekeeper.storage.record_store import RecordStore


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class Note:
    note_id: int
    title: str
    description: str
    category: Optional[str]
    priority: Optional[str]
    reminders: tuple[str, ...]
    created_at: str
    updated_at: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "note_id": self.note_id,
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "priority": self.priority,
            "reminders": list(self.reminders),
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "Note":
        return cls(
            note_id=int(raw["note_id"]),
            title=raw["title"],
            description=raw.get("description", ""),
            category=raw.get("category"),
            priority=raw.get("priority"),
            reminders=tuple(raw.get("reminders") or ()),
            created_at=raw["created_at"],
            updated_at=raw.get("updated_at", raw["created_at"]),
        )


@dataclass
class NoteAggregate:
    """All notes of one user, stored and written back as a single document.

    `next_note_id` only ever grows, so ids of deleted notes are never handed out
    again within the same aggregate. `version` counts writes.
    """

    user_id: str
    notes: list[Note] = field(default_factory=list)
    next_note_id: int = 1
    version: int = 0

    def index_of(self, note_id: int) -> Optional[int]:
        for i, note in enumerate(self.notes):
            if note.note_id == note_id:
                return i
        return None

    def find(self, note_id: int) -> Optional[Note]:
        i = self.index_of(note_id)
        return self.notes[i] if i is not None else None

    def append(self, title: str, description: str, category: Optional[str],
               priority: Optional[str], reminders: tuple[str, ...] = ()) -> Note:
        now = _utc_now_iso()
        note = Note(
            note_id=self.next_note_id,
            title=title,
            description=description,
            category=category,
            priority=priority,
            reminders=tuple(reminders),
            created_at=now,
            updated_at=now,
        )
        self.notes.append(note)
        self.next_note_id += 1
        return note

    def replace(self, note_id: int, changes: dict[str, Any]) -> Optional[Note]:
        i = self.index_of(note_id)
        if i is None:
            return None
        changes = {k: v for k, v in changes.items() if k not in ("note_id", "created_at")}
        if "reminders" in changes:
            changes["reminders"] = tuple(changes["reminders"] or ())
        updated = replace(self.notes[i], updated_at=_utc_now_iso(), **changes)
        self.notes[i] = updated
        return updated

    def remove(self, note_id: int) -> bool:
        i = self.index_of(note_id)
        if i is None:
            return False
        del self.notes[i]
        return True

    def to_dict(self) -> dict[str, Any]:
        return {
            "user_id": self.user_id,
            "notes": [n.to_dict() for n in self.notes],
            "next_note_id": self.next_note_id,
            "version": self.version,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "NoteAggregate":
        notes = [Note.from_dict(n) for n in raw.get("notes", [])]
        highest = max((n.note_id for n in notes), default=0)
        return cls(
            user_id=raw["user_id"],
            notes=notes,
            next_note_id=max(int(raw.get("next_note_id", 1)), highest + 1),
            version=int(raw.get("version", 0)),
        )


class NotesStore:
    """Persists NoteAggregates, one record per user id."""

    def __init__(self, records: RecordStore):
        self.records = records

    def load(self, user_id: str) -> Optional[NoteAggregate]:
        raw = self.records.get(user_id)
        if raw is None:
            return None
        return NoteAggregate.from_dict(raw)

    def save(self, aggregate: NoteAggregate) -> None:
        aggregate.version += 1
        self.records.put(aggregate.user_id, aggregate.to_dict())

    def delete(self, user_id: str) -> bool:
        return self.records.delete(user_id)
