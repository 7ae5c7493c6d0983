from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Any, Optional

from notekeeper.storage.record_store import RecordStore


@dataclass(frozen=True)
class Reminder:
    id: str
    name: str
    description: str
    type: str
    created_by: str
    created_at: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class RemindersStore:
    def __init__(self, records: RecordStore):
        self.records = records

    @staticmethod
    def _from_raw(raw: dict[str, Any]) -> Reminder:
        return Reminder(
            id=raw["id"],
            name=raw["name"],
            description=raw.get("description", ""),
            type=raw.get("type", ""),
            created_by=raw["created_by"],
            created_at=raw["created_at"],
        )

    def get(self, reminder_id: str) -> Optional[Reminder]:
        raw = self.records.get(reminder_id)
        return self._from_raw(raw) if raw is not None else None

    def create(self, reminder_id: str, name: str, description: str, type: str, created_by: str) -> Reminder:
        rem = Reminder(
            id=reminder_id,
            name=name,
            description=description,
            type=type,
            created_by=created_by,
            created_at=datetime.now(timezone.utc).isoformat(),
        )
        self.records.insert(reminder_id, rem.to_dict())
        return rem

    def save(self, reminder: Reminder) -> None:
        self.records.put(reminder.id, reminder.to_dict())

    def delete(self, reminder_id: str) -> bool:
        return self.records.delete(reminder_id)

    def list_by_creator(self, user_id: str) -> list[Reminder]:
        return [self._from_raw(r) for r in self.records.values() if r.get("created_by") == user_id]
