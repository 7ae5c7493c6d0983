from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Optional

from notekeeper.storage.record_store import RecordStore


@dataclass(frozen=True)
class UserRecord:
    user_id: str
    hashed_password: str
    role: str
    created_at: str


class UsersStore:
    def __init__(self, records: RecordStore):
        self.records = records

    def get(self, user_id: str) -> Optional[UserRecord]:
        raw = self.records.get(user_id)
        if raw is None:
            return None
        return UserRecord(
            user_id=raw["user_id"],
            hashed_password=raw["hashed_password"],
            role=raw.get("role", "user"),
            created_at=raw["created_at"],
        )

    def create(self, user_id: str, hashed_password: str, role: str) -> UserRecord:
        """Store a new identity; raises AlreadyExists if user_id is taken."""
        rec = UserRecord(
            user_id=user_id,
            hashed_password=hashed_password,
            role=role,
            created_at=datetime.now(timezone.utc).isoformat(),
        )
        self.records.insert(user_id, asdict(rec))
        return rec

    def save(self, rec: UserRecord) -> None:
        self.records.put(rec.user_id, asdict(rec))

    def delete(self, user_id: str) -> bool:
        return self.records.delete(user_id)
