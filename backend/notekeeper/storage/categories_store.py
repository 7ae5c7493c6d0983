from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Any, Optional

from notekeeper.storage.record_store import RecordStore


@dataclass(frozen=True)
class Category:
    id: str
    name: str
    description: str
    created_by: str
    created_at: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class CategoriesStore:
    def __init__(self, records: RecordStore):
        self.records = records

    @staticmethod
    def _from_raw(raw: dict[str, Any]) -> Category:
        return Category(
            id=raw["id"],
            name=raw["name"],
            description=raw.get("description", ""),
            created_by=raw["created_by"],
            created_at=raw["created_at"],
        )

    def get(self, category_id: str) -> Optional[Category]:
        raw = self.records.get(category_id)
        return self._from_raw(raw) if raw is not None else None

    def create(self, category_id: str, name: str, description: str, created_by: str) -> Category:
        cat = Category(
            id=category_id,
            name=name,
            description=description,
            created_by=created_by,
            created_at=datetime.now(timezone.utc).isoformat(),
        )
        self.records.insert(category_id, cat.to_dict())
        return cat

    def save(self, category: Category) -> None:
        self.records.put(category.id, category.to_dict())

    def delete(self, category_id: str) -> bool:
        return self.records.delete(category_id)

    def list_by_creator(self, user_id: str) -> list[Category]:
        return [self._from_raw(r) for r in self.records.values() if r.get("created_by") == user_id]
