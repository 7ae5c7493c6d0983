"""Category and reminder records: keyed create / read / update / delete.

Records belong to the user who created them. Another user's record answers
exactly like a missing one.
"""
from __future__ import annotations

from dataclasses import replace
from typing import Any

from notekeeper.errors import AlreadyExists, NotFound
from notekeeper.storage.categories_store import CategoriesStore, Category
from notekeeper.storage.reminders_store import Reminder, RemindersStore
from notekeeper.utils.logging import get_logger

logger = get_logger(__name__)


class CategoryService:
    def __init__(self, store: CategoriesStore):
        self.store = store

    def create(self, category_id: str, name: str, description: str, created_by: str) -> Category:
        try:
            cat = self.store.create(category_id, name, description, created_by)
        except AlreadyExists:
            raise AlreadyExists("Category exists") from None
        logger.info("category_created", category_id=category_id, user_id=created_by)
        return cat

    def get(self, category_id: str, user_id: str) -> Category:
        cat = self.store.get(category_id)
        if cat is None or cat.created_by != user_id:
            raise NotFound("Category not found")
        return cat

    def update(self, category_id: str, user_id: str, changes: dict[str, Any]) -> Category:
        updated = replace(self.get(category_id, user_id), **changes)
        self.store.save(updated)
        logger.info("category_updated", category_id=category_id, user_id=user_id)
        return updated

    def delete(self, category_id: str, user_id: str) -> bool:
        self.get(category_id, user_id)
        if not self.store.delete(category_id):
            raise NotFound("Category not found")
        logger.info("category_deleted", category_id=category_id, user_id=user_id)
        return True

    def list_for_user(self, user_id: str) -> list[Category]:
        return self.store.list_by_creator(user_id)


class ReminderService:
    def __init__(self, store: RemindersStore):
        self.store = store

    def create(self, reminder_id: str, name: str, description: str, type: str, created_by: str) -> Reminder:
        try:
            rem = self.store.create(reminder_id, name, description, type, created_by)
        except AlreadyExists:
            raise AlreadyExists("Reminder exists") from None
        logger.info("reminder_created", reminder_id=reminder_id, user_id=created_by)
        return rem

    def get(self, reminder_id: str, user_id: str) -> Reminder:
        rem = self.store.get(reminder_id)
        if rem is None or rem.created_by != user_id:
            raise NotFound("Reminder not found")
        return rem

    def update(self, reminder_id: str, user_id: str, changes: dict[str, Any]) -> Reminder:
        updated = replace(self.get(reminder_id, user_id), **changes)
        self.store.save(updated)
        logger.info("reminder_updated", reminder_id=reminder_id, user_id=user_id)
        return updated

    def delete(self, reminder_id: str, user_id: str) -> bool:
        self.get(reminder_id, user_id)
        if not self.store.delete(reminder_id):
            raise NotFound("Reminder not found")
        logger.info("reminder_deleted", reminder_id=reminder_id, user_id=user_id)
        return True

    def list_for_user(self, user_id: str) -> list[Reminder]:
        return self.store.list_by_creator(user_id)
