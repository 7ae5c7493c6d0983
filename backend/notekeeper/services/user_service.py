"""Account self-service: read the profile, rotate the password, delete the account."""
from __future__ import annotations

from dataclasses import replace

from notekeeper.errors import NotFound
from notekeeper.services.note_service import NoteAggregateManager
from notekeeper.storage.users_store import UserRecord, UsersStore
from notekeeper.utils.auth_hash import SecretHasher
from notekeeper.utils.logging import get_logger

logger = get_logger(__name__)


class UserService:
    def __init__(self, users: UsersStore, hasher: SecretHasher, notes: NoteAggregateManager):
        self.users = users
        self.hasher = hasher
        self.notes = notes

    def get(self, user_id: str) -> UserRecord:
        rec = self.users.get(user_id)
        if rec is None:
            raise NotFound("User not found")
        return rec

    def change_password(self, user_id: str, new_password: str) -> UserRecord:
        rec = replace(self.get(user_id), hashed_password=self.hasher.hash(new_password))
        self.users.save(rec)
        logger.info("password_changed", user_id=user_id)
        return rec

    def delete(self, user_id: str) -> bool:
        """Remove the identity and the user's note aggregate.

        Tokens already issued stay valid until they expire.
        """
        if not self.users.delete(user_id):
            raise NotFound("User not found")
        try:
            self.notes.delete_all_notes(user_id)
        except NotFound:
            pass  # user never wrote a note
        logger.info("user_deleted", user_id=user_id)
        return True
