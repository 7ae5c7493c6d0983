import pytest

from notekeeper.errors import NotFound
from notekeeper.services.note_service import NoteAggregateManager
from notekeeper.services.user_service import UserService
from notekeeper.storage.locks_store import KeyedLocks
from notekeeper.storage.notes_store import NotesStore
from notekeeper.storage.record_store import MemoryStore
from notekeeper.storage.users_store import UsersStore
from notekeeper.utils.auth_hash import PasswordHasher


@pytest.fixture()
def hasher():
    return PasswordHasher(rounds=4)


@pytest.fixture()
def users(hasher):
    store = UsersStore(MemoryStore())
    store.create("alice", hasher.hash("password-1"), "user")
    return store


@pytest.fixture()
def notes():
    return NoteAggregateManager(NotesStore(MemoryStore()), KeyedLocks(default_timeout=1.0))


@pytest.fixture()
def service(users, hasher, notes):
    return UserService(users, hasher, notes)


def test_change_password_rehashes(service, users, hasher):
    before = users.get("alice")
    service.change_password("alice", "password-2")
    after = users.get("alice")

    assert after.hashed_password != before.hashed_password
    assert after.created_at == before.created_at
    assert hasher.verify("password-2", after.hashed_password)
    assert not hasher.verify("password-1", after.hashed_password)


def test_unknown_user(service):
    with pytest.raises(NotFound):
        service.get("ghost")
    with pytest.raises(NotFound):
        service.change_password("ghost", "password-2")
    with pytest.raises(NotFound):
        service.delete("ghost")


def test_delete_removes_note_aggregate(service, users, notes):
    notes.create_note("alice", "t1")
    assert service.delete("alice") is True

    assert users.get("alice") is None
    with pytest.raises(NotFound):
        notes.get_all_notes("alice")


def test_delete_user_without_notes(service, users):
    assert service.delete("alice") is True
    assert users.get("alice") is None
