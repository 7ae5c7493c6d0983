from datetime import timedelta

import pytest

from notekeeper.errors import AlreadyExists, InvalidCredentials, NotFound, Unauthorized
from notekeeper.services.auth_service import AuthenticationService, CredentialVerifier
from notekeeper.storage.record_store import MemoryStore
from notekeeper.storage.users_store import UsersStore
from notekeeper.utils.auth_hash import PasswordHasher
from notekeeper.utils.jwt_auth import TokenIssuer


@pytest.fixture()
def hasher():
    return PasswordHasher(rounds=4)


@pytest.fixture()
def users():
    return UsersStore(MemoryStore())


@pytest.fixture()
def issuer():
    return TokenIssuer(secret="unit-test-secret", ttl=timedelta(minutes=5))


@pytest.fixture()
def auth(users, hasher, issuer):
    return AuthenticationService(users, hasher, issuer)


def test_register_same_user_twice(auth):
    rec = auth.register("alice", "password-1", role="admin")
    assert rec.user_id == "alice"
    assert rec.role == "admin"

    with pytest.raises(AlreadyExists):
        auth.register("alice", "password-2")


def test_secret_is_hashed_before_storage(auth, users, hasher):
    auth.register("alice", "password-1")
    stored = users.get("alice")
    assert stored.hashed_password != "password-1"
    assert hasher.verify("password-1", stored.hashed_password)


def test_register_rejects_reserved_role(auth):
    with pytest.raises(ValueError):
        auth.register("alice", "password-1", role="iat")


def test_login_issues_token_with_role_claim(auth, issuer):
    auth.register("alice", "password-1", role="admin")
    token = auth.login("alice", "password-1")

    claims = issuer.introspect(token)
    assert claims.subject == "alice"
    assert claims.claims == {"admin": "alice"}


def test_wrong_password_and_unknown_user_fail_the_same_way(auth):
    auth.register("alice", "password-1")

    with pytest.raises(Unauthorized) as wrong_secret:
        auth.login("alice", "nope")
    with pytest.raises(Unauthorized) as unknown_user:
        auth.login("mallory", "password-1")

    assert type(wrong_secret.value) is type(unknown_user.value) is Unauthorized
    assert str(wrong_secret.value) == str(unknown_user.value)


def test_malformed_user_id_is_just_unauthorized(auth):
    with pytest.raises(Unauthorized):
        auth.login("../etc", "password-1")


def test_verifier_distinguishes_failure_kinds_internally(users, hasher):
    users.create("alice", hasher.hash("password-1"), "user")
    verifier = CredentialVerifier(users, hasher)

    assert verifier.verify("alice", "password-1").user_id == "alice"
    with pytest.raises(InvalidCredentials):
        verifier.verify("alice", "wrong")
    with pytest.raises(NotFound):
        verifier.verify("bob", "password-1")
