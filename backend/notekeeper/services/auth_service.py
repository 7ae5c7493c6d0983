"""Credential verification, registration and login."""
from __future__ import annotations

from notekeeper.errors import AlreadyExists, InvalidCredentials, NotFound, Unauthorized
from notekeeper.storage.users_store import UserRecord, UsersStore
from notekeeper.utils.auth_hash import SecretHasher
from notekeeper.utils.jwt_auth import RESERVED_CLAIMS, TokenIssuer
from notekeeper.utils.logging import get_logger

logger = get_logger(__name__)

# Verified against when the user id is unknown, so both failure paths pay for one hash check.
_DUMMY_PASSWORD = "not-a-real-password"


class CredentialVerifier:
    def __init__(self, users: UsersStore, hasher: SecretHasher):
        self.users = users
        self.hasher = hasher
        self._dummy_hash = hasher.hash(_DUMMY_PASSWORD)

    def verify(self, user_id: str, password: str) -> UserRecord:
        """Return the stored identity if password matches.

        Raises NotFound for an unknown user_id and InvalidCredentials for a
        wrong password.
        """
        try:
            rec = self.users.get(user_id)
        except ValueError:
            # malformed ids can't name a stored identity
            rec = None
        if rec is None:
            self.hasher.verify(password, self._dummy_hash)
            raise NotFound("User not found")
        if not self.hasher.verify(password, rec.hashed_password):
            raise InvalidCredentials()
        return rec


class AuthenticationService:
    def __init__(self, users: UsersStore, hasher: SecretHasher, issuer: TokenIssuer):
        self.users = users
        self.hasher = hasher
        self.issuer = issuer
        self.verifier = CredentialVerifier(users, hasher)

    def register(self, user_id: str, password: str, role: str = "user") -> UserRecord:
        if role in RESERVED_CLAIMS:
            raise ValueError(f"Role {role!r} is reserved")
        if self.users.get(user_id) is not None:
            raise AlreadyExists("User exists")

        # never store plaintext
        rec = self.users.create(user_id, self.hasher.hash(password), role)
        logger.info("user_registered", user_id=user_id, role=role)
        return rec

    def login(self, user_id: str, password: str) -> str:
        try:
            rec = self.verifier.verify(user_id, password)
        except (NotFound, InvalidCredentials) as exc:
            # the reason stays in the logs; callers only ever see Unauthorized
            logger.warning("login_failed", user_id=user_id, reason=exc.code)
            raise Unauthorized("Invalid credentials") from None

        token = self.issuer.issue(rec.user_id, rec.role)
        logger.info("login_succeeded", user_id=user_id)
        return token
