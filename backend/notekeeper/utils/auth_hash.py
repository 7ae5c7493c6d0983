"""Password hashing helpers using passlib.

The credential verifier only depends on the `SecretHasher` protocol
(hash / verify), so the hashing strategy can be swapped at wiring time.
`PasswordHasher` is the default implementation:

- bcrypt via passlib's CryptContext, cost configurable (`BCRYPT_ROUNDS`)
- falls back to pbkdf2_sha256 when the bcrypt backend is missing or broken
"""
from __future__ import annotations

import warnings
from typing import Optional, Protocol

from passlib.context import CryptContext


class SecretHasher(Protocol):
    def hash(self, plain: str) -> str: ...

    def verify(self, plain: str, hashed: str) -> bool: ...


def build_crypt_context(rounds: Optional[int] = None) -> CryptContext:
    try:
        if rounds:
            ctx = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)
        else:
            ctx = CryptContext(schemes=["bcrypt"], deprecated="auto")
        ctx.hash("test")
        return ctx
    except Exception as exc:
        warnings.warn(
            "bcrypt backend not available or failed to initialize; falling back to pbkdf2_sha256. "
            f"Original error: {exc}",
            RuntimeWarning,
        )
    if rounds:
        return CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto", pbkdf2_sha256__rounds=rounds)
    return CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


class PasswordHasher:
    def __init__(self, rounds: Optional[int] = None, context: Optional[CryptContext] = None):
        self.context = context or build_crypt_context(rounds)

    def hash(self, plain: str) -> str:
        """Hash a plaintext password and return the encoded hash string."""
        if plain is None:
            raise ValueError("Password must not be None")
        return self.context.hash(plain)

    def verify(self, plain: str, hashed: str) -> bool:
        """Verify a plaintext password against a stored hash.

        Returns True if the password matches, False otherwise (including
        for malformed or unrecognized hashes).
        """
        if plain is None or hashed is None:
            return False
        try:
            return self.context.verify(plain, hashed)
        except (ValueError, TypeError):
            return False
