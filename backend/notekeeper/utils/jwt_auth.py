from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from notekeeper.errors import ConfigurationError, InvalidToken, TokenExpired, Unauthorized

bearer = HTTPBearer(auto_error=False)

# Claim names jose validates on decode; a role may not use one of these as its claim key.
RESERVED_CLAIMS = frozenset({"sub", "iat", "exp", "nbf", "iss", "aud", "jti", "at_hash"})


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class TokenClaims:
    subject: str
    issued_at: datetime
    claims: dict[str, str] = field(default_factory=dict)

    @property
    def roles(self) -> list[str]:
        return [role for role, sub in self.claims.items() if sub == self.subject]


class TokenIssuer:
    """Signs and verifies bearer tokens.

    Token payload: ``{"sub": <user id>, <role>: <user id>, "iat": <epoch seconds>}``.
    Expiry is enforced on introspection as ``iat + ttl``; no ``exp`` claim is
    written, so the TTL in force is the verifier's, not the issuer's.
    """

    def __init__(
        self,
        secret: Optional[str],
        algorithm: str = "HS256",
        ttl: timedelta = timedelta(minutes=15),
        clock: Callable[[], datetime] = _utc_now,
    ):
        self.secret = secret
        self.algorithm = algorithm
        self.ttl = ttl
        self.clock = clock

    def _key(self) -> str:
        if not self.secret:
            raise ConfigurationError("JWT_SECRET is not set")
        return self.secret

    def issue(self, subject: str, role: str) -> str:
        key = self._key()
        if role in RESERVED_CLAIMS:
            raise ValueError(f"Role {role!r} collides with a reserved claim")
        now = self.clock()
        payload = {"sub": subject, role: subject, "iat": int(now.timestamp())}
        return jwt.encode(payload, key, algorithm=self.algorithm)

    def introspect(self, token: str) -> TokenClaims:
        key = self._key()
        try:
            payload = jwt.decode(token, key, algorithms=[self.algorithm])
        except JWTError as exc:
            raise InvalidToken("Invalid token") from exc

        sub = payload.get("sub")
        iat = payload.get("iat")
        if not isinstance(sub, str) or not sub or not isinstance(iat, int) or isinstance(iat, bool):
            raise InvalidToken("Invalid token")

        issued_at = datetime.fromtimestamp(iat, tz=timezone.utc)
        if self.clock() >= issued_at + self.ttl:
            raise TokenExpired("Token expired")

        claims = {
            k: v for k, v in payload.items()
            if k not in RESERVED_CLAIMS and isinstance(v, str)
        }
        return TokenClaims(subject=sub, issued_at=issued_at, claims=claims)


def get_token_issuer(request: Request) -> TokenIssuer:
    return request.app.state.token_issuer


def get_current_claims(
    creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> TokenClaims:
    if creds is None or creds.scheme.lower() != "bearer":
        raise Unauthorized("Missing credentials")
    return issuer.introspect(creds.credentials)


def get_current_user(claims: TokenClaims = Depends(get_current_claims)) -> str:
    return claims.subject
