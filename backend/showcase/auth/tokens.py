"""
Session token service — HS256 JWTs for admins and creators.

Claims layout:
  sub    principal UUID (string)
  kind   "admin" | "creator"
  email  admins only
  role   admins only
  iat    issued-at
  exp    expiry (admin: 7 days; creator: CREATOR_TOKEN_TTL_DAYS)

verify() never raises a generic error: every rejection is one of
InvalidSignature, TokenExpired or MalformedToken. The signature is
checked before the expiry, so a tampered expired token reports
InvalidSignature.

The service is built once from settings (get_token_service) and passed
into the resolver; the secret is never re-read per request.
"""

from __future__ import annotations

import datetime
import uuid
from collections.abc import Mapping
from functools import lru_cache
from typing import Any

import jwt

from showcase.auth.principals import (
    AdminPrincipal,
    CreatorPrincipal,
    Principal,
    PrincipalKind,
)
from showcase.core.config import settings

_REQUIRED_CLAIMS = ["sub", "kind", "exp"]


class TokenError(Exception):
    """Base class for every token rejection."""


class InvalidSignature(TokenError):
    """Signature does not match the server's signing key."""


class TokenExpired(TokenError):
    """Signature is valid but `exp` has passed."""


class MalformedToken(TokenError):
    """Not a JWT, or missing / unusable claims."""


class TokenService:
    """Issues and verifies session tokens. Stateless apart from its config."""

    def __init__(
        self,
        secret: str,
        ttls: Mapping[PrincipalKind, datetime.timedelta],
        algorithm: str = "HS256",
    ) -> None:
        if not secret:
            raise ValueError("token signing secret must not be empty")
        self._secret = secret
        self._algorithm = algorithm
        self._ttls = dict(ttls)

    def ttl(self, kind: PrincipalKind) -> datetime.timedelta:
        return self._ttls[kind]

    def issue(
        self,
        claims: Mapping[str, Any],
        kind: PrincipalKind,
        *,
        now: datetime.datetime | None = None,
    ) -> str:
        """Sign `claims` for a principal of `kind`, adding kind/iat/exp."""
        issued_at = now or datetime.datetime.now(datetime.timezone.utc)
        payload = {
            **claims,
            "kind": kind.value,
            "iat": issued_at,
            "exp": issued_at + self._ttls[kind],
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> dict[str, Any]:
        """Return the token's claims or raise a TokenError subclass."""
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": _REQUIRED_CLAIMS},
            )
        except jwt.InvalidSignatureError as exc:
            raise InvalidSignature("token signature mismatch") from exc
        except jwt.ExpiredSignatureError as exc:
            raise TokenExpired("token has expired") from exc
        except jwt.InvalidTokenError as exc:
            raise MalformedToken(str(exc)) from exc

        if claims["kind"] not in {k.value for k in PrincipalKind}:
            raise MalformedToken(f"unknown principal kind {claims['kind']!r}")
        return claims

    def issue_for(
        self,
        principal: Principal,
        *,
        now: datetime.datetime | None = None,
    ) -> str:
        """Issue a token carrying exactly the claims the principal needs."""
        if isinstance(principal, AdminPrincipal):
            claims = {
                "sub": str(principal.id),
                "email": principal.email,
                "role": principal.role,
            }
        else:
            claims = {"sub": str(principal.id)}
        return self.issue(claims, principal.kind, now=now)


def principal_from_claims(claims: Mapping[str, Any]) -> Principal:
    """Build the typed principal from verified claims."""
    try:
        principal_id = uuid.UUID(str(claims["sub"]))
        kind = PrincipalKind(claims["kind"])
        if kind is PrincipalKind.ADMIN:
            return AdminPrincipal(
                id=principal_id,
                email=str(claims["email"]),
                role=str(claims["role"]),
            )
        return CreatorPrincipal(id=principal_id)
    except (KeyError, ValueError) as exc:
        raise MalformedToken("token claims do not describe a principal") from exc


@lru_cache(maxsize=1)
def get_token_service() -> TokenService:
    """Process-wide TokenService built from settings on first use."""
    return TokenService(
        secret=settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
        ttls={
            PrincipalKind.ADMIN: datetime.timedelta(days=settings.ADMIN_TOKEN_TTL_DAYS),
            PrincipalKind.CREATOR: datetime.timedelta(days=settings.CREATOR_TOKEN_TTL_DAYS),
        },
    )
