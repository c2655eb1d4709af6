"""
Principal resolution — request headers/cookies → typed principal.

Kept free of FastAPI so it can be tested with plain dicts; the FastAPI
dependencies live in showcase.auth.dependencies.

Flow:
  1. Walk the extractor list in order; first non-empty token wins.
     Default order: bearer header, then the kind's session cookie.
     A malformed Authorization header is skipped, not fatal.
  2. No token → Unauthenticated.
  3. Verify the token; any TokenError → Unauthenticated.
  4. Wrong principal kind, or an admin role outside `roles` → Forbidden.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence

from showcase.auth.principals import AdminPrincipal, Principal, PrincipalKind
from showcase.auth.tokens import TokenError, TokenService, principal_from_claims
from showcase.core.errors import Forbidden, Unauthenticated

logger = logging.getLogger(__name__)

ADMIN_COOKIE = "admin_token"
CREATOR_COOKIE = "creator_token"

SESSION_COOKIES: dict[PrincipalKind, str] = {
    PrincipalKind.ADMIN: ADMIN_COOKIE,
    PrincipalKind.CREATOR: CREATOR_COOKIE,
}

# (headers, cookies) -> token or None
TokenExtractor = Callable[[Mapping[str, str], Mapping[str, str]], "str | None"]


def bearer_header(headers: Mapping[str, str], cookies: Mapping[str, str]) -> str | None:
    """Token from a well-formed `Authorization: Bearer <token>` header."""
    authorization = headers.get("authorization")
    if not authorization:
        return None

    parts = authorization.split(" ", maxsplit=1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None

    token = parts[1].strip()
    return token or None


def cookie(name: str) -> TokenExtractor:
    """Extractor reading the named cookie."""

    def _extract(headers: Mapping[str, str], cookies: Mapping[str, str]) -> str | None:
        return cookies.get(name) or None

    _extract.__name__ = f"cookie[{name}]"
    return _extract


def default_extractors(kind: PrincipalKind) -> list[TokenExtractor]:
    return [bearer_header, cookie(SESSION_COOKIES[kind])]


def extract_token(
    headers: Mapping[str, str],
    cookies: Mapping[str, str],
    extractors: Iterable[TokenExtractor],
) -> str | None:
    """First match wins."""
    for extractor in extractors:
        token = extractor(headers, cookies)
        if token:
            return token
    return None


def resolve_principal(
    headers: Mapping[str, str],
    cookies: Mapping[str, str],
    tokens: TokenService,
    *,
    kind: PrincipalKind,
    roles: Sequence[str] | None = None,
    extractors: Sequence[TokenExtractor] | None = None,
) -> Principal:
    """
    Resolve the request's principal, requiring `kind`.

    Raises:
        Unauthenticated: no token, or the token failed verification.
        Forbidden:       verified, but the wrong kind or admin role.
    """
    token = extract_token(headers, cookies, extractors or default_extractors(kind))
    if token is None:
        raise Unauthenticated("Authentication required.")

    try:
        principal = principal_from_claims(tokens.verify(token))
    except TokenError as exc:
        # Never log the token itself
        logger.info("Rejected %s token: %s", kind.value, type(exc).__name__)
        raise Unauthenticated("Invalid or expired session token.") from exc

    if principal.kind is not kind:
        raise Forbidden(f"This endpoint requires a {kind.value} session.")

    if roles is not None and isinstance(principal, AdminPrincipal) and principal.role not in roles:
        raise Forbidden("Your admin role does not allow this action.")

    return principal
