"""Session cookie helpers — set on login, cleared on logout."""

from __future__ import annotations

from fastapi import Response

from showcase.auth.principals import PrincipalKind
from showcase.auth.resolver import SESSION_COOKIES
from showcase.core.config import settings


def set_session_cookie(
    response: Response,
    kind: PrincipalKind,
    token: str,
    max_age: int,
) -> None:
    response.set_cookie(
        SESSION_COOKIES[kind],
        token,
        max_age=max_age,
        path="/",
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="strict",
    )


def clear_session_cookie(response: Response, kind: PrincipalKind) -> None:
    """Empty value, immediate expiry."""
    response.set_cookie(
        SESSION_COOKIES[kind],
        "",
        max_age=0,
        path="/",
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="strict",
    )
