"""
Application error taxonomy.

Every failure a handler can report maps to exactly one subclass here.
showcase.main renders them as {"detail": ...} with the matching status,
the same shape FastAPI uses for HTTPException.

  Unauthenticated   401  no / invalid / expired / malformed token
  Forbidden         403  valid principal lacking capability or role
  NotFound          404  referenced resource absent
  ValidationFailed  400  malformed or out-of-range input
  RateLimited       429  submission guard rejection
  InternalError     500  persistence or unexpected failure
"""

from __future__ import annotations

from fastapi import status


class AppError(Exception):
    """Carries the HTTP status and a client-safe message."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail: str = "Internal server error."
    headers: dict[str, str] | None = None

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class Unauthenticated(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Authentication required."
    headers = {"WWW-Authenticate": "Bearer"}


class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "You do not have permission to perform this action."


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Resource not found."


class ValidationFailed(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid request."


class RateLimited(AppError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    default_detail = "Rate limit exceeded. Please try again later."


class InternalError(AppError):
    """Message is always generic; the cause is logged server-side only."""
