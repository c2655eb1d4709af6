"""
Authenticated principals.

A principal exists only for the duration of one request and only after a
session token verified. Two kinds: admins (dashboard moderators) and
creators (project authors).
"""

from __future__ import annotations

import enum
import uuid
from dataclasses import dataclass
from typing import Union


class PrincipalKind(str, enum.Enum):
    ADMIN = "admin"
    CREATOR = "creator"


@dataclass(frozen=True, slots=True)
class AdminPrincipal:
    """Verified admin identity.

    Attributes:
        id:    Admin row UUID.
        email: Login email, carried in the token for display.
        role:  "admin" or "superadmin".
    """

    id: uuid.UUID
    email: str
    role: str

    @property
    def kind(self) -> PrincipalKind:
        return PrincipalKind.ADMIN


@dataclass(frozen=True, slots=True)
class CreatorPrincipal:
    """Verified creator identity."""

    id: uuid.UUID

    @property
    def kind(self) -> PrincipalKind:
        return PrincipalKind.CREATOR


Principal = Union[AdminPrincipal, CreatorPrincipal]
