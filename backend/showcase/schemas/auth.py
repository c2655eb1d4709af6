"""
Pydantic v2 schemas for login, registration, and session endpoints.

Password hashes never appear in any response schema.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class LoginRequest(BaseModel):
    """Shared by POST /admin/login and POST /creator/login."""

    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    password: str = Field(..., min_length=1, max_length=256)


class CreatorRegisterRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1, max_length=120)
    email: EmailStr
    password: str = Field(
        ...,
        min_length=8,
        max_length=72,  # bcrypt ignores anything beyond 72 bytes
        description="At least 8 characters.",
    )
    bio: str | None = Field(default=None, max_length=2000)


class AdminOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    email: str
    role: str


class CreatorOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    email: str
    bio: str | None
    is_active: bool
    created_at: datetime


class AdminSession(BaseModel):
    """Login response. The token is also set as the admin_token cookie."""

    token: str
    admin: AdminOut


class CreatorSession(BaseModel):
    """Login response. The token is also set as the creator_token cookie."""

    token: str
    creator: CreatorOut


class MessageOut(BaseModel):
    message: str


class CreatorStatusUpdate(BaseModel):
    """Inactive creators cannot log in."""

    model_config = ConfigDict(extra="forbid")

    is_active: bool


class CreatorProfileUpdate(BaseModel):
    """PUT /creator/me. Omitted fields are left unchanged; bio may be cleared."""

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, min_length=1, max_length=120)
    bio: str | None = Field(default=None, max_length=2000)

    @field_validator("name")
    @classmethod
    def _name_not_null(cls, value):
        if value is None:
            raise ValueError("may be omitted but not null")
        return value
