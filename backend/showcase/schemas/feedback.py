"""
Pydantic v2 schemas for anonymous site feedback: ratings and contact
messages.

The client never supplies ip_hash or day_bucket; both are derived
server-side by the submission guard.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


# ── Ratings ─────────────────────────────────────────────────
class RatingCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    rating: int = Field(..., ge=1, le=5, examples=[5])
    feedback: str | None = Field(default=None, max_length=2000)


class RatingOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    rating: int
    feedback: str | None
    created_at: datetime


class RatingSummary(BaseModel):
    count: int
    average: float | None


# ── Contact messages ────────────────────────────────────────
class ContactCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1, max_length=120)
    email: EmailStr
    subject: str | None = Field(default=None, max_length=200)
    message: str = Field(..., min_length=1, max_length=5000)


class ContactOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    email: str
    subject: str | None
    message: str
    is_read: bool
    created_at: datetime


class ContactUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    is_read: bool
