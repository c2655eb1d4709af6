"""
Pydantic v2 schemas for projects and collaboration.

  • ProjectCreate / ProjectUpdate — what the CLIENT sends. creator_id is
    never accepted from the client; it comes from the session.
  • ProjectOut — what the SERVER returns.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class ProjectCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str = Field(..., min_length=1, max_length=200, examples=["Pixel Garden"])
    description: str = Field(default="", max_length=10_000)
    category: str | None = Field(default=None, max_length=100, examples=["web"])
    tech_stack: list[str] = Field(
        default_factory=list,
        max_length=50,
        examples=[["python", "fastapi"]],
    )
    external_link: str | None = Field(default=None, max_length=500)


class ProjectUpdate(BaseModel):
    """Partial update: only fields present in the body are changed."""

    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=10_000)
    category: str | None = Field(default=None, max_length=100)
    tech_stack: list[str] | None = Field(default=None, max_length=50)
    external_link: str | None = Field(default=None, max_length=500)

    # None only means "not sent"; these columns have no null state
    @field_validator("title", "description", "tech_stack")
    @classmethod
    def _not_null(cls, value):
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class ProjectOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    creator_id: uuid.UUID
    title: str
    description: str
    category: str | None
    tech_stack: list[str]
    external_link: str | None
    terms_accepted_at: datetime | None
    created_at: datetime
    updated_at: datetime


class OwnershipTransfer(BaseModel):
    model_config = ConfigDict(extra="forbid")

    creator_id: uuid.UUID


class CollaboratorOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    creator_id: uuid.UUID
    name: str
    email: str
    added_at: datetime


class InviteRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    email: EmailStr


class InviteOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    project_id: uuid.UUID
    receiver_id: uuid.UUID
    status: str
    created_at: datetime


class PendingInviteOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    project_id: uuid.UUID
    project_title: str
    sender_id: uuid.UUID
    sender_name: str
    created_at: datetime


class InviteResponse(BaseModel):
    model_config = ConfigDict(extra="forbid")

    action: Literal["accept", "reject"]


class FilterOptionsOut(BaseModel):
    categories: list[str]
    technologies: list[str]


class CreatorProfileOut(BaseModel):
    """Public creator page: owned projects and projects collaborated on."""

    id: uuid.UUID
    name: str
    bio: str | None
    created_at: datetime
    projects: list[ProjectOut]
    collaborations: list[ProjectOut]
