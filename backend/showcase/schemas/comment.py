"""
Pydantic v2 schemas for project comments.

Public responses never include the commenter's email; the creator inbox
and the admin moderation view do.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class CommentCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1, max_length=120)
    email: EmailStr
    content: str = Field(..., min_length=1, max_length=5000)
    parent_id: uuid.UUID | None = Field(
        default=None,
        description="Top-level comment on the same project to reply to.",
    )


class CommentReply(BaseModel):
    model_config = ConfigDict(extra="forbid")

    content: str = Field(..., min_length=1, max_length=5000)


class PublicCommentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    parent_id: uuid.UUID | None
    author_type: str
    name: str
    content: str
    created_at: datetime


class PublicThreadOut(PublicCommentOut):
    """A top-level comment and its replies, oldest reply first."""

    replies: list[PublicCommentOut] = []


class CommentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    project_id: uuid.UUID
    parent_id: uuid.UUID | None
    author_type: str
    name: str
    email: str
    content: str
    created_at: datetime


class InboxCommentOut(CommentOut):
    project_title: str


class AdminThreadOut(CommentOut):
    project_title: str
    creator_name: str
    replies: list[CommentOut] = []
