"""
Collaboration models.

ProjectCollaborator links one additional creator to a project with
edit-tier access. Composite PK (project_id, creator_id) means a creator
appears at most once per project. The primary owner is never inserted
here; services/collaboration.py checks that before every insert.

CollaborationInvite is the pending step before a collaborator row
exists: the owner invites, the receiver accepts or rejects.
"""

import uuid
import datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    String,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.sql import func
from sqlalchemy.orm import Mapped, mapped_column

from showcase.core.database import Base

INVITE_PENDING = "pending"
INVITE_ACCEPTED = "accepted"
INVITE_REJECTED = "rejected"


class ProjectCollaborator(Base):
    """Edit-tier access grant for a non-owner creator."""

    __tablename__ = "project_collaborators"

    project_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("projects.id", ondelete="CASCADE"),
        primary_key=True,
    )
    creator_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("creators.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )
    added_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return (
            f"<ProjectCollaborator project={self.project_id!s:.8} "
            f"creator={self.creator_id!s:.8}>"
        )


class CollaborationInvite(Base):
    """Owner → creator invitation to collaborate on one project."""

    __tablename__ = "collaboration_invites"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    project_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
    )
    sender_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("creators.id", ondelete="CASCADE"),
        nullable=False,
    )
    receiver_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("creators.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    status: Mapped[str] = mapped_column(
        String(10),
        nullable=False,
        default=INVITE_PENDING,
        server_default=INVITE_PENDING,
    )
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    responded_at: Mapped[datetime.datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )

    __table_args__ = (
        UniqueConstraint("project_id", "receiver_id", name="uq_invite_project_receiver"),
        CheckConstraint(
            "status IN ('pending', 'accepted', 'rejected')",
            name="ck_invite_status_valid",
        ),
    )

    def __repr__(self) -> str:
        return (
            f"<CollaborationInvite id={self.id!s:.8} "
            f"project={self.project_id!s:.8} status={self.status}>"
        )
