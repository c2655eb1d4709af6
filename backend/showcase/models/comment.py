"""
Project comments.

Visitors leave top-level comments on a project; admins answer with
replies (parent_id set). Replies are one level deep: a reply's parent
is always a top-level comment on the same project.
"""

import uuid
import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy.sql import func
from sqlalchemy.orm import Mapped, mapped_column

from showcase.core.database import Base

AUTHOR_USER = "user"
AUTHOR_ADMIN = "admin"


class Comment(Base):
    __tablename__ = "comments"
    __table_args__ = (
        CheckConstraint(
            "author_type IN ('user', 'admin')",
            name="ck_comment_author_type_valid",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    project_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    parent_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    author_type: Mapped[str] = mapped_column(
        String(10),
        nullable=False,
        default=AUTHOR_USER,
        server_default=AUTHOR_USER,
    )
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return (
            f"<Comment id={self.id!s:.8} project={self.project_id!s:.8} "
            f"author={self.author_type}>"
        )
