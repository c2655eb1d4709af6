"""
Admin model — a moderator account for the admin dashboard.

Only a bcrypt hash of the password is stored. `role` is carried into the
session token and checked by admin-only endpoints.
"""

import uuid
import datetime

from sqlalchemy import DateTime, String, Text, Uuid
from sqlalchemy.sql import func
from sqlalchemy.orm import Mapped, mapped_column

from showcase.core.database import Base

ADMIN_ROLES = ("admin", "superadmin")


class Admin(Base):
    """Dashboard moderator."""

    __tablename__ = "admins"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    email: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True,
    )
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    role: Mapped[str] = mapped_column(
        String(20), nullable=False, default="admin", server_default="admin",
    )
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"<Admin id={self.id!s:.8} email={self.email!r} role={self.role}>"
