"""
Rating model — anonymous site feedback.

Privacy / dedup notes:
  • Raw client addresses are NEVER stored, only a SHA-256 digest.
  • `day_bucket` is the calendar date of the submission in the configured
    rating timezone. The (ip_hash, day_bucket) unique constraint is what
    makes "one rating per address per day" hold under concurrent writes;
    the read check in the submission guard is only the fast path.
"""

import uuid
import datetime

from sqlalchemy import (
    CheckConstraint,
    Date,
    DateTime,
    Index,
    SmallInteger,
    String,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.sql import func
from sqlalchemy.orm import Mapped, mapped_column

from showcase.core.database import Base


class Rating(Base):
    """One anonymous 1–5 star rating."""

    __tablename__ = "ratings"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    rating: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    feedback: Mapped[str | None] = mapped_column(Text, nullable=True)
    ip_hash: Mapped[str] = mapped_column(String(64), nullable=False)
    day_bucket: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    __table_args__ = (
        UniqueConstraint("ip_hash", "day_bucket", name="uq_ratings_ip_hash_day"),
        CheckConstraint("rating BETWEEN 1 AND 5", name="ck_rating_range"),
        Index("ix_ratings_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Rating id={self.id!s:.8} rating={self.rating} day={self.day_bucket}>"
