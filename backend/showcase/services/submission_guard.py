"""
Anonymous rating guard — one rating per client address per calendar day.

Design decisions:
  • Identity = SHA-256 of the client address. Raw addresses never reach
    the database or the logs.
  • Address = first X-Forwarded-For entry, else X-Real-IP, else the
    literal "unknown". Clients without either header therefore share one
    bucket. That is an accepted limitation, not something to patch here.
  • Day bucket = calendar date of `now` in settings.RATING_TIMEZONE. The
    same bucket value is used for the check and the insert, so a request
    straddling midnight cannot flap between days.
  • Check, then insert. The read is only the fast path: the
    (ip_hash, day_bucket) unique constraint decides. A concurrent
    duplicate that passes the read fails the insert with IntegrityError,
    which is rolled back and reported as SubmissionRejected.
"""

from __future__ import annotations

import datetime
import logging
from collections.abc import Mapping
from zoneinfo import ZoneInfo

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from showcase.auth.hashing import hash_client_address
from showcase.core.config import settings
from showcase.models.rating import Rating

logger = logging.getLogger(__name__)

UNKNOWN_ADDRESS = "unknown"


class SubmissionRejected(Exception):
    """Raised when the address already submitted a rating today."""


def client_address(headers: Mapping[str, str]) -> str:
    """Best-effort client address from proxy headers."""
    forwarded_for = headers.get("x-forwarded-for")
    if forwarded_for:
        first = forwarded_for.split(",")[0].strip()
        if first:
            return first

    real_ip = headers.get("x-real-ip")
    if real_ip and real_ip.strip():
        return real_ip.strip()

    return UNKNOWN_ADDRESS


def rating_timezone() -> ZoneInfo:
    return ZoneInfo(settings.RATING_TIMEZONE)


def day_bucket(now: datetime.datetime, tz: datetime.tzinfo) -> datetime.date:
    """Calendar date of `now` in `tz`. Naive datetimes are taken as UTC."""
    if now.tzinfo is None:
        now = now.replace(tzinfo=datetime.timezone.utc)
    return now.astimezone(tz).date()


async def _already_submitted(
    session: AsyncSession,
    ip_hash: str,
    bucket: datetime.date,
) -> bool:
    stmt = select(Rating.id).where(
        Rating.ip_hash == ip_hash,
        Rating.day_bucket == bucket,
    )
    result = await session.execute(stmt)
    return result.scalar_one_or_none() is not None


async def check_and_record(
    session: AsyncSession,
    address: str,
    rating: int,
    feedback: str | None = None,
    *,
    now: datetime.datetime | None = None,
    tz: datetime.tzinfo | None = None,
) -> Rating:
    """
    Record a rating unless this address already rated in the current day.

    Returns the persisted Rating. Raises SubmissionRejected on a duplicate;
    nothing is written in that case.
    """
    if not 1 <= rating <= 5:
        raise ValueError(f"rating must be between 1 and 5, got {rating}")

    now = now or datetime.datetime.now(datetime.timezone.utc)
    bucket = day_bucket(now, tz or rating_timezone())
    ip_hash = hash_client_address(address)

    # ── Fast path (read-only) ───────────────────────────────
    if await _already_submitted(session, ip_hash, bucket):
        raise SubmissionRejected("already rated today")

    # ── Insert; the unique constraint settles races ────────
    record = Rating(
        rating=rating,
        feedback=feedback or None,
        ip_hash=ip_hash,
        day_bucket=bucket,
        created_at=now,
    )
    session.add(record)
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        logger.info("Concurrent duplicate rating rejected for bucket %s", bucket)
        raise SubmissionRejected("already rated today") from exc

    await session.refresh(record)
    return record
