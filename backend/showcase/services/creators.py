"""Creator profiles: the public creator page and self-service profile edits."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from showcase.core.database import commit_or_fail
from showcase.core.errors import NotFound
from showcase.models.collaboration import ProjectCollaborator
from showcase.models.creator import Creator
from showcase.models.project import Project

logger = logging.getLogger(__name__)

# Fields a creator may change through PUT /creator/me
PROFILE_FIELDS = ("name", "bio")


async def public_profile(session: AsyncSession, creator_id: uuid.UUID) -> dict:
    """Name, bio and projects of an active creator. Inactive creators are 404."""
    creator = await session.get(Creator, creator_id)
    if creator is None or not creator.is_active:
        raise NotFound("Creator not found.")

    owned = await session.execute(
        select(Project)
        .where(Project.creator_id == creator_id)
        .order_by(Project.created_at.desc())
    )
    collaborating = await session.execute(
        select(Project)
        .join(ProjectCollaborator, ProjectCollaborator.project_id == Project.id)
        .where(ProjectCollaborator.creator_id == creator_id)
        .order_by(Project.created_at.desc())
    )
    return {
        "id": creator.id,
        "name": creator.name,
        "bio": creator.bio,
        "created_at": creator.created_at,
        "projects": list(owned.scalars().all()),
        "collaborations": list(collaborating.scalars().all()),
    }


async def update_profile(
    session: AsyncSession,
    creator_id: uuid.UUID,
    changes: Mapping[str, Any],
) -> Creator:
    creator = await session.get(Creator, creator_id)
    if creator is None:
        raise NotFound("Creator not found.")

    for name in PROFILE_FIELDS:
        if name in changes:
            setattr(creator, name, changes[name])

    await commit_or_fail(session, "update profile")
    await session.refresh(creator)
    logger.info("Creator %s updated their profile", creator_id)
    return creator
