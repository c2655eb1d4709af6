"""
Project persistence — listing, creation, updates, deletion.

No authorization here: creator routes go through require_capability,
admin routes through require_admin, before any of these run.
"""

from __future__ import annotations

import datetime
import logging
import uuid
from collections.abc import Mapping
from typing import Any

from sqlalchemy import delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from showcase.core.database import commit_or_fail
from showcase.models.collaboration import CollaborationInvite, ProjectCollaborator
from showcase.models.comment import Comment
from showcase.models.project import Project

logger = logging.getLogger(__name__)

# Fields a creator may change through PUT /creator/projects/{id}
EDITABLE_FIELDS = (
    "title",
    "description",
    "category",
    "tech_stack",
    "external_link",
)


async def list_public(
    session: AsyncSession,
    category: str | None = None,
) -> list[Project]:
    stmt = select(Project).order_by(Project.created_at.desc())
    if category:
        stmt = stmt.where(Project.category == category)
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def filter_options(session: AsyncSession) -> dict[str, list[str]]:
    """Distinct non-blank categories and technologies across all projects, sorted."""
    categories = await session.execute(select(Project.category).distinct())
    stacks = await session.execute(select(Project.tech_stack))
    return {
        "categories": sorted({c for c in categories.scalars() if c and c.strip()}),
        "technologies": sorted(
            {tech for stack in stacks.scalars() for tech in (stack or []) if tech and tech.strip()}
        ),
    }


async def list_for_creator(
    session: AsyncSession,
    creator_id: uuid.UUID,
) -> list[Project]:
    """Projects the creator owns or collaborates on."""
    collaborating = select(ProjectCollaborator.project_id).where(
        ProjectCollaborator.creator_id == creator_id
    )
    stmt = (
        select(Project)
        .where(or_(Project.creator_id == creator_id, Project.id.in_(collaborating)))
        .order_by(Project.created_at.desc())
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def create_project(
    session: AsyncSession,
    owner_id: uuid.UUID,
    fields: Mapping[str, Any],
) -> Project:
    project = Project(creator_id=owner_id, **fields)
    session.add(project)
    await commit_or_fail(session, "create project")
    await session.refresh(project)
    logger.info("Creator %s created project %s", owner_id, project.id)
    return project


async def update_project(
    session: AsyncSession,
    project: Project,
    changes: Mapping[str, Any],
) -> Project:
    """Apply a partial update; unknown keys are ignored."""
    for name in EDITABLE_FIELDS:
        if name in changes:
            setattr(project, name, changes[name])

    await commit_or_fail(session, "update project")
    await session.refresh(project)
    return project


async def accept_terms(session: AsyncSession, project: Project) -> Project:
    if project.terms_accepted_at is None:
        project.terms_accepted_at = datetime.datetime.now(datetime.timezone.utc)
        await commit_or_fail(session, "accept project terms")
        await session.refresh(project)
    return project


async def delete_project(session: AsyncSession, project: Project) -> None:
    # Dependents go first; not every backend enforces ON DELETE CASCADE
    await session.execute(
        delete(CollaborationInvite).where(CollaborationInvite.project_id == project.id)
    )
    await session.execute(
        delete(ProjectCollaborator).where(ProjectCollaborator.project_id == project.id)
    )
    await session.execute(delete(Comment).where(Comment.project_id == project.id))
    await session.delete(project)
    await commit_or_fail(session, "delete project")
    logger.info("Deleted project %s", project.id)
