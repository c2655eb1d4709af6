"""
Collaborator and invitation management.

Authorization is the caller's job (routers call require_capability with
MANAGE_COLLABORATORS first). This module only keeps the collaborator table
consistent:

  • a creator appears at most once per project
  • the primary owner is never listed as a collaborator
  • removing the primary owner is refused; ownership moves only through
    transfer_ownership()
"""

from __future__ import annotations

import datetime
import logging
import uuid

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from showcase.core.database import commit_or_fail
from showcase.core.errors import Forbidden, NotFound, ValidationFailed
from showcase.models.collaboration import (
    INVITE_ACCEPTED,
    INVITE_PENDING,
    INVITE_REJECTED,
    CollaborationInvite,
    ProjectCollaborator,
)
from showcase.models.creator import Creator
from showcase.models.project import Project

logger = logging.getLogger(__name__)


async def _is_collaborator(
    session: AsyncSession,
    project_id: uuid.UUID,
    creator_id: uuid.UUID,
) -> bool:
    stmt = select(ProjectCollaborator.creator_id).where(
        ProjectCollaborator.project_id == project_id,
        ProjectCollaborator.creator_id == creator_id,
    )
    result = await session.execute(stmt)
    return result.scalar_one_or_none() is not None


async def list_collaborators(
    session: AsyncSession,
    project_id: uuid.UUID,
) -> list[dict]:
    """Collaborators with their public creator fields, oldest first."""
    stmt = (
        select(
            ProjectCollaborator.creator_id,
            ProjectCollaborator.added_at,
            Creator.name,
            Creator.email,
        )
        .join(Creator, Creator.id == ProjectCollaborator.creator_id)
        .where(ProjectCollaborator.project_id == project_id)
        .order_by(ProjectCollaborator.added_at.asc())
    )
    result = await session.execute(stmt)
    return [dict(row._mapping) for row in result.all()]


async def add_collaborator(
    session: AsyncSession,
    project: Project,
    creator_id: uuid.UUID,
) -> ProjectCollaborator:
    """Insert a collaborator row (not committed)."""
    if creator_id == project.creator_id:
        raise ValidationFailed("The project owner cannot be added as a collaborator.")
    if await _is_collaborator(session, project.id, creator_id):
        raise ValidationFailed("This creator is already a collaborator.")

    collaborator = ProjectCollaborator(project_id=project.id, creator_id=creator_id)
    session.add(collaborator)
    return collaborator


async def remove_collaborator(
    session: AsyncSession,
    project: Project,
    creator_id: uuid.UUID,
) -> None:
    if creator_id == project.creator_id:
        raise ValidationFailed("Cannot remove the primary creator from a project.")

    stmt = delete(ProjectCollaborator).where(
        ProjectCollaborator.project_id == project.id,
        ProjectCollaborator.creator_id == creator_id,
    )
    result = await session.execute(stmt)
    if result.rowcount == 0:
        raise NotFound("Collaborator not found.")

    await commit_or_fail(session, "remove collaborator")
    logger.info("Removed collaborator %s from project %s", creator_id, project.id)


async def invite_by_email(
    session: AsyncSession,
    project: Project,
    sender_id: uuid.UUID,
    email: str,
) -> tuple[CollaborationInvite, Creator]:
    """
    Create (or re-open a rejected) invitation for the creator with `email`.

    Returns the invite and the invited creator.
    """
    result = await session.execute(
        select(Creator).where(Creator.email == email.strip().lower())
    )
    invitee = result.scalar_one_or_none()
    if invitee is None:
        raise NotFound("No creator found with that email.")
    if not invitee.is_active:
        raise ValidationFailed("This creator account is not active.")
    if invitee.id == project.creator_id:
        raise ValidationFailed("Cannot invite the project owner as a collaborator.")
    if await _is_collaborator(session, project.id, invitee.id):
        raise ValidationFailed("This creator is already a collaborator.")

    result = await session.execute(
        select(CollaborationInvite).where(
            CollaborationInvite.project_id == project.id,
            CollaborationInvite.receiver_id == invitee.id,
        )
    )
    invite = result.scalar_one_or_none()

    if invite is not None and invite.status == INVITE_PENDING:
        raise ValidationFailed("An invitation was already sent to this creator.")

    if invite is None:
        invite = CollaborationInvite(
            project_id=project.id,
            sender_id=sender_id,
            receiver_id=invitee.id,
            status=INVITE_PENDING,
        )
        session.add(invite)
    else:
        # Previously answered, send it again
        invite.sender_id = sender_id
        invite.status = INVITE_PENDING
        invite.responded_at = None

    await commit_or_fail(session, "send invitation")
    await session.refresh(invite)
    return invite, invitee


async def list_pending_invites(
    session: AsyncSession,
    receiver_id: uuid.UUID,
) -> list[dict]:
    stmt = (
        select(
            CollaborationInvite.id,
            CollaborationInvite.project_id,
            Project.title.label("project_title"),
            CollaborationInvite.sender_id,
            Creator.name.label("sender_name"),
            CollaborationInvite.created_at,
        )
        .join(Project, Project.id == CollaborationInvite.project_id)
        .join(Creator, Creator.id == CollaborationInvite.sender_id)
        .where(
            CollaborationInvite.receiver_id == receiver_id,
            CollaborationInvite.status == INVITE_PENDING,
        )
        .order_by(CollaborationInvite.created_at.desc())
    )
    result = await session.execute(stmt)
    return [dict(row._mapping) for row in result.all()]


async def respond_to_invite(
    session: AsyncSession,
    invite_id: uuid.UUID,
    receiver_id: uuid.UUID,
    accept: bool,
) -> CollaborationInvite:
    """Accept or reject an invitation addressed to `receiver_id`."""
    invite = await session.get(CollaborationInvite, invite_id)
    if invite is None:
        raise NotFound("Invitation not found.")
    if invite.receiver_id != receiver_id:
        raise Forbidden("This invitation is not addressed to you.")
    if invite.status != INVITE_PENDING:
        raise ValidationFailed(f"Invitation already {invite.status}.")

    invite.status = INVITE_ACCEPTED if accept else INVITE_REJECTED
    invite.responded_at = datetime.datetime.now(datetime.timezone.utc)

    if accept:
        project = await session.get(Project, invite.project_id)
        if project is None:
            raise NotFound("Project not found.")
        await add_collaborator(session, project, receiver_id)

    await commit_or_fail(session, "respond to invitation")
    await session.refresh(invite)
    logger.info("Invite %s %s", invite.id, invite.status)
    return invite


async def transfer_ownership(
    session: AsyncSession,
    project: Project,
    new_owner_id: uuid.UUID,
) -> Project:
    """
    Make `new_owner_id` the primary owner.

    The new owner is dropped from the collaborator list so the owner is
    never also a collaborator. The previous owner loses all access unless
    re-invited.
    """
    new_owner = await session.get(Creator, new_owner_id)
    if new_owner is None:
        raise NotFound("Creator not found.")
    if new_owner_id == project.creator_id:
        return project

    await session.execute(
        delete(ProjectCollaborator).where(
            ProjectCollaborator.project_id == project.id,
            ProjectCollaborator.creator_id == new_owner_id,
        )
    )
    previous_owner = project.creator_id
    project.creator_id = new_owner_id

    await commit_or_fail(session, "transfer project ownership")
    await session.refresh(project)
    logger.info(
        "Project %s ownership moved from %s to %s",
        project.id,
        previous_owner,
        new_owner_id,
    )
    return project
