"""
Admin moderation router. Every route requires an admin session.

Ratings:   GET /ratings, GET /ratings/summary, DELETE /ratings/{id}
Messages:  GET /messages, PATCH /messages/{id}, DELETE /messages/{id}
Comments:  GET /comments, POST /comments/{id}/reply, DELETE /comments/{id}
Projects:  GET /projects, DELETE /projects/{id},
           PUT /projects/{id}/owner        (superadmin)
Creators:  GET /creators, PATCH /creators/{id}  (superadmin)

Admins bypass the project capability checks; the role check in
require_admin / require_superadmin is their authorization.
"""

import logging
import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from showcase.auth.dependencies import require_admin, require_superadmin
from showcase.auth.principals import AdminPrincipal
from showcase.core.database import commit_or_fail, get_db_session
from showcase.core.errors import NotFound
from showcase.models.comment import Comment
from showcase.models.contact import ContactMessage
from showcase.models.creator import Creator
from showcase.models.project import Project
from showcase.models.rating import Rating
from showcase.schemas.auth import CreatorOut, CreatorStatusUpdate, MessageOut
from showcase.schemas.comment import AdminThreadOut, CommentOut, CommentReply
from showcase.schemas.feedback import ContactOut, ContactUpdate, RatingOut, RatingSummary
from showcase.schemas.project import OwnershipTransfer, ProjectOut
from showcase.services import collaboration
from showcase.services import comments as comment_service
from showcase.services import projects as project_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Admin"])

DbSession = Annotated[AsyncSession, Depends(get_db_session)]
CurrentAdmin = Annotated[AdminPrincipal, Depends(require_admin)]
Superadmin = Annotated[AdminPrincipal, Depends(require_superadmin)]


# ── Ratings ─────────────────────────────────────────────────
@router.get("/ratings", response_model=list[RatingOut], summary="List ratings, newest first")
async def list_ratings(
    admin: CurrentAdmin,
    session: DbSession,
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
) -> list[Rating]:
    stmt = select(Rating).order_by(Rating.created_at.desc()).limit(limit).offset(offset)
    result = await session.execute(stmt)
    return list(result.scalars().all())


@router.get("/ratings/summary", response_model=RatingSummary, summary="Rating count and average")
async def rating_summary(admin: CurrentAdmin, session: DbSession) -> RatingSummary:
    stmt = select(func.count(Rating.id), func.avg(Rating.rating))
    count, average = (await session.execute(stmt)).one()
    return RatingSummary(
        count=count,
        average=round(float(average), 2) if average is not None else None,
    )


@router.delete("/ratings/{rating_id}", response_model=MessageOut, summary="Delete a rating")
async def delete_rating(
    rating_id: uuid.UUID,
    admin: CurrentAdmin,
    session: DbSession,
) -> MessageOut:
    rating = await session.get(Rating, rating_id)
    if rating is None:
        raise NotFound("Rating not found.")
    await session.delete(rating)
    await commit_or_fail(session, "delete rating")
    logger.info("Admin %s deleted rating %s", admin.id, rating_id)
    return MessageOut(message="Rating deleted.")


# ── Contact messages ────────────────────────────────────────
@router.get("/messages", response_model=list[ContactOut], summary="List contact messages")
async def list_messages(
    admin: CurrentAdmin,
    session: DbSession,
    unread_only: bool = Query(default=False),
) -> list[ContactMessage]:
    stmt = select(ContactMessage).order_by(ContactMessage.created_at.desc())
    if unread_only:
        stmt = stmt.where(ContactMessage.is_read.is_(False))
    result = await session.execute(stmt)
    return list(result.scalars().all())


@router.patch("/messages/{message_id}", response_model=ContactOut, summary="Mark a message read/unread")
async def update_message(
    message_id: uuid.UUID,
    payload: ContactUpdate,
    admin: CurrentAdmin,
    session: DbSession,
) -> ContactMessage:
    message = await session.get(ContactMessage, message_id)
    if message is None:
        raise NotFound("Message not found.")
    message.is_read = payload.is_read
    await commit_or_fail(session, "update message")
    await session.refresh(message)
    return message


@router.delete("/messages/{message_id}", response_model=MessageOut, summary="Delete a message")
async def delete_message(
    message_id: uuid.UUID,
    admin: CurrentAdmin,
    session: DbSession,
) -> MessageOut:
    message = await session.get(ContactMessage, message_id)
    if message is None:
        raise NotFound("Message not found.")
    await session.delete(message)
    await commit_or_fail(session, "delete message")
    return MessageOut(message="Message deleted.")


# ── Projects ────────────────────────────────────────────────
@router.get("/projects", response_model=list[ProjectOut], summary="List all projects")
async def list_projects(admin: CurrentAdmin, session: DbSession) -> list[Project]:
    return await project_service.list_public(session)


@router.delete("/projects/{project_id}", response_model=MessageOut, summary="Remove a project")
async def delete_project(
    project_id: uuid.UUID,
    admin: CurrentAdmin,
    session: DbSession,
) -> MessageOut:
    project = await session.get(Project, project_id)
    if project is None:
        raise NotFound("Project not found.")
    await project_service.delete_project(session, project)
    logger.info("Admin %s removed project %s", admin.id, project_id)
    return MessageOut(message="Project deleted successfully.")


@router.put(
    "/projects/{project_id}/owner",
    response_model=ProjectOut,
    summary="Transfer primary ownership of a project",
)
async def transfer_owner(
    project_id: uuid.UUID,
    payload: OwnershipTransfer,
    admin: Superadmin,
    session: DbSession,
) -> Project:
    project = await session.get(Project, project_id)
    if project is None:
        raise NotFound("Project not found.")
    return await collaboration.transfer_ownership(session, project, payload.creator_id)


# ── Creators ────────────────────────────────────────────────
@router.get("/creators", response_model=list[CreatorOut], summary="List creator accounts")
async def list_creators(admin: CurrentAdmin, session: DbSession) -> list[Creator]:
    result = await session.execute(select(Creator).order_by(Creator.created_at.desc()))
    return list(result.scalars().all())


@router.patch("/creators/{creator_id}", response_model=CreatorOut, summary="Activate or deactivate a creator")
async def update_creator_status(
    creator_id: uuid.UUID,
    payload: CreatorStatusUpdate,
    admin: Superadmin,
    session: DbSession,
) -> Creator:
    creator = await session.get(Creator, creator_id)
    if creator is None:
        raise NotFound("Creator not found.")
    creator.is_active = payload.is_active
    await commit_or_fail(session, "update creator")
    await session.refresh(creator)
    logger.info("Admin %s set creator %s active=%s", admin.id, creator_id, payload.is_active)
    return creator
