"""
Public router — no session required.

GET  /projects                 project listing (optional ?category=)
GET  /projects/filter-options  distinct categories and technologies
GET  /projects/{id}            one project, 404 if absent
GET  /projects/{id}/comments   comment threads
POST /projects/{id}/comments   visitor comment or reply
GET  /creators/{id}            public profile, 404 if absent or inactive
POST /ratings                  anonymous 1–5 rating, one per address per day
POST /contact                  contact form
"""

import logging
import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from showcase.core.database import commit_or_fail, get_db_session
from showcase.core.errors import NotFound, RateLimited
from showcase.models.comment import Comment
from showcase.models.contact import ContactMessage
from showcase.models.project import Project
from showcase.schemas.comment import CommentCreate, PublicCommentOut, PublicThreadOut
from showcase.schemas.feedback import ContactCreate, ContactOut, RatingCreate, RatingOut
from showcase.schemas.project import CreatorProfileOut, FilterOptionsOut, ProjectOut
from showcase.services import comments as comment_service
from showcase.services import creators as creator_service
from showcase.services import projects as project_service
from showcase.services.submission_guard import (
    SubmissionRejected,
    check_and_record,
    client_address,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Public"])

DbSession = Annotated[AsyncSession, Depends(get_db_session)]


async def _get_project_or_404(session: AsyncSession, project_id: uuid.UUID) -> Project:
    project = await session.get(Project, project_id)
    if project is None:
        raise NotFound("Project not found.")
    return project


# ── Projects ────────────────────────────────────────────────
@router.get(
    "/projects",
    response_model=list[ProjectOut],
    summary="List showcased projects",
)
async def list_projects(
    session: DbSession,
    category: str | None = Query(default=None, max_length=100),
) -> list[Project]:
    return await project_service.list_public(session, category)


@router.get(
    "/projects/filter-options",
    response_model=FilterOptionsOut,
    summary="Categories and technologies available for filtering",
)
async def filter_options(session: DbSession) -> dict[str, list[str]]:
    return await project_service.filter_options(session)


@router.get(
    "/projects/{project_id}",
    response_model=ProjectOut,
    summary="Get one project",
)
async def get_project(project_id: uuid.UUID, session: DbSession) -> Project:
    return await _get_project_or_404(session, project_id)


# ── Comments ────────────────────────────────────────────────
@router.get(
    "/projects/{project_id}/comments",
    response_model=list[PublicThreadOut],
    summary="Comment threads on a project, newest first",
)
async def list_comments(project_id: uuid.UUID, session: DbSession) -> list[dict]:
    await _get_project_or_404(session, project_id)
    return await comment_service.list_threads(session, project_id)


@router.post(
    "/projects/{project_id}/comments",
    response_model=PublicCommentOut,
    status_code=status.HTTP_201_CREATED,
    summary="Comment on a project",
)
async def post_comment(
    project_id: uuid.UUID,
    payload: CommentCreate,
    session: DbSession,
) -> Comment:
    project = await _get_project_or_404(session, project_id)
    return await comment_service.create_comment(
        session,
        project,
        payload.name,
        payload.email,
        payload.content,
        payload.parent_id,
    )


# ── Creators ────────────────────────────────────────────────
@router.get(
    "/creators/{creator_id}",
    response_model=CreatorProfileOut,
    summary="Public creator profile with their projects",
)
async def creator_profile(creator_id: uuid.UUID, session: DbSession) -> dict:
    return await creator_service.public_profile(session, creator_id)


# ── Ratings ─────────────────────────────────────────────────
@router.post(
    "/ratings",
    response_model=RatingOut,
    status_code=status.HTTP_201_CREATED,
    summary="Submit an anonymous site rating",
    description=(
        "One rating per client address per calendar day. "
        "The address is hashed before storage. Returns 429 on a repeat."
    ),
)
async def submit_rating(
    payload: RatingCreate,
    request: Request,
    session: DbSession,
):
    try:
        return await check_and_record(
            session,
            client_address(request.headers),
            payload.rating,
            payload.feedback,
        )
    except SubmissionRejected:
        raise RateLimited("You have already submitted a rating today.")


# ── Contact ─────────────────────────────────────────────────
@router.post(
    "/contact",
    response_model=ContactOut,
    status_code=status.HTTP_201_CREATED,
    summary="Send a message to the site admins",
)
async def submit_contact(payload: ContactCreate, session: DbSession) -> ContactMessage:
    message = ContactMessage(
        name=payload.name,
        email=payload.email,
        subject=payload.subject,
        message=payload.message,
    )
    session.add(message)
    await commit_or_fail(session, "store the contact message")
    await session.refresh(message)
    return message
