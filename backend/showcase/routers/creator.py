"""
Creator dashboard router — projects and collaboration.

Every project route resolves the creator session first, then asks the
authorization engine for the capability it needs before touching the
database:

  GET    /projects/{id}                       view
  PUT    /projects/{id}                       edit
  DELETE /projects/{id}                       delete               (owner)
  POST   /projects/{id}/accept-terms          accept_terms         (owner)
  GET    /projects/{id}/collaborators         manage_collaborators (owner)
  DELETE /projects/{id}/collaborators/{cid}   manage_collaborators (owner)
  POST   /projects/{id}/invite                manage_collaborators (owner)

GET /comments lists comments on projects the creator owns.

401 unauthenticated, 403 lacking the capability, 404 missing project.
"""

import logging
import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from showcase.auth.dependencies import require_creator
from showcase.auth.permissions import Capability, require_capability
from showcase.auth.principals import CreatorPrincipal
from showcase.core.database import get_db_session
from showcase.models.project import Project
from showcase.schemas.auth import MessageOut
from showcase.schemas.comment import InboxCommentOut
from showcase.schemas.project import (
    CollaboratorOut,
    InviteOut,
    InviteRequest,
    InviteResponse,
    PendingInviteOut,
    ProjectCreate,
    ProjectOut,
    ProjectUpdate,
)
from showcase.services import collaboration
from showcase.services import comments as comment_service
from showcase.services import projects as project_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Creator dashboard"])

DbSession = Annotated[AsyncSession, Depends(get_db_session)]
CurrentCreator = Annotated[CreatorPrincipal, Depends(require_creator)]


# ── Projects ────────────────────────────────────────────────
@router.get(
    "/projects",
    response_model=list[ProjectOut],
    summary="Projects I own or collaborate on",
)
async def my_projects(creator: CurrentCreator, session: DbSession) -> list[Project]:
    return await project_service.list_for_creator(session, creator.id)


@router.post(
    "/projects",
    response_model=ProjectOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create a project owned by the current creator",
)
async def create_project(
    payload: ProjectCreate,
    creator: CurrentCreator,
    session: DbSession,
) -> Project:
    return await project_service.create_project(session, creator.id, payload.model_dump())


@router.get("/projects/{project_id}", response_model=ProjectOut, summary="Get a project I can access")
async def get_project(
    project_id: uuid.UUID,
    creator: CurrentCreator,
    session: DbSession,
) -> Project:
    return await require_capability(session, creator, project_id, Capability.VIEW)


@router.put("/projects/{project_id}", response_model=ProjectOut, summary="Update a project")
async def update_project(
    project_id: uuid.UUID,
    payload: ProjectUpdate,
    creator: CurrentCreator,
    session: DbSession,
) -> Project:
    project = await require_capability(session, creator, project_id, Capability.EDIT)
    return await project_service.update_project(
        session, project, payload.model_dump(exclude_unset=True),
    )


@router.delete("/projects/{project_id}", response_model=MessageOut, summary="Delete a project (owner only)")
async def delete_project(
    project_id: uuid.UUID,
    creator: CurrentCreator,
    session: DbSession,
) -> MessageOut:
    project = await require_capability(session, creator, project_id, Capability.DELETE)
    await project_service.delete_project(session, project)
    return MessageOut(message="Project deleted successfully.")


@router.post(
    "/projects/{project_id}/accept-terms",
    response_model=ProjectOut,
    summary="Accept the showcase terms for a project (owner only)",
)
async def accept_terms(
    project_id: uuid.UUID,
    creator: CurrentCreator,
    session: DbSession,
) -> Project:
    project = await require_capability(session, creator, project_id, Capability.ACCEPT_TERMS)
    return await project_service.accept_terms(session, project)


# ── Collaborators ───────────────────────────────────────────
@router.get(
    "/projects/{project_id}/collaborators",
    response_model=list[CollaboratorOut],
    summary="List collaborators (owner only)",
)
async def list_collaborators(
    project_id: uuid.UUID,
    creator: CurrentCreator,
    session: DbSession,
) -> list[dict]:
    await require_capability(session, creator, project_id, Capability.MANAGE_COLLABORATORS)
    return await collaboration.list_collaborators(session, project_id)


@router.delete(
    "/projects/{project_id}/collaborators/{collaborator_id}",
    response_model=MessageOut,
    summary="Remove a collaborator (owner only)",
)
async def remove_collaborator(
    project_id: uuid.UUID,
    collaborator_id: uuid.UUID,
    creator: CurrentCreator,
    session: DbSession,
) -> MessageOut:
    project = await require_capability(
        session, creator, project_id, Capability.MANAGE_COLLABORATORS,
    )
    await collaboration.remove_collaborator(session, project, collaborator_id)
    return MessageOut(message="Collaborator removed successfully.")


@router.post(
    "/projects/{project_id}/invite",
    response_model=InviteOut,
    status_code=status.HTTP_201_CREATED,
    summary="Invite a creator to collaborate (owner only)",
)
async def invite_collaborator(
    project_id: uuid.UUID,
    payload: InviteRequest,
    creator: CurrentCreator,
    session: DbSession,
):
    project = await require_capability(
        session, creator, project_id, Capability.MANAGE_COLLABORATORS,
    )
    invite, _ = await collaboration.invite_by_email(session, project, creator.id, payload.email)
    return invite


# ── Invitations received ────────────────────────────────────
@router.get(
    "/invites",
    response_model=list[PendingInviteOut],
    summary="Pending invitations addressed to me",
)
async def my_invites(creator: CurrentCreator, session: DbSession) -> list[dict]:
    return await collaboration.list_pending_invites(session, creator.id)


@router.post(
    "/invites/{invite_id}/respond",
    response_model=InviteOut,
    summary="Accept or reject an invitation",
)
async def respond_to_invite(
    invite_id: uuid.UUID,
    payload: InviteResponse,
    creator: CurrentCreator,
    session: DbSession,
):
    return await collaboration.respond_to_invite(
        session, invite_id, creator.id, accept=payload.action == "accept",
    )


# ── Comments ────────────────────────────────────────────────
@router.get(
    "/comments",
    response_model=list[InboxCommentOut],
    summary="Comments on projects I own, newest first",
)
async def my_comments(creator: CurrentCreator, session: DbSession) -> list[dict]:
    return await comment_service.list_for_owner(session, creator.id)
