"""
Project authorization — who may do what to a project.

Two access tiers form a small capability lattice (OWNER ⊇ COLLABORATOR):

  COLLABORATOR  view, edit
  OWNER         view, edit, delete, manage_collaborators, accept_terms

Tier resolution, first match wins:
  1. Project missing           → no tier (NotFound at the API boundary)
  2. creator is project owner  → OWNER
  3. collaborator row exists   → COLLABORATOR
  4. otherwise                 → no tier (Forbidden)

Resolution always queries the database. Nothing is cached across
requests because collaborator membership can change between them.
Owner access never depends on the collaborator table.
"""

from __future__ import annotations

import enum
import logging
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from showcase.auth.principals import CreatorPrincipal
from showcase.core.errors import Forbidden, NotFound
from showcase.models.collaboration import ProjectCollaborator
from showcase.models.project import Project

logger = logging.getLogger(__name__)


class Capability(str, enum.Enum):
    VIEW = "view"
    EDIT = "edit"
    DELETE = "delete"
    MANAGE_COLLABORATORS = "manage_collaborators"
    ACCEPT_TERMS = "accept_terms"


_COLLABORATOR_CAPABILITIES = frozenset({Capability.VIEW, Capability.EDIT})
_OWNER_CAPABILITIES = _COLLABORATOR_CAPABILITIES | {
    Capability.DELETE,
    Capability.MANAGE_COLLABORATORS,
    Capability.ACCEPT_TERMS,
}


class AccessTier(enum.Enum):
    COLLABORATOR = "collaborator"
    OWNER = "owner"

    @property
    def capabilities(self) -> frozenset[Capability]:
        if self is AccessTier.OWNER:
            return _OWNER_CAPABILITIES
        return _COLLABORATOR_CAPABILITIES

    def allows(self, capability: Capability) -> bool:
        return capability in self.capabilities


async def resolve_tier(
    session: AsyncSession,
    project_id: uuid.UUID,
    creator_id: uuid.UUID,
) -> tuple[Project | None, AccessTier | None]:
    """Load the project and the creator's tier on it (None when denied)."""
    project = await session.get(Project, project_id, populate_existing=True)
    if project is None:
        return None, None

    if project.creator_id == creator_id:
        return project, AccessTier.OWNER

    stmt = select(ProjectCollaborator.creator_id).where(
        ProjectCollaborator.project_id == project_id,
        ProjectCollaborator.creator_id == creator_id,
    )
    result = await session.execute(stmt)
    if result.scalar_one_or_none() is not None:
        return project, AccessTier.COLLABORATOR

    return project, None


async def can_access(
    session: AsyncSession,
    creator_id: uuid.UUID,
    project_id: uuid.UUID,
    capability: Capability,
) -> bool:
    _, tier = await resolve_tier(session, project_id, creator_id)
    return tier is not None and tier.allows(capability)


async def can_edit(
    session: AsyncSession,
    creator_id: uuid.UUID,
    project_id: uuid.UUID,
) -> bool:
    return await can_access(session, creator_id, project_id, Capability.EDIT)


async def is_primary_owner(
    session: AsyncSession,
    creator_id: uuid.UUID,
    project_id: uuid.UUID,
) -> bool:
    _, tier = await resolve_tier(session, project_id, creator_id)
    return tier is AccessTier.OWNER


async def require_capability(
    session: AsyncSession,
    principal: CreatorPrincipal,
    project_id: uuid.UUID,
    capability: Capability,
) -> Project:
    """
    Return the project if `principal` holds `capability` on it.

    Raises:
        NotFound:  the project does not exist.
        Forbidden: it exists, but the principal lacks the capability.
                   Losing access yields 403, never 404.
    """
    project, tier = await resolve_tier(session, project_id, principal.id)
    if project is None:
        raise NotFound("Project not found.")

    if tier is None or not tier.allows(capability):
        logger.info(
            "Denied %s on project %s for creator %s (tier=%s)",
            capability.value,
            project_id,
            principal.id,
            tier.value if tier else None,
        )
        if tier is AccessTier.COLLABORATOR:
            raise Forbidden(f"Only the project owner can {capability.value.replace('_', ' ')}.")
        raise Forbidden("You do not have access to this project.")

    return project
