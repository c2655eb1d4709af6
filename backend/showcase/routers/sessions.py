"""
Session routers — login, logout, and "who am I" for both principal kinds.

POST /admin/login     → token + admin_token cookie
POST /admin/logout    → clears admin_token (requires a valid admin session)
GET  /admin/me
POST /creator/register
POST /creator/login   → token + creator_token cookie
POST /creator/logout  → clears creator_token (requires a valid creator session)
GET  /creator/me
PUT  /creator/me      → name / bio

Every credential failure returns the same 401 message so responses do
not reveal which emails exist.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from showcase.auth.cookies import clear_session_cookie, set_session_cookie
from showcase.auth.dependencies import require_admin, require_creator
from showcase.auth.hashing import hash_password, verify_password
from showcase.auth.principals import (
    AdminPrincipal,
    CreatorPrincipal,
    PrincipalKind,
)
from showcase.auth.tokens import TokenService, get_token_service
from showcase.core.database import get_db_session
from showcase.core.errors import Forbidden, NotFound, Unauthenticated, ValidationFailed
from showcase.models.admin import Admin
from showcase.models.creator import Creator
from showcase.schemas.auth import (
    AdminOut,
    AdminSession,
    CreatorOut,
    CreatorProfileUpdate,
    CreatorRegisterRequest,
    CreatorSession,
    LoginRequest,
    MessageOut,
)
from showcase.services import creators as creator_service

logger = logging.getLogger(__name__)

admin_router = APIRouter(tags=["Admin session"])
creator_router = APIRouter(tags=["Creator session"])

DbSession = Annotated[AsyncSession, Depends(get_db_session)]
Tokens = Annotated[TokenService, Depends(get_token_service)]
CurrentAdmin = Annotated[AdminPrincipal, Depends(require_admin)]
CurrentCreator = Annotated[CreatorPrincipal, Depends(require_creator)]

_BAD_CREDENTIALS = "Invalid email or password."
_EMAIL_TAKEN = "An account with this email already exists."


# ── Admin ───────────────────────────────────────────────────
@admin_router.post(
    "/login",
    response_model=AdminSession,
    summary="Admin login",
)
async def admin_login(
    payload: LoginRequest,
    response: Response,
    session: DbSession,
    tokens: Tokens,
) -> AdminSession:
    result = await session.execute(
        select(Admin).where(Admin.email == payload.email.lower())
    )
    admin = result.scalar_one_or_none()
    if admin is None or not verify_password(payload.password, admin.password_hash):
        raise Unauthenticated(_BAD_CREDENTIALS)

    principal = AdminPrincipal(id=admin.id, email=admin.email, role=admin.role)
    token = tokens.issue_for(principal)
    set_session_cookie(
        response,
        PrincipalKind.ADMIN,
        token,
        int(tokens.ttl(PrincipalKind.ADMIN).total_seconds()),
    )
    logger.info("Admin %s logged in", admin.id)
    return AdminSession(token=token, admin=AdminOut.model_validate(admin))


@admin_router.post("/logout", response_model=MessageOut, summary="Admin logout")
async def admin_logout(response: Response, admin: CurrentAdmin) -> MessageOut:
    clear_session_cookie(response, PrincipalKind.ADMIN)
    return MessageOut(message="Logged out successfully.")


@admin_router.get("/me", response_model=AdminOut, summary="Current admin")
async def admin_me(admin: CurrentAdmin) -> AdminOut:
    return AdminOut(id=admin.id, email=admin.email, role=admin.role)


# ── Creator ─────────────────────────────────────────────────
async def _email_taken(session: AsyncSession, email: str) -> bool:
    result = await session.execute(select(Creator.id).where(Creator.email == email))
    return result.scalar_one_or_none() is not None


@creator_router.post(
    "/register",
    response_model=CreatorOut,
    status_code=status.HTTP_201_CREATED,
    summary="Register a creator account",
)
async def creator_register(
    payload: CreatorRegisterRequest,
    session: DbSession,
) -> Creator:
    email = payload.email.lower()
    if await _email_taken(session, email):
        raise ValidationFailed(_EMAIL_TAKEN)

    creator = Creator(
        name=payload.name,
        email=email,
        password_hash=hash_password(payload.password),
        bio=payload.bio,
    )
    session.add(creator)
    # The unique index on creators.email decides concurrent sign-ups
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        raise ValidationFailed(_EMAIL_TAKEN) from exc
    await session.refresh(creator)
    logger.info("Registered creator %s", creator.id)
    return creator


@creator_router.post(
    "/login",
    response_model=CreatorSession,
    summary="Creator login",
)
async def creator_login(
    payload: LoginRequest,
    response: Response,
    session: DbSession,
    tokens: Tokens,
) -> CreatorSession:
    result = await session.execute(
        select(Creator).where(Creator.email == payload.email.lower())
    )
    creator = result.scalar_one_or_none()
    if creator is None or not verify_password(payload.password, creator.password_hash):
        raise Unauthenticated(_BAD_CREDENTIALS)
    if not creator.is_active:
        raise Forbidden("This account is disabled.")

    token = tokens.issue_for(CreatorPrincipal(id=creator.id))
    set_session_cookie(
        response,
        PrincipalKind.CREATOR,
        token,
        int(tokens.ttl(PrincipalKind.CREATOR).total_seconds()),
    )
    logger.info("Creator %s logged in", creator.id)
    return CreatorSession(token=token, creator=CreatorOut.model_validate(creator))


@creator_router.post("/logout", response_model=MessageOut, summary="Creator logout")
async def creator_logout(response: Response, creator: CurrentCreator) -> MessageOut:
    clear_session_cookie(response, PrincipalKind.CREATOR)
    return MessageOut(message="Logged out successfully.")


@creator_router.get("/me", response_model=CreatorOut, summary="Current creator")
async def creator_me(creator: CurrentCreator, session: DbSession) -> Creator:
    account = await session.get(Creator, creator.id)
    if account is None:
        raise NotFound("Creator not found.")
    return account


@creator_router.put("/me", response_model=CreatorOut, summary="Update my profile")
async def update_creator_me(
    payload: CreatorProfileUpdate,
    creator: CurrentCreator,
    session: DbSession,
) -> Creator:
    return await creator_service.update_profile(
        session, creator.id, payload.model_dump(exclude_unset=True),
    )
