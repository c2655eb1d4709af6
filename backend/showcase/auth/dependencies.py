"""
FastAPI dependencies for session authentication.

Thin wrappers around showcase.auth.resolver.resolve_principal: they hand
it the request's headers and cookies plus the process-wide TokenService.

Usage in routers:
    Admin = Annotated[AdminPrincipal, Depends(require_admin)]
    Creator = Annotated[CreatorPrincipal, Depends(require_creator)]

Order in the request pipeline: AUTH → AUTHORIZATION → ROUTER LOGIC.
"""

from __future__ import annotations

from typing import cast

from fastapi import Depends, Request

from showcase.auth.principals import AdminPrincipal, CreatorPrincipal, PrincipalKind
from showcase.auth.resolver import resolve_principal
from showcase.auth.tokens import TokenService, get_token_service
from showcase.models.admin import ADMIN_ROLES


async def require_admin(
    request: Request,
    tokens: TokenService = Depends(get_token_service),
) -> AdminPrincipal:
    """Any admin role. 401 without a valid session, 403 for creators."""
    principal = resolve_principal(
        request.headers,
        request.cookies,
        tokens,
        kind=PrincipalKind.ADMIN,
        roles=ADMIN_ROLES,
    )
    return cast(AdminPrincipal, principal)


async def require_superadmin(
    request: Request,
    tokens: TokenService = Depends(get_token_service),
) -> AdminPrincipal:
    """Superadmins only: account and ownership management."""
    principal = resolve_principal(
        request.headers,
        request.cookies,
        tokens,
        kind=PrincipalKind.ADMIN,
        roles=("superadmin",),
    )
    return cast(AdminPrincipal, principal)


async def require_creator(
    request: Request,
    tokens: TokenService = Depends(get_token_service),
) -> CreatorPrincipal:
    """Any creator. 401 without a valid session, 403 for admins."""
    principal = resolve_principal(
        request.headers,
        request.cookies,
        tokens,
        kind=PrincipalKind.CREATOR,
    )
    return cast(CreatorPrincipal, principal)
