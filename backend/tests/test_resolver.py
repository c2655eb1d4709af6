"""Principal resolution from plain header / cookie mappings."""

import datetime
import uuid

import pytest
from starlette.requests import Request

from showcase.auth.dependencies import require_admin, require_creator, require_superadmin
from showcase.auth.principals import AdminPrincipal, CreatorPrincipal, PrincipalKind
from showcase.auth.resolver import (
    ADMIN_COOKIE,
    CREATOR_COOKIE,
    bearer_header,
    cookie,
    extract_token,
    resolve_principal,
)
from showcase.core.errors import Forbidden, Unauthenticated


@pytest.fixture
def creator():
    return CreatorPrincipal(id=uuid.uuid4())


@pytest.fixture
def admin():
    return AdminPrincipal(id=uuid.uuid4(), email="mod@example.com", role="admin")


class TestExtraction:
    def test_bearer_header(self):
        assert bearer_header({"authorization": "Bearer abc.def"}, {}) == "abc.def"

    def test_bearer_scheme_is_case_insensitive(self):
        assert bearer_header({"authorization": "bearer abc"}, {}) == "abc"

    @pytest.mark.parametrize("value", ["Basic abc", "Bearer", "Bearer   ", "abc"])
    def test_malformed_header_yields_nothing(self, value):
        assert bearer_header({"authorization": value}, {}) is None

    def test_first_match_wins(self):
        extractors = [cookie("b"), cookie("a")]
        assert extract_token({}, {"a": "1", "b": "2"}, extractors) == "2"

    def test_empty_cookie_is_skipped(self):
        extractors = [cookie("a"), cookie("b")]
        assert extract_token({}, {"a": "", "b": "2"}, extractors) == "2"


class TestResolvePrincipal:
    def test_bearer_header_is_preferred_over_cookie(self, tokens, creator):
        other = CreatorPrincipal(id=uuid.uuid4())
        headers = {"authorization": f"Bearer {tokens.issue_for(creator)}"}
        cookies = {CREATOR_COOKIE: tokens.issue_for(other)}

        resolved = resolve_principal(headers, cookies, tokens, kind=PrincipalKind.CREATOR)

        assert resolved == creator

    def test_falls_back_to_cookie_when_header_malformed(self, tokens, creator):
        headers = {"authorization": "Token nope"}
        cookies = {CREATOR_COOKIE: tokens.issue_for(creator)}

        resolved = resolve_principal(headers, cookies, tokens, kind=PrincipalKind.CREATOR)

        assert resolved == creator

    def test_admin_cookie_is_read_for_admin_kind(self, tokens, admin):
        cookies = {ADMIN_COOKIE: tokens.issue_for(admin)}

        resolved = resolve_principal({}, cookies, tokens, kind=PrincipalKind.ADMIN)

        assert resolved == admin

    def test_no_token_is_unauthenticated(self, tokens):
        with pytest.raises(Unauthenticated):
            resolve_principal({}, {}, tokens, kind=PrincipalKind.CREATOR)

    def test_creator_cookie_not_used_for_admin(self, tokens, creator):
        cookies = {CREATOR_COOKIE: tokens.issue_for(creator)}

        with pytest.raises(Unauthenticated):
            resolve_principal({}, cookies, tokens, kind=PrincipalKind.ADMIN)

    def test_invalid_token_is_unauthenticated(self, tokens):
        headers = {"authorization": "Bearer not.a.jwt"}

        with pytest.raises(Unauthenticated):
            resolve_principal(headers, {}, tokens, kind=PrincipalKind.CREATOR)

    def test_expired_token_is_unauthenticated(self, tokens, creator):
        issued = datetime.datetime.now(datetime.timezone.utc) - datetime.timedelta(days=30)
        headers = {"authorization": f"Bearer {tokens.issue_for(creator, now=issued)}"}

        with pytest.raises(Unauthenticated):
            resolve_principal(headers, {}, tokens, kind=PrincipalKind.CREATOR)

    def test_wrong_kind_is_forbidden(self, tokens, admin):
        headers = {"authorization": f"Bearer {tokens.issue_for(admin)}"}

        with pytest.raises(Forbidden):
            resolve_principal(headers, {}, tokens, kind=PrincipalKind.CREATOR)

    def test_admin_role_outside_allowed_roles_is_forbidden(self, tokens, admin):
        headers = {"authorization": f"Bearer {tokens.issue_for(admin)}"}

        with pytest.raises(Forbidden):
            resolve_principal(
                headers, {}, tokens, kind=PrincipalKind.ADMIN, roles=("superadmin",),
            )


def request_with(headers: dict[str, str]) -> Request:
    raw = [(name.lower().encode(), value.encode()) for name, value in headers.items()]
    return Request({"type": "http", "method": "GET", "path": "/", "headers": raw})


class TestDependencies:
    @pytest.mark.asyncio
    async def test_require_creator_returns_creator_principal(self, tokens, creator):
        request = request_with({"Authorization": f"Bearer {tokens.issue_for(creator)}"})

        principal = await require_creator(request, tokens)

        assert type(principal) is CreatorPrincipal
        assert principal == creator

    @pytest.mark.asyncio
    async def test_require_admin_returns_admin_principal(self, tokens, admin):
        request = request_with({"Authorization": f"Bearer {tokens.issue_for(admin)}"})

        principal = await require_admin(request, tokens)

        assert type(principal) is AdminPrincipal
        assert principal.role == "admin"

    @pytest.mark.asyncio
    async def test_require_superadmin_refuses_plain_admin(self, tokens, admin):
        request = request_with({"Authorization": f"Bearer {tokens.issue_for(admin)}"})

        with pytest.raises(Forbidden):
            await require_superadmin(request, tokens)

    @pytest.mark.asyncio
    async def test_require_creator_refuses_admin_cookie_session(self, tokens, admin):
        request = request_with({"Cookie": f"{ADMIN_COOKIE}={tokens.issue_for(admin)}"})

        with pytest.raises(Unauthenticated):
            await require_creator(request, tokens)
