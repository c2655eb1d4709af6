"""Session token issue / verify."""

import datetime
import uuid

import jwt
import pytest

from showcase.auth.principals import AdminPrincipal, CreatorPrincipal, PrincipalKind
from showcase.auth.tokens import (
    InvalidSignature,
    MalformedToken,
    TokenExpired,
    TokenService,
    principal_from_claims,
)

SECRET = "unit-test-secret-abcdefghijklmnopqrstuvwxyz"


@pytest.fixture
def service() -> TokenService:
    return TokenService(
        secret=SECRET,
        ttls={
            PrincipalKind.ADMIN: datetime.timedelta(days=7),
            PrincipalKind.CREATOR: datetime.timedelta(days=3),
        },
    )


def _flip_signature_char(token: str) -> str:
    header, payload, signature = token.split(".")
    i = len(signature) // 2
    replacement = "A" if signature[i] != "A" else "B"
    return ".".join([header, payload, signature[:i] + replacement + signature[i + 1:]])


def test_verify_returns_issued_claims(service):
    claims = {"sub": str(uuid.uuid4()), "email": "a@example.com", "role": "admin"}
    token = service.issue(claims, PrincipalKind.ADMIN)

    verified = service.verify(token)

    assert {k: verified[k] for k in claims} == claims
    assert verified["kind"] == "admin"


def test_admin_token_lives_seven_days(service):
    now = datetime.datetime.now(datetime.timezone.utc).replace(microsecond=0)
    token = service.issue({"sub": str(uuid.uuid4())}, PrincipalKind.ADMIN, now=now)

    claims = service.verify(token)

    assert claims["exp"] - claims["iat"] == 7 * 24 * 3600


def test_creator_token_has_finite_expiry(service):
    token = service.issue({"sub": str(uuid.uuid4())}, PrincipalKind.CREATOR)

    claims = service.verify(token)

    assert claims["exp"] - claims["iat"] == 3 * 24 * 3600


def test_expired_token_is_rejected(service):
    issued = datetime.datetime.now(datetime.timezone.utc) - datetime.timedelta(days=8)
    token = service.issue({"sub": str(uuid.uuid4())}, PrincipalKind.ADMIN, now=issued)

    with pytest.raises(TokenExpired):
        service.verify(token)


def test_tampered_signature_is_rejected(service):
    token = service.issue({"sub": str(uuid.uuid4())}, PrincipalKind.CREATOR)

    with pytest.raises(InvalidSignature):
        service.verify(_flip_signature_char(token))


def test_token_signed_with_other_key_is_rejected(service):
    token = jwt.encode(
        {"sub": str(uuid.uuid4()), "kind": "creator", "exp": 4102444800},
        "another-secret-entirely-abcdefghijklmnopq",
        algorithm="HS256",
    )

    with pytest.raises(InvalidSignature):
        service.verify(token)


@pytest.mark.parametrize("token", ["", "not-a-token", "a.b.c"])
def test_garbage_is_malformed(service, token):
    with pytest.raises(MalformedToken):
        service.verify(token)


def test_missing_kind_claim_is_malformed(service):
    token = jwt.encode({"sub": str(uuid.uuid4()), "exp": 4102444800}, SECRET, algorithm="HS256")

    with pytest.raises(MalformedToken):
        service.verify(token)


def test_unknown_kind_is_malformed(service):
    token = jwt.encode(
        {"sub": str(uuid.uuid4()), "kind": "root", "exp": 4102444800},
        SECRET,
        algorithm="HS256",
    )

    with pytest.raises(MalformedToken):
        service.verify(token)


def test_principal_round_trip(service):
    admin = AdminPrincipal(id=uuid.uuid4(), email="mod@example.com", role="superadmin")
    creator = CreatorPrincipal(id=uuid.uuid4())

    assert principal_from_claims(service.verify(service.issue_for(admin))) == admin
    assert principal_from_claims(service.verify(service.issue_for(creator))) == creator


def test_admin_claims_without_role_are_malformed():
    with pytest.raises(MalformedToken):
        principal_from_claims({"sub": str(uuid.uuid4()), "kind": "admin", "email": "x@example.com"})


def test_empty_secret_is_refused():
    with pytest.raises(ValueError):
        TokenService(secret="", ttls={})
