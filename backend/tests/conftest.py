"""
Shared fixtures.

Settings are read at import time, so the environment is prepared before
anything from `showcase` is imported. Every test gets a fresh in-memory
SQLite database (aiosqlite + StaticPool so all sessions share it) and
the app's get_db_session dependency is pointed at it.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("JWT_SECRET", "test-signing-secret-0123456789-abcdefghij")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("COOKIE_SECURE", "false")

import uuid
from collections.abc import AsyncIterator

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from showcase.auth.hashing import hash_password
from showcase.auth.principals import AdminPrincipal, CreatorPrincipal
from showcase.auth.tokens import TokenService, get_token_service
from showcase.core.database import create_all, get_db_session
from showcase.main import app
from showcase.models.admin import Admin
from showcase.models.collaboration import ProjectCollaborator
from showcase.models.creator import Creator
from showcase.models.project import Project

DEFAULT_PASSWORD = "correct-horse-battery"


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_all(bind=engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_factory) -> AsyncIterator[AsyncSession]:
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory) -> AsyncIterator[httpx.AsyncClient]:
    async def override_get_db_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db_session
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def tokens() -> TokenService:
    return get_token_service()


# ── Data factories ──────────────────────────────────────────
@pytest.fixture
def make_creator(session_factory):
    async def _make(
        name: str = "Creator",
        email: str | None = None,
        password: str = DEFAULT_PASSWORD,
        is_active: bool = True,
    ) -> Creator:
        async with session_factory() as session:
            creator = Creator(
                name=name,
                email=email or f"{uuid.uuid4().hex[:8]}@example.com",
                password_hash=hash_password(password),
                is_active=is_active,
            )
            session.add(creator)
            await session.commit()
            await session.refresh(creator)
            return creator

    return _make


@pytest.fixture
def make_admin(session_factory):
    async def _make(
        email: str = "admin@example.com",
        password: str = DEFAULT_PASSWORD,
        role: str = "admin",
    ) -> Admin:
        async with session_factory() as session:
            admin = Admin(email=email, password_hash=hash_password(password), role=role)
            session.add(admin)
            await session.commit()
            await session.refresh(admin)
            return admin

    return _make


@pytest.fixture
def make_project(session_factory):
    async def _make(owner: Creator, title: str = "Pixel Garden", **fields) -> Project:
        async with session_factory() as session:
            project = Project(creator_id=owner.id, title=title, **fields)
            session.add(project)
            await session.commit()
            await session.refresh(project)
            return project

    return _make


@pytest.fixture
def add_collaborator(session_factory):
    async def _add(project: Project, creator: Creator) -> None:
        async with session_factory() as session:
            session.add(ProjectCollaborator(project_id=project.id, creator_id=creator.id))
            await session.commit()

    return _add


# ── Auth headers ────────────────────────────────────────────
@pytest.fixture
def creator_headers(tokens):
    def _headers(creator: Creator) -> dict[str, str]:
        token = tokens.issue_for(CreatorPrincipal(id=creator.id))
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def admin_headers(tokens):
    def _headers(admin: Admin) -> dict[str, str]:
        token = tokens.issue_for(AdminPrincipal(id=admin.id, email=admin.email, role=admin.role))
        return {"Authorization": f"Bearer {token}"}

    return _headers
