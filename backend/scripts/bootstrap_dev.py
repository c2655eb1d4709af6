"""
Dev bootstrap script — create tables, a superadmin, and a demo creator.

Usage:
    python -m scripts.bootstrap_dev [admin-email] [admin-password]

This will:
  1. Create all tables (dev only, production uses Alembic)
  2. Create a superadmin account (default admin@example.com)
  3. Create a demo creator with one project

Passwords are stored as bcrypt hashes only.
"""

import asyncio
import secrets
import sys

# Ensure the project root is on the path
sys.path.insert(0, ".")

from sqlalchemy import select

from showcase.auth.hashing import hash_password
from showcase.core.database import async_session_factory, create_all, engine
from showcase.models.admin import Admin
from showcase.models.creator import Creator
from showcase.models.project import Project


async def main(admin_email: str, admin_password: str) -> None:
    await create_all()

    creator_password = secrets.token_urlsafe(12)

    async with async_session_factory() as session:
        existing = await session.execute(select(Admin.id).where(Admin.email == admin_email))
        if existing.scalar_one_or_none() is None:
            session.add(
                Admin(
                    email=admin_email,
                    password_hash=hash_password(admin_password),
                    role="superadmin",
                )
            )

        creator = Creator(
            name="Demo Creator",
            email=f"creator-{secrets.token_hex(3)}@example.com",
            password_hash=hash_password(creator_password),
        )
        session.add(creator)
        await session.flush()  # get creator.id

        session.add(
            Project(
                creator_id=creator.id,
                title="Demo Project",
                description="Seeded by bootstrap_dev.",
                category="web",
                tech_stack=["python", "fastapi"],
            )
        )
        await session.commit()

    print()
    print("=" * 60)
    print("  Dev Bootstrap Complete")
    print("=" * 60)
    print()
    print(f"  Admin:     {admin_email}")
    print(f"  Creator:   {creator.email}")
    print(f"  Password:  {creator_password}")
    print()
    print("  ⚠  Copy the creator password now, it is not stored.")
    print("=" * 60)
    print()

    await engine.dispose()


if __name__ == "__main__":
    email = sys.argv[1] if len(sys.argv) > 1 else "admin@example.com"
    password = sys.argv[2] if len(sys.argv) > 2 else "change-me-now"
    asyncio.run(main(email.lower(), password))
