"""
Project comments: public threads, the creator inbox, admin moderation.

Threads are one level deep. A reply must point at a top-level comment on
the same project; anything else is a 400. Deleting a top-level comment
deletes its replies.
"""

from __future__ import annotations

import logging
import uuid
from collections import defaultdict

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from showcase.core.database import commit_or_fail
from showcase.core.errors import NotFound, ValidationFailed
from showcase.models.comment import AUTHOR_ADMIN, AUTHOR_USER, Comment
from showcase.models.creator import Creator
from showcase.models.project import Project

logger = logging.getLogger(__name__)

ADMIN_DISPLAY_NAME = "Admin"


def _as_dict(comment: Comment) -> dict:
    return {
        "id": comment.id,
        "project_id": comment.project_id,
        "parent_id": comment.parent_id,
        "author_type": comment.author_type,
        "name": comment.name,
        "email": comment.email,
        "content": comment.content,
        "created_at": comment.created_at,
    }


def _thread(comments: list[Comment]) -> list[dict]:
    """Group a flat comment list into top-level dicts, newest first, with replies."""
    replies: dict[uuid.UUID, list[Comment]] = defaultdict(list)
    roots: list[Comment] = []
    for comment in comments:
        if comment.parent_id is None:
            roots.append(comment)
        else:
            replies[comment.parent_id].append(comment)

    roots.sort(key=lambda c: c.created_at, reverse=True)
    threads = []
    for root in roots:
        thread = _as_dict(root)
        thread["replies"] = [
            _as_dict(reply)
            for reply in sorted(replies[root.id], key=lambda c: c.created_at)
        ]
        threads.append(thread)
    return threads


async def _top_level_parent(
    session: AsyncSession,
    project_id: uuid.UUID,
    parent_id: uuid.UUID,
) -> Comment:
    parent = await session.get(Comment, parent_id)
    if parent is None or parent.project_id != project_id:
        raise ValidationFailed("Reply target is not a comment on this project.")
    if parent.parent_id is not None:
        raise ValidationFailed("Replies cannot be nested.")
    return parent


async def list_threads(session: AsyncSession, project_id: uuid.UUID) -> list[dict]:
    result = await session.execute(select(Comment).where(Comment.project_id == project_id))
    return _thread(list(result.scalars().all()))


async def create_comment(
    session: AsyncSession,
    project: Project,
    name: str,
    email: str,
    content: str,
    parent_id: uuid.UUID | None = None,
) -> Comment:
    if parent_id is not None:
        await _top_level_parent(session, project.id, parent_id)

    comment = Comment(
        project_id=project.id,
        parent_id=parent_id,
        author_type=AUTHOR_USER,
        name=name,
        email=email,
        content=content,
    )
    session.add(comment)
    await commit_or_fail(session, "post comment")
    await session.refresh(comment)
    return comment


async def list_for_owner(session: AsyncSession, creator_id: uuid.UUID) -> list[dict]:
    """Comments on every project the creator owns, newest first."""
    stmt = (
        select(Comment, Project.title)
        .join(Project, Project.id == Comment.project_id)
        .where(Project.creator_id == creator_id)
        .order_by(Comment.created_at.desc())
    )
    result = await session.execute(stmt)
    return [
        {**_as_dict(comment), "project_title": title}
        for comment, title in result.all()
    ]


async def list_for_moderation(session: AsyncSession) -> list[dict]:
    """All top-level comments with their replies, project title and owner name."""
    stmt = (
        select(Comment, Project.title, Creator.name)
        .join(Project, Project.id == Comment.project_id)
        .join(Creator, Creator.id == Project.creator_id)
    )
    rows = (await session.execute(stmt)).all()
    context = {comment.id: (title, owner) for comment, title, owner in rows}

    threads = _thread([comment for comment, _, _ in rows])
    for thread in threads:
        thread["project_title"], thread["creator_name"] = context[thread["id"]]
    return threads


async def reply_as_admin(
    session: AsyncSession,
    comment_id: uuid.UUID,
    admin_email: str,
    content: str,
) -> Comment:
    parent = await session.get(Comment, comment_id)
    if parent is None:
        raise NotFound("Comment not found.")
    if parent.parent_id is not None:
        raise ValidationFailed("Replies cannot be nested.")

    reply = Comment(
        project_id=parent.project_id,
        parent_id=parent.id,
        author_type=AUTHOR_ADMIN,
        name=ADMIN_DISPLAY_NAME,
        email=admin_email,
        content=content,
    )
    session.add(reply)
    await commit_or_fail(session, "post reply")
    await session.refresh(reply)
    return reply


async def delete_comment(session: AsyncSession, comment_id: uuid.UUID) -> None:
    comment = await session.get(Comment, comment_id)
    if comment is None:
        raise NotFound("Comment not found.")

    await session.execute(delete(Comment).where(Comment.parent_id == comment.id))
    await session.delete(comment)
    await commit_or_fail(session, "delete comment")
    logger.info("Deleted comment %s", comment_id)
