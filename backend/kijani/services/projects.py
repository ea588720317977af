"""
Project queries.

Ownership is the explicit owner_id FK; callers compare it against the
authenticated user loaded by kijani.services.users.
"""

from __future__ import annotations

import uuid
from collections.abc import Sequence
from typing import Any

from sqlalchemy import select
from sqlalchemy.engine import Row
from sqlalchemy.ext.asyncio import AsyncSession

from kijani.models.project import Project
from kijani.models.user import User

# Fields a client may overwrite on update. Maps body key → ORM attribute.
UPDATABLE_FIELDS: dict[str, str] = {
    "title": "title",
    "description": "description",
    "metadata": "metadata_",
}


def parse_project_id(raw_id: str) -> uuid.UUID | None:
    """Path ids that are not UUIDs cannot name a project."""
    try:
        return uuid.UUID(raw_id)
    except ValueError:
        return None


async def list_project_summaries(session: AsyncSession) -> Sequence[Row[Any]]:
    """id, title, description for every project, in no particular order."""
    stmt = select(Project.id, Project.title, Project.description)
    result = await session.execute(stmt)
    return result.all()


async def get_project(session: AsyncSession, project_id: uuid.UUID) -> Project | None:
    return await session.get(Project, project_id)


async def create_project(
    session: AsyncSession,
    *,
    owner: User,
    title: str,
    description: str | None = None,
    metadata: dict[str, Any] | None = None,
) -> Project:
    """Insert a project owned by `owner` and commit."""
    project = Project(
        title=title,
        description=description,
        metadata_=metadata if metadata is not None else {},
        owner_id=owner.id,
    )
    session.add(project)
    await session.commit()
    await session.refresh(project)
    return project


def apply_project_changes(project: Project, changes: dict[str, Any]) -> list[str]:
    """
    Partial merge: only keys that are present and not None overwrite.

    Returns the body keys that were applied.
    """
    applied: list[str] = []
    for key, attr in UPDATABLE_FIELDS.items():
        value = changes.get(key)
        if value is None:
            continue
        setattr(project, attr, value)
        applied.append(key)
    return applied


async def update_project(
    session: AsyncSession, project: Project, changes: dict[str, Any]
) -> Project:
    """Merge `changes` into `project` and commit."""
    if apply_project_changes(project, changes):
        await session.commit()
        await session.refresh(project)
    return project


async def delete_project(session: AsyncSession, project: Project) -> None:
    await session.delete(project)
    await session.commit()
