"""
Projects router: CRUD on the Project resource.

GET    /api/projects        public listing (id, title, description)
POST   /api/projects        authenticated; caller becomes owner
GET    /api/projects/{id}   public
PUT    /api/projects/{id}   owner or admin; partial merge
DELETE /api/projects/{id}   owner or admin
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from kijani.auth.dependencies import get_current_user
from kijani.auth.policy import ensure_can_modify
from kijani.core.database import get_db_session
from kijani.core.errors import InternalError, NotFound
from kijani.models.project import Project
from kijani.models.user import User
from kijani.schemas.project import ProjectCreate, ProjectOut, ProjectSummary, ProjectUpdate
from kijani.services import projects as project_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Projects"])

DbSession = Annotated[AsyncSession, Depends(get_db_session)]
CurrentUser = Annotated[User, Depends(get_current_user)]


async def _load_project(session: AsyncSession, raw_id: str) -> Project:
    project_id = project_service.parse_project_id(raw_id)
    project = None
    if project_id is not None:
        project = await project_service.get_project(session, project_id)
    if project is None:
        raise NotFound()
    return project


@router.get(
    "",
    response_model=list[ProjectSummary],
    summary="List all projects",
)
async def list_projects(session: DbSession) -> list[ProjectSummary]:
    rows = await project_service.list_project_summaries(session)
    return [ProjectSummary.model_validate(row, from_attributes=True) for row in rows]


@router.post(
    "",
    response_model=ProjectOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create a project owned by the caller",
)
async def create_project(
    payload: ProjectCreate,
    session: DbSession,
    user: CurrentUser,
) -> Project:
    owner_id = user.id
    try:
        project = await project_service.create_project(
            session,
            owner=user,
            title=payload.title,
            description=payload.description,
            metadata=payload.metadata,
        )
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.exception("Failed to create project for user %s", owner_id)
        raise InternalError() from exc

    logger.info("User %s created project %s", owner_id, project.id)
    return project


@router.get(
    "/{project_id}",
    response_model=ProjectOut,
    summary="Fetch one project",
)
async def get_project(project_id: str, session: DbSession) -> Project:
    return await _load_project(session, project_id)


@router.put(
    "/{project_id}",
    response_model=ProjectOut,
    summary="Update a project (owner or admin)",
    description="Only fields present and non-null in the body are overwritten.",
)
async def update_project(
    project_id: str,
    session: DbSession,
    user: CurrentUser,
    payload: ProjectUpdate | None = None,
) -> Project:
    project = await _load_project(session, project_id)
    ensure_can_modify(user, project)

    # No body at all is the empty subset.
    changes = payload.model_dump(exclude_unset=True) if payload is not None else {}
    try:
        project = await project_service.update_project(session, project, changes)
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.exception("Failed to update project %s", project_id)
        raise InternalError() from exc

    logger.info("User %s updated project %s", user.id, project.id)
    return project


@router.delete(
    "/{project_id}",
    summary="Delete a project (owner or admin)",
)
async def delete_project(
    project_id: str,
    session: DbSession,
    user: CurrentUser,
) -> dict[str, str]:
    project = await _load_project(session, project_id)
    ensure_can_modify(user, project)

    try:
        await project_service.delete_project(session, project)
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.exception("Failed to delete project %s", project_id)
        raise InternalError() from exc

    logger.info("User %s deleted project %s", user.id, project_id)
    return {"message": "Deleted"}
