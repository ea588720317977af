"""Ownership check applied wherever a project is mutated or deleted."""

from kijani.core.errors import Forbidden
from kijani.models.project import Project
from kijani.models.user import User


def can_modify(user: User, project: Project) -> bool:
    """Owner or admin. No other roles, scopes or delegation exist."""
    return user.id == project.owner_id or user.is_admin


def ensure_can_modify(user: User, project: Project) -> None:
    if not can_modify(user, project):
        raise Forbidden()
