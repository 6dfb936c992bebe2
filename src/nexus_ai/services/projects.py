"""Ownership-scoped CRUD over the projects collection.

Every operation filters by the owner as well as the project id. A project
owned by someone else is reported exactly like a missing one.
"""

from __future__ import annotations

import logging
from typing import Any

import pydantic

from nexus_ai.db.client import DatabaseClient
from nexus_ai.exceptions import NotFound, StoreError, ValidationError
from nexus_ai.models.project import Project, ProjectCreate, ProjectUpdate

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Project not found"

DEFAULT_TEAM_SIZE = 1
DEFAULT_PRIORITY = "medium"


def _to_project(row: dict[str, Any]) -> Project:
    """Parse a stored row; a malformed row is a store failure."""
    try:
        return Project(**row)
    except pydantic.ValidationError as e:
        logger.error(f"Malformed project row {row.get('id')}: {e}")
        raise StoreError("Stored project data is invalid") from e


class ProjectStore:
    """Project operations constrained to a single owner."""

    def __init__(self, db: DatabaseClient) -> None:
        self.db = db

    async def list(self, owner_id: str) -> list[Project]:
        """List the owner's projects, most recently created first."""
        try:
            rows = await self.db.list_projects(owner_id)
        except Exception as e:
            logger.error(f"Failed to list projects for owner={owner_id}: {e}")
            raise StoreError("Failed to fetch projects") from e
        return [_to_project(row) for row in rows]

    async def get(self, project_id: str, owner_id: str) -> Project:
        """Get one owned project.

        Raises:
            NotFound: No project with this id belongs to the owner
        """
        try:
            row = await self.db.get_project(project_id, owner_id)
        except Exception as e:
            logger.error(f"Failed to fetch project {project_id}: {e}")
            raise StoreError("Failed to fetch project") from e
        if row is None:
            raise NotFound(NOT_FOUND_MESSAGE)
        return _to_project(row)

    async def create(self, owner_id: str, fields: ProjectCreate) -> Project:
        """Create a project for the owner.

        Raises:
            ValidationError: Name missing or blank
        """
        if not fields.name or not fields.name.strip():
            raise ValidationError("Project name is required")

        data: dict[str, Any] = {
            "owner_id": owner_id,
            "name": fields.name,
            "description": fields.description,
            "logo_url": fields.logo_url,
            "team_size": fields.team_size or DEFAULT_TEAM_SIZE,
            "due_date": fields.due_date,
            "tags": fields.tags or [],
            "priority": fields.priority or DEFAULT_PRIORITY,
        }
        try:
            row = await self.db.insert_project(data)
        except Exception as e:
            logger.error(f"Failed to create project for owner={owner_id}: {e}")
            raise StoreError("Failed to create project") from e

        project = _to_project(row)
        logger.info(f"Created project {project.id} for owner={owner_id}")
        return project

    async def update(
        self,
        project_id: str,
        owner_id: str,
        patch: ProjectUpdate,
    ) -> Project:
        """Apply a sparse patch to an owned project.

        Ownership is checked first, then the update is issued. The two steps
        are not atomic; a project deleted in between surfaces as StoreError.

        Raises:
            NotFound: No project with this id belongs to the owner
        """
        existing = await self.get(project_id, owner_id)

        updates = patch.model_dump(exclude_unset=True)
        if not updates:
            return existing

        try:
            row = await self.db.update_project(project_id, owner_id, updates)
        except Exception as e:
            logger.error(f"Failed to update project {project_id}: {e}")
            raise StoreError("Failed to update project") from e
        if row is None:
            logger.error(f"Project {project_id} vanished between check and update")
            raise StoreError("Failed to update project")

        logger.info(f"Updated project {project_id} fields={sorted(updates)}")
        return _to_project(row)

    async def delete(self, project_id: str, owner_id: str) -> str:
        """Delete an owned project.

        Returns:
            Confirmation message

        Raises:
            NotFound: No project with this id belongs to the owner
        """
        await self.get(project_id, owner_id)

        try:
            deleted = await self.db.delete_project(project_id, owner_id)
        except Exception as e:
            logger.error(f"Failed to delete project {project_id}: {e}")
            raise StoreError("Failed to delete project") from e
        if not deleted:
            raise StoreError("Failed to delete project")

        logger.info(f"Deleted project {project_id} for owner={owner_id}")
        return "Project deleted successfully"

    # -------------------------------------------------------------------------
    # Admin operations (no owner filter, admin gate is the caller's job)
    # -------------------------------------------------------------------------

    async def list_all(self) -> list[Project]:
        try:
            rows = await self.db.list_all_projects()
        except Exception as e:
            logger.error(f"Failed to list all projects: {e}")
            raise StoreError("Failed to fetch projects") from e
        return [_to_project(row) for row in rows]

    async def delete_any(self, project_id: str) -> str:
        try:
            deleted = await self.db.delete_project(project_id, None)
        except Exception as e:
            logger.error(f"Failed to delete project {project_id}: {e}")
            raise StoreError("Failed to delete project") from e
        if not deleted:
            raise NotFound(NOT_FOUND_MESSAGE)
        return "Project deleted successfully"
