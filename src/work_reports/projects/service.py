from __future__ import annotations

from typing import Optional

from ..common.validators import canonical_name, require_non_empty
from ..core.exceptions import NotFoundError, ValidationError
from .model import Project
from .repository import ProjectRepository


class ProjectService:
    """Use case: manage projects (admin).

    Project names are unique case-insensitively; uniqueness is checked on the
    canonical ``name_key`` and backed by a unique index in the store.
    """

    def __init__(self, projects: ProjectRepository):
        self._projects = projects

    def create_project(self, *, name: str, url: Optional[str] = None) -> Project:
        name = require_non_empty(name, "Project name")
        key = canonical_name(name)
        if self._projects.get_by_name_key(key):
            raise ValidationError("Project already exists")

        url = (url or "").strip() or None
        project_id = self._projects.create_project(name=name, name_key=key, url=url)
        created = self._projects.get_by_id(project_id)
        return created or Project(project_id=project_id, name=name, name_key=key, url=url)

    def list_projects(self) -> list[Project]:
        return list(self._projects.list_all())

    def update_project(self, project_id: int, *, name: str) -> Project:
        name = require_non_empty(name, "Project name")
        key = canonical_name(name)
        clash = self._projects.get_by_name_key(key)
        if clash and clash.project_id != project_id:
            raise ValidationError("Project already exists")

        if not self._projects.update_name(project_id, name=name, name_key=key):
            raise NotFoundError("Project not found")
        return self._projects.get_by_id(project_id) or Project(project_id=project_id, name=name, name_key=key)

    def delete_project(self, project_id: int) -> None:
        # Assignments and reports pointing at the project are left in place.
        if not self._projects.delete_by_id(project_id):
            raise NotFoundError("Project not found")
