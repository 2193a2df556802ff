from __future__ import annotations

from typing import Sequence

from ..common.validators import parse_identifier
from ..core.exceptions import ValidationError
from .repository import AssignmentRepository
from .resolver import AssignmentResolver


class AssignmentService:
    """Use case: assign projects to users and list a user's assigned projects."""

    def __init__(self, assignments: AssignmentRepository, resolver: AssignmentResolver):
        self._assignments = assignments
        self._resolver = resolver

    def assign_projects(self, *, user_id, project_ids) -> int:
        if not user_id or not isinstance(project_ids, (list, tuple)) or not project_ids:
            raise ValidationError("User ID and at least one Project ID are required.")

        uid = parse_identifier(user_id, "userId")
        pids = [parse_identifier(pid, "projectId") for pid in project_ids]
        return self._assignments.create_many(user_id=uid, project_ids=pids)

    def assigned_projects(self, user_id: int) -> Sequence[dict]:
        """``{id, name}`` per distinct assigned project name, first-seen order."""
        assigned = self._resolver.resolve(user_id).users.get(user_id)
        if assigned is None:
            return []
        return [
            {"id": pid, "name": name}
            for pid, name in zip(assigned.project_ids, assigned.project_names)
        ]
