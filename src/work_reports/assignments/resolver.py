from __future__ import annotations

from typing import Optional

from ..core.constants import UNNAMED_PROJECT
from ..projects.repository import ProjectRepository
from ..users.repository import UserRepository
from .model import AssignedUser, ResolvedAssignments
from .repository import AssignmentRepository


class AssignmentResolver:
    """Builds the user -> assigned project names map.

    User and project references are batch-fetched and joined by id. An
    assignment whose user or project no longer exists is skipped and counted;
    it never aborts the rest of the batch. Project names are deduplicated per
    user, keeping first-seen order.
    """

    def __init__(self, assignments: AssignmentRepository, users: UserRepository, projects: ProjectRepository):
        self._assignments = assignments
        self._users = users
        self._projects = projects

    def resolve(self, user_id: Optional[int] = None) -> ResolvedAssignments:
        if user_id is None:
            records = self._assignments.list_all()
        else:
            records = self._assignments.list_for_user(user_id)

        users = self._users.get_many({a.user_id for a in records})
        projects = self._projects.get_many({a.project_id for a in records})

        names: dict[int, str] = {}
        assigned: dict[int, dict[str, int]] = {}
        skipped = 0

        for a in records:
            user = users.get(a.user_id)
            project = projects.get(a.project_id)
            if user is None or project is None:
                skipped += 1
                continue

            if a.user_id not in assigned:
                names[a.user_id] = user.name
                assigned[a.user_id] = {}
            assigned[a.user_id].setdefault(project.name or UNNAMED_PROJECT, project.project_id)

        return ResolvedAssignments.build(
            {
                uid: AssignedUser(
                    user_id=uid,
                    name=names[uid],
                    project_names=tuple(projects_by_name),
                    project_ids=tuple(projects_by_name.values()),
                )
                for uid, projects_by_name in assigned.items()
            },
            skipped=skipped,
        )
