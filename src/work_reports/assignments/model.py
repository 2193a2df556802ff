from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from types import MappingProxyType
from typing import Mapping, Optional


@dataclass(frozen=True)
class Assignment:
    """Link record: a user is expected to report on a project.

    Duplicates are allowed in the store; readers deduplicate.
    """

    assignment_id: int
    user_id: int
    project_id: int
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class AssignedUser:
    """Resolved view of one user's assignments, project names in first-seen order."""

    user_id: int
    name: str
    project_names: tuple[str, ...]
    project_ids: tuple[int, ...] = ()


@dataclass(frozen=True)
class ResolvedAssignments:
    """Per-user assignment map built fresh for each request."""

    users: Mapping[int, AssignedUser]
    skipped: int = 0

    @classmethod
    def build(cls, users: dict[int, AssignedUser], *, skipped: int = 0) -> "ResolvedAssignments":
        return cls(users=MappingProxyType(dict(users)), skipped=skipped)
