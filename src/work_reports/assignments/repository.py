from __future__ import annotations

from typing import Protocol, Sequence

from .model import Assignment


class AssignmentRepository(Protocol):
    def list_all(self) -> Sequence[Assignment]:
        """All assignments in insertion order."""
        raise NotImplementedError

    def list_for_user(self, user_id: int) -> Sequence[Assignment]:
        raise NotImplementedError

    def create_many(self, *, user_id: int, project_ids: Sequence[int]) -> int:
        raise NotImplementedError
