from __future__ import annotations

from typing import Iterable, Mapping, Optional, Protocol, Sequence

from .model import Project


class ProjectRepository(Protocol):
    def get_by_id(self, project_id: int) -> Optional[Project]:
        raise NotImplementedError

    def get_by_name_key(self, name_key: str) -> Optional[Project]:
        raise NotImplementedError

    def get_many(self, project_ids: Iterable[int]) -> Mapping[int, Project]:
        raise NotImplementedError

    def create_project(self, *, name: str, name_key: str, url: Optional[str] = None) -> int:
        raise NotImplementedError

    def update_name(self, project_id: int, *, name: str, name_key: str) -> bool:
        raise NotImplementedError

    def delete_by_id(self, project_id: int) -> bool:
        raise NotImplementedError

    def list_all(self) -> Sequence[Project]:
        raise NotImplementedError
