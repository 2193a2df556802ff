from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import Report, ReportEntry


class ReportRepository(Protocol):
    """Report store. Every listing returns normalized reports, newest first."""

    def create_report(
        self,
        *,
        user_id: int,
        project_id: Optional[int],
        project_name: str,
        entries: Sequence[ReportEntry],
        created_at: datetime,
    ) -> int:
        raise NotImplementedError

    def find_created_between(self, start: datetime, end: datetime) -> Sequence[Report]:
        """Reports with ``start <= created_at <= end``."""
        raise NotImplementedError

    def list_all(self) -> Sequence[Report]:
        raise NotImplementedError

    def list_for_user(self, user_id: int) -> Sequence[Report]:
        raise NotImplementedError

    def list_for_user_between(self, user_id: int, start: datetime, end: datetime) -> Sequence[Report]:
        raise NotImplementedError

    def list_for_project(self, project_id: int, *, user_id: Optional[int] = None) -> Sequence[Report]:
        raise NotImplementedError
