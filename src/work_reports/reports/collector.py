from __future__ import annotations

from datetime import datetime

from ..users.repository import UserRepository
from .model import CollectedReports, ReportTuple
from .repository import ReportRepository


class ReportCollector:
    """Loads reports created in a window and flattens their entries.

    Reports whose user no longer exists are skipped and counted. Output is
    newest report first; reports with equal timestamps keep fetch order, and
    entries keep their order within a report.
    """

    def __init__(self, reports: ReportRepository, users: UserRepository):
        self._reports = reports
        self._users = users

    def collect(self, start: datetime, end: datetime) -> CollectedReports:
        reports = sorted(self._reports.find_created_between(start, end), key=lambda r: r.created_at, reverse=True)
        users = self._users.get_many({r.user_id for r in reports})

        tuples: list[ReportTuple] = []
        skipped = 0
        for report in reports:
            if report.user_id not in users:
                skipped += 1
                continue
            for entry in report.entries:
                tuples.append(
                    ReportTuple(
                        user_id=report.user_id,
                        project_name=report.project_name,
                        task_number=entry.task_number,
                        work_type=entry.work_type,
                        work_description=entry.work_description,
                    )
                )

        return CollectedReports(tuples=tuple(tuples), skipped=skipped)
