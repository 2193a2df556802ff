from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import Any, Mapping, Optional

from ..assignments.resolver import AssignmentResolver
from ..common.datetime_utils import day_window, now_local, parse_period
from ..common.validators import parse_identifier, require_non_empty
from ..core.enums import ReportFilter
from ..core.exceptions import NotFoundError, ValidationError
from ..users.repository import UserRepository
from .collector import ReportCollector
from .formatter import format_user_reports
from .model import Report, ReconciliationDiagnostics, TodayReport, normalize_report_payload, parse_report_payload
from .reconciliation import reconcile
from .repository import ReportRepository

logger = logging.getLogger(__name__)


class ReportService:
    def __init__(
        self,
        reports: ReportRepository,
        users: UserRepository,
        *,
        resolver: AssignmentResolver,
        collector: ReportCollector,
    ):
        self._reports = reports
        self._users = users
        self._resolver = resolver
        self._collector = collector

    def today_reports(self, *, now: Optional[datetime] = None) -> TodayReport:
        """Per-user completion matrix for the local day containing ``now``.

        Assignments and reports are read concurrently; both must finish before
        reconciling. Any store failure propagates and no partial result is
        returned.
        """
        start, end = day_window(now or now_local())

        with ThreadPoolExecutor(max_workers=2) as executor:
            resolved_f = executor.submit(self._resolver.resolve)
            collected_f = executor.submit(self._collector.collect, start, end)
            resolved = resolved_f.result()
            collected = collected_f.result()

        reconciled = reconcile(resolved.users, collected.tuples)
        diagnostics = ReconciliationDiagnostics(
            skipped_assignments=resolved.skipped,
            skipped_reports=collected.skipped,
            unmatched_entries=reconciled.unmatched_entries,
        )
        if diagnostics.has_skips:
            logger.warning(
                "today report %s: skipped %d dangling assignments, %d dangling reports, %d unassigned entries",
                start.date().isoformat(),
                diagnostics.skipped_assignments,
                diagnostics.skipped_reports,
                diagnostics.unmatched_entries,
            )

        return TodayReport(users=format_user_reports(reconciled), diagnostics=diagnostics)

    def submit_report(self, data: Mapping[str, Any], *, now: Optional[datetime] = None) -> int:
        """Store a submission in either the legacy or the batch shape."""
        username = require_non_empty(str(data.get("userId") or ""), "userId")
        project_name = require_non_empty(str(data.get("projectName") or ""), "projectName")
        if not data.get("projectId"):
            raise ValidationError("All fields are required.")
        project_id = parse_identifier(data.get("projectId"), "projectId")

        batch = normalize_report_payload(parse_report_payload(data))

        user = self._users.get_by_username(username)
        if not user:
            raise NotFoundError("User not found.")

        return self._reports.create_report(
            user_id=user.user_id,
            project_id=project_id,
            project_name=project_name,
            entries=batch.entries,
            created_at=now or now_local(),
        )

    def all_reports(self) -> list[Report]:
        return list(self._reports.list_all())

    def reports_for_user(self, user_id: int) -> list[Report]:
        return list(self._reports.list_for_user(user_id))

    def filtered_reports(self, user_id: int, *, filter_type: str = "", filter_value: str = "") -> list[Report]:
        """A user's reports, optionally limited to one day, month or year."""
        try:
            kind = ReportFilter(filter_type) if filter_type else None
        except ValueError:
            kind = None
        if kind is None:
            return self.reports_for_user(user_id)

        start, end = parse_period(kind.value, filter_value)
        return list(self._reports.list_for_user_between(user_id, start, end))

    def reports_for_project(self, project_id: int, *, user_id: Optional[int] = None) -> list[Report]:
        return list(self._reports.list_for_project(project_id, user_id=user_id))
