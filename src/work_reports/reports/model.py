from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union

from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class ReportEntry:
    """One unit of work inside a report submission."""

    task_number: int
    work_type: str
    work_description: str

    def to_dict(self) -> dict:
        return {
            "taskNumber": self.task_number,
            "workType": self.work_type,
            "workDescription": self.work_description,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ReportEntry":
        task_number = data.get("taskNumber")
        work_type = str(data.get("workType") or "").strip()
        work_description = str(data.get("workDescription") or "").strip()
        if task_number in (None, "") or not work_type or not work_description:
            raise ValidationError("All fields are required.")
        if isinstance(task_number, bool) or (isinstance(task_number, float) and not task_number.is_integer()):
            raise ValidationError("taskNumber must be a number")
        try:
            task_number = int(task_number)
        except (TypeError, ValueError):
            raise ValidationError("taskNumber must be a number")
        return cls(task_number=task_number, work_type=work_type, work_description=work_description)


@dataclass(frozen=True)
class LegacyReportPayload:
    """Older shape: the work entry fields sit directly on the report."""

    entry: ReportEntry


@dataclass(frozen=True)
class BatchReportPayload:
    """Current shape: an ordered list of entries for one project."""

    entries: tuple[ReportEntry, ...]


ReportPayload = Union[LegacyReportPayload, BatchReportPayload]


def parse_report_payload(data: Mapping[str, Any]) -> ReportPayload:
    """Read either report shape from a request body or stored document."""
    raw_entries = data.get("reports")
    if raw_entries is None:
        return LegacyReportPayload(entry=ReportEntry.from_dict(data))
    if not isinstance(raw_entries, list) or not raw_entries:
        raise ValidationError("reports must be a non-empty list")
    return BatchReportPayload(
        entries=tuple(ReportEntry.from_dict(e if isinstance(e, Mapping) else {}) for e in raw_entries)
    )


def normalize_report_payload(payload: ReportPayload) -> BatchReportPayload:
    if isinstance(payload, BatchReportPayload):
        return payload
    if isinstance(payload, LegacyReportPayload):
        return BatchReportPayload(entries=(payload.entry,))
    raise TypeError(f"Unsupported report payload: {type(payload)!r}")


@dataclass(frozen=True)
class Report:
    """A stored submission, always in batch form.

    ``project_name`` is a snapshot taken at submission time.
    """

    report_id: int
    user_id: int
    project_id: Optional[int]
    project_name: str
    created_at: datetime
    entries: tuple[ReportEntry, ...] = ()

    def to_dict(self) -> dict:
        return {
            "_id": self.report_id,
            "userId": self.user_id,
            "projectId": self.project_id,
            "projectName": self.project_name,
            "createdAt": self.created_at.isoformat(),
            "reports": [e.to_dict() for e in self.entries],
        }


@dataclass(frozen=True)
class ReportTuple:
    """One flattened work entry, tagged with its submitting user and project."""

    user_id: int
    project_name: str
    task_number: int
    work_type: str
    work_description: str


@dataclass(frozen=True)
class CollectedReports:
    tuples: tuple[ReportTuple, ...]
    skipped: int = 0


@dataclass(frozen=True)
class ReconciledRow:
    project_name: str
    task_number: Optional[int] = None
    work_type: Optional[str] = None
    work_description: Optional[str] = None

    @property
    def is_missing(self) -> bool:
        return self.task_number is None and self.work_type is None and self.work_description is None

    def to_dict(self) -> dict:
        return {
            "projectName": self.project_name,
            "taskNumber": self.task_number,
            "workType": self.work_type,
            "workDescription": self.work_description,
        }


@dataclass(frozen=True)
class ReconciledUser:
    user_id: int
    name: str
    rows: tuple[ReconciledRow, ...]


@dataclass(frozen=True)
class Reconciliation:
    users: Mapping[int, ReconciledUser] = field(default_factory=lambda: MappingProxyType({}))
    unmatched_entries: int = 0


@dataclass(frozen=True)
class ReconciliationDiagnostics:
    skipped_assignments: int = 0
    skipped_reports: int = 0
    unmatched_entries: int = 0

    @property
    def has_skips(self) -> bool:
        return bool(self.skipped_assignments or self.skipped_reports or self.unmatched_entries)

    def to_headers(self) -> dict[str, str]:
        return {
            "X-Skipped-Assignments": str(self.skipped_assignments),
            "X-Skipped-Reports": str(self.skipped_reports),
            "X-Unmatched-Entries": str(self.unmatched_entries),
        }


@dataclass(frozen=True)
class TodayReport:
    users: list[dict]
    diagnostics: ReconciliationDiagnostics
