from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, in_placeholders
from .model import (
    BatchReportPayload,
    LegacyReportPayload,
    Report,
    ReportEntry,
    ReportPayload,
    normalize_report_payload,
)
from .repository import ReportRepository

_SELECT = """
    SELECT report_id, user_id, project_id, project_name, created_at,
           task_number, work_type, work_description
    FROM reports
"""
_ORDER = " ORDER BY created_at DESC, report_id ASC"


def _entry(row: dict) -> ReportEntry:
    return ReportEntry(
        task_number=int(row["task_number"]),
        work_type=row["work_type"],
        work_description=row["work_description"],
    )


def _payload(row: dict, entry_rows: list[dict]) -> ReportPayload:
    if entry_rows:
        return BatchReportPayload(entries=tuple(_entry(e) for e in entry_rows))
    if row.get("task_number") is not None:
        return LegacyReportPayload(entry=_entry(row))
    return BatchReportPayload(entries=())


class MySQLReportRepository(ReportRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _query(self, where: str, params: tuple) -> Sequence[Report]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + where + _ORDER, params)
            rows = fetchall(cur)
            if not rows:
                return []

            ids = [int(r["report_id"]) for r in rows]
            cur.execute(
                f"""
                SELECT report_id, task_number, work_type, work_description
                FROM report_entries
                WHERE report_id IN ({in_placeholders(ids)})
                ORDER BY report_id, position
                """,
                tuple(ids),
            )
            by_report: dict[int, list[dict]] = {}
            for e in fetchall(cur):
                by_report.setdefault(int(e["report_id"]), []).append(e)

        out: list[Report] = []
        for r in rows:
            rid = int(r["report_id"])
            batch = normalize_report_payload(_payload(r, by_report.get(rid, [])))
            out.append(
                Report(
                    report_id=rid,
                    user_id=int(r["user_id"]),
                    project_id=int(r["project_id"]) if r.get("project_id") is not None else None,
                    project_name=r["project_name"],
                    created_at=r["created_at"],
                    entries=batch.entries,
                )
            )
        return out

    def create_report(
        self,
        *,
        user_id: int,
        project_id: Optional[int],
        project_name: str,
        entries: Sequence[ReportEntry],
        created_at: datetime,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO reports(user_id, project_id, project_name, created_at)
                VALUES(%s,%s,%s,%s)
                """,
                (user_id, project_id, project_name, created_at),
            )
            report_id = int(cur.lastrowid)
            cur.executemany(
                """
                INSERT INTO report_entries(report_id, position, task_number, work_type, work_description)
                VALUES(%s,%s,%s,%s,%s)
                """,
                [
                    (report_id, pos, e.task_number, e.work_type, e.work_description)
                    for pos, e in enumerate(entries)
                ],
            )
            return report_id

    def find_created_between(self, start: datetime, end: datetime) -> Sequence[Report]:
        return self._query("WHERE created_at BETWEEN %s AND %s", (start, end))

    def list_all(self) -> Sequence[Report]:
        return self._query("", ())

    def list_for_user(self, user_id: int) -> Sequence[Report]:
        return self._query("WHERE user_id=%s", (user_id,))

    def list_for_user_between(self, user_id: int, start: datetime, end: datetime) -> Sequence[Report]:
        return self._query("WHERE user_id=%s AND created_at BETWEEN %s AND %s", (user_id, start, end))

    def list_for_project(self, project_id: int, *, user_id: Optional[int] = None) -> Sequence[Report]:
        if user_id is None:
            return self._query("WHERE project_id=%s", (project_id,))
        return self._query("WHERE project_id=%s AND user_id=%s", (project_id, user_id))
