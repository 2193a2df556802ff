from __future__ import annotations

from typing import Iterable, Mapping, Optional, Sequence

import mysql.connector

from ..common.datetime_utils import now_local
from ..core.exceptions import ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_placeholders
from .model import Project
from .repository import ProjectRepository

_COLUMNS = "project_id, name, name_key, url, created_at"
_DUPLICATE = "Project already exists"


def _to_project(row: dict) -> Project:
    return Project(
        project_id=int(row["project_id"]),
        name=row["name"],
        name_key=row["name_key"],
        url=row.get("url"),
        created_at=row.get("created_at"),
    )


class MySQLProjectRepository(ProjectRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, project_id: int) -> Optional[Project]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM projects WHERE project_id=%s", (project_id,))
            row = fetchone(cur)
            return _to_project(row) if row else None

    def get_by_name_key(self, name_key: str) -> Optional[Project]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM projects WHERE name_key=%s", (name_key,))
            row = fetchone(cur)
            return _to_project(row) if row else None

    def get_many(self, project_ids: Iterable[int]) -> Mapping[int, Project]:
        ids = sorted({int(i) for i in project_ids})
        if not ids:
            return {}
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM projects WHERE project_id IN ({in_placeholders(ids)})",
                tuple(ids),
            )
            return {int(r["project_id"]): _to_project(r) for r in fetchall(cur)}

    def create_project(self, *, name: str, name_key: str, url: Optional[str] = None) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "INSERT INTO projects(name, name_key, url, created_at) VALUES(%s,%s,%s,%s)",
                    (name, name_key, url, now_local()),
                )
                return int(cur.lastrowid)
        except mysql.connector.IntegrityError:
            raise ValidationError(_DUPLICATE)

    def update_name(self, project_id: int, *, name: str, name_key: str) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "UPDATE projects SET name=%s, name_key=%s WHERE project_id=%s",
                    (name, name_key, project_id),
                )
                # rowcount is 0 when the values are unchanged, so re-check existence.
                if cur.rowcount > 0:
                    return True
                cur.execute("SELECT 1 AS ok FROM projects WHERE project_id=%s", (project_id,))
                return fetchone(cur) is not None
        except mysql.connector.IntegrityError:
            raise ValidationError(_DUPLICATE)

    def delete_by_id(self, project_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM projects WHERE project_id=%s", (project_id,))
            return cur.rowcount > 0

    def list_all(self) -> Sequence[Project]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM projects ORDER BY created_at DESC, project_id DESC")
            return [_to_project(r) for r in fetchall(cur)]
