from __future__ import annotations

from typing import Sequence

from ..common.datetime_utils import now_local
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Assignment
from .repository import AssignmentRepository


def _to_assignment(row: dict) -> Assignment:
    return Assignment(
        assignment_id=int(row["assignment_id"]),
        user_id=int(row["user_id"]),
        project_id=int(row["project_id"]),
        created_at=row.get("created_at"),
    )


class MySQLAssignmentRepository(AssignmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Assignment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT assignment_id, user_id, project_id, created_at FROM assignments ORDER BY assignment_id"
            )
            return [_to_assignment(r) for r in fetchall(cur)]

    def list_for_user(self, user_id: int) -> Sequence[Assignment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT assignment_id, user_id, project_id, created_at
                FROM assignments
                WHERE user_id=%s
                ORDER BY assignment_id
                """,
                (user_id,),
            )
            return [_to_assignment(r) for r in fetchall(cur)]

    def create_many(self, *, user_id: int, project_ids: Sequence[int]) -> int:
        now = now_local()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                "INSERT INTO assignments(user_id, project_id, created_at) VALUES(%s,%s,%s)",
                [(user_id, int(pid), now) for pid in project_ids],
            )
            return len(project_ids)
