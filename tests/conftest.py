from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional

import pytest
from werkzeug.security import generate_password_hash

from work_reports.assignments.model import Assignment
from work_reports.core.enums import Role
from work_reports.projects.model import Project
from work_reports.reports.model import Report, ReportEntry
from work_reports.users.model import User


class InMemoryUsers:
    def __init__(self):
        self.by_id: dict[int, User] = {}
        self._id = 0

    def add(self, name: str, *, username: Optional[str] = None, password: str = "secret1", role: Role = Role.USER) -> User:
        self._id += 1
        user = User(
            user_id=self._id,
            username=username or name.lower(),
            name=name,
            password_hash=generate_password_hash(password),
            role=role,
            created_at=datetime(2026, 1, 1, 9, 0),
        )
        self.by_id[user.user_id] = user
        return user

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.by_id.get(user_id)

    def get_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self.by_id.values() if u.username == username), None)

    def get_many(self, user_ids: Iterable[int]):
        return {i: self.by_id[i] for i in set(user_ids) if i in self.by_id}

    def create_user(self, *, username: str, name: str, password_hash: str, role: Role) -> int:
        self._id += 1
        self.by_id[self._id] = User(
            user_id=self._id, username=username, name=name, password_hash=password_hash, role=role
        )
        return self._id

    def delete_by_id(self, user_id: int) -> bool:
        return self.by_id.pop(user_id, None) is not None

    def list_all(self):
        return sorted(self.by_id.values(), key=lambda u: u.user_id, reverse=True)


class InMemoryProjects:
    def __init__(self):
        self.by_id: dict[int, Project] = {}
        self._id = 0

    def add(self, name: str) -> Project:
        pid = self.create_project(name=name, name_key=name.casefold())
        return self.by_id[pid]

    def get_by_id(self, project_id: int) -> Optional[Project]:
        return self.by_id.get(project_id)

    def get_by_name_key(self, name_key: str) -> Optional[Project]:
        return next((p for p in self.by_id.values() if p.name_key == name_key), None)

    def get_many(self, project_ids: Iterable[int]):
        return {i: self.by_id[i] for i in set(project_ids) if i in self.by_id}

    def create_project(self, *, name: str, name_key: str, url=None) -> int:
        self._id += 1
        self.by_id[self._id] = Project(project_id=self._id, name=name, name_key=name_key, url=url)
        return self._id

    def update_name(self, project_id: int, *, name: str, name_key: str) -> bool:
        p = self.by_id.get(project_id)
        if not p:
            return False
        self.by_id[project_id] = Project(project_id=project_id, name=name, name_key=name_key, url=p.url)
        return True

    def delete_by_id(self, project_id: int) -> bool:
        return self.by_id.pop(project_id, None) is not None

    def list_all(self):
        return sorted(self.by_id.values(), key=lambda p: p.project_id, reverse=True)


class InMemoryAssignments:
    def __init__(self):
        self.records: list[Assignment] = []

    def assign(self, user: User, *projects: Project) -> None:
        self.create_many(user_id=user.user_id, project_ids=[p.project_id for p in projects])

    def list_all(self):
        return list(self.records)

    def list_for_user(self, user_id: int):
        return [a for a in self.records if a.user_id == user_id]

    def create_many(self, *, user_id: int, project_ids) -> int:
        for pid in project_ids:
            self.records.append(
                Assignment(assignment_id=len(self.records) + 1, user_id=user_id, project_id=int(pid))
            )
        return len(project_ids)


class InMemoryReports:
    def __init__(self):
        self.reports: list[Report] = []

    def add(self, user: User, project_name: str, created_at: datetime, *entries: tuple, project_id=None) -> Report:
        rid = self.create_report(
            user_id=user.user_id,
            project_id=project_id,
            project_name=project_name,
            entries=[ReportEntry(task_number=t, work_type=w, work_description=d) for t, w, d in entries],
            created_at=created_at,
        )
        return self.reports[rid - 1]

    def create_report(self, *, user_id, project_id, project_name, entries, created_at) -> int:
        rid = len(self.reports) + 1
        self.reports.append(
            Report(
                report_id=rid,
                user_id=user_id,
                project_id=project_id,
                project_name=project_name,
                created_at=created_at,
                entries=tuple(entries),
            )
        )
        return rid

    def _newest_first(self, items):
        return sorted(items, key=lambda r: r.created_at, reverse=True)

    def find_created_between(self, start, end):
        return self._newest_first(r for r in self.reports if start <= r.created_at <= end)

    def list_all(self):
        return self._newest_first(self.reports)

    def list_for_user(self, user_id):
        return self._newest_first(r for r in self.reports if r.user_id == user_id)

    def list_for_user_between(self, user_id, start, end):
        return self._newest_first(
            r for r in self.reports if r.user_id == user_id and start <= r.created_at <= end
        )

    def list_for_project(self, project_id, *, user_id=None):
        return self._newest_first(
            r
            for r in self.reports
            if r.project_id == project_id and (user_id is None or r.user_id == user_id)
        )


class FakeCursor:
    """Scripted DB-API cursor: each ``execute`` pops the next result set."""

    def __init__(self, results: list, error: Optional[Exception] = None, rowcount: int = 1):
        self._results = list(results)
        self._error = error
        self._current: list = []
        self.statements: list[tuple[str, tuple]] = []
        self.rowcount = rowcount
        self.lastrowid = 1
        self.closed = False

    def execute(self, sql: str, params: tuple = ()) -> None:
        self.statements.append((sql, params))
        if self._error is not None:
            raise self._error
        self._current = self._results.pop(0) if self._results else []

    def fetchall(self):
        return self._current

    def fetchone(self):
        return self._current[0] if self._current else None

    def close(self) -> None:
        self.closed = True


class FakeConnection:
    def __init__(self, cursor: FakeCursor):
        self._cursor = cursor
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary: bool = True) -> FakeCursor:
        return self._cursor

    def commit(self) -> None:
        self.committed = True

    def rollback(self) -> None:
        self.rolled_back = True

    def close(self) -> None:
        self.closed = True


class FakeConnectionFactory:
    """Stands in for ``DatabaseConnection``; every ``connect`` shares one cursor."""

    def __init__(self, results: Iterable[list] = (), *, error: Optional[Exception] = None, rowcount: int = 1):
        self.cursor = FakeCursor(list(results), error=error, rowcount=rowcount)
        self.connections: list[FakeConnection] = []

    def connect(self) -> FakeConnection:
        conn = FakeConnection(self.cursor)
        self.connections.append(conn)
        return conn


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 2, 3, 14, 30, 0)


@pytest.fixture
def users() -> InMemoryUsers:
    return InMemoryUsers()


@pytest.fixture
def projects() -> InMemoryProjects:
    return InMemoryProjects()


@pytest.fixture
def assignments() -> InMemoryAssignments:
    return InMemoryAssignments()


@pytest.fixture
def reports() -> InMemoryReports:
    return InMemoryReports()


@pytest.fixture
def fake_db():
    return FakeConnectionFactory
