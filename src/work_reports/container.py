from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .assignments.mysql_assignment_repository import MySQLAssignmentRepository
from .assignments.repository import AssignmentRepository
from .assignments.resolver import AssignmentResolver
from .assignments.service import AssignmentService
from .core.constants import DEFAULT_TOKEN_EXPIRE_MINUTES
from .database.connection import DBConfig, DatabaseConnection
from .projects.mysql_project_repository import MySQLProjectRepository
from .projects.repository import ProjectRepository
from .projects.service import ProjectService
from .reports.collector import ReportCollector
from .reports.mysql_report_repository import MySQLReportRepository
from .reports.repository import ReportRepository
from .reports.service import ReportService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    projects_repo: ProjectRepository
    assignments_repo: AssignmentRepository
    reports_repo: ReportRepository

    auth_service: AuthService
    user_service: UserService
    project_service: ProjectService
    assignment_service: AssignmentService
    report_service: ReportService

    conn: Optional[DatabaseConnection] = None


def wire_services(
    *,
    users_repo: UserRepository,
    projects_repo: ProjectRepository,
    assignments_repo: AssignmentRepository,
    reports_repo: ReportRepository,
    secret_key: str,
    token_expire_minutes: int = DEFAULT_TOKEN_EXPIRE_MINUTES,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Assemble services over any repository implementations (MySQL or in-memory)."""
    resolver = AssignmentResolver(assignments_repo, users_repo, projects_repo)
    collector = ReportCollector(reports_repo, users_repo)

    return Container(
        users_repo=users_repo,
        projects_repo=projects_repo,
        assignments_repo=assignments_repo,
        reports_repo=reports_repo,
        auth_service=AuthService(users_repo, secret_key=secret_key, expire_minutes=token_expire_minutes),
        user_service=UserService(users_repo),
        project_service=ProjectService(projects_repo),
        assignment_service=AssignmentService(assignments_repo, resolver),
        report_service=ReportService(reports_repo, users_repo, resolver=resolver, collector=collector),
        conn=conn,
    )


def build_container(
    *,
    db_config: dict,
    secret_key: str,
    token_expire_minutes: int = DEFAULT_TOKEN_EXPIRE_MINUTES,
) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
        connect_timeout=int(db_config.get("connect_timeout", 10)),
    )
    conn = DatabaseConnection.get_instance(config)

    return wire_services(
        users_repo=MySQLUserRepository(conn),
        projects_repo=MySQLProjectRepository(conn),
        assignments_repo=MySQLAssignmentRepository(conn),
        reports_repo=MySQLReportRepository(conn),
        secret_key=secret_key,
        token_expire_minutes=token_expire_minutes,
        conn=conn,
    )
