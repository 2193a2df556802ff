from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Mapping

from ..assignments.model import AssignedUser
from .model import Reconciliation, ReconciledRow, ReconciledUser, ReportTuple


def reconcile(assigned: Mapping[int, AssignedUser], tuples: Iterable[ReportTuple]) -> Reconciliation:
    """Join assignments with flattened report entries.

    For each assigned user and each of their projects, emit one row per
    matching entry (collector order) or a single null-filled row when nothing
    was reported. Entries for users without assignments, or for projects the
    user is not assigned to, produce no rows and are counted as unmatched.
    Pure function of its inputs.
    """
    by_key: dict[tuple[int, str], list[ReportTuple]] = {}
    for t in tuples:
        by_key.setdefault((t.user_id, t.project_name), []).append(t)

    users: dict[int, ReconciledUser] = {}
    matched = 0
    for user_id, user in assigned.items():
        if not user.project_names:
            continue
        rows: list[ReconciledRow] = []
        for project_name in dict.fromkeys(user.project_names):
            found = by_key.get((user_id, project_name), [])
            matched += len(found)
            if not found:
                rows.append(ReconciledRow(project_name=project_name))
                continue
            rows.extend(
                ReconciledRow(
                    project_name=project_name,
                    task_number=t.task_number,
                    work_type=t.work_type,
                    work_description=t.work_description,
                )
                for t in found
            )
        users[user_id] = ReconciledUser(user_id=user_id, name=user.name, rows=tuple(rows))

    total = sum(len(v) for v in by_key.values())
    return Reconciliation(users=MappingProxyType(users), unmatched_entries=total - matched)
