from __future__ import annotations

from work_reports.assignments.model import AssignedUser
from work_reports.reports.model import ReconciledRow, ReportTuple
from work_reports.reports.reconciliation import reconcile


def _t(user_id: int, project: str, task: int, work_type: str = "dev", desc: str = "work") -> ReportTuple:
    return ReportTuple(user_id=user_id, project_name=project, task_number=task, work_type=work_type, work_description=desc)


def test_no_reports_yields_null_row_per_assigned_project():
    assigned = {1: AssignedUser(user_id=1, name="Ann", project_names=("Alpha", "Beta"))}

    result = reconcile(assigned, [])

    assert result.users[1].rows == (ReconciledRow("Alpha"), ReconciledRow("Beta"))
    assert all(row.is_missing for row in result.users[1].rows)


def test_multiple_entries_for_one_project_all_appear_in_order():
    assigned = {1: AssignedUser(user_id=1, name="Ann", project_names=("Alpha",))}

    result = reconcile(assigned, [_t(1, "Alpha", 1), _t(1, "Alpha", 2)])

    rows = result.users[1].rows
    assert [r.task_number for r in rows] == [1, 2]
    assert not any(r.is_missing for r in rows)


def test_entry_for_unassigned_project_contributes_no_rows():
    assigned = {1: AssignedUser(user_id=1, name="Ann", project_names=("Alpha",))}

    result = reconcile(assigned, [_t(1, "Gamma", 7)])

    assert result.users[1].rows == (ReconciledRow("Alpha"),)
    assert result.unmatched_entries == 1


def test_reporting_user_without_assignments_is_excluded():
    assigned = {1: AssignedUser(user_id=1, name="Ann", project_names=("Alpha",))}

    result = reconcile(assigned, [_t(2, "Alpha", 3)])

    assert list(result.users) == [1]
    assert result.unmatched_entries == 1


def test_user_with_empty_project_list_has_no_entry():
    assigned = {1: AssignedUser(user_id=1, name="Ann", project_names=())}

    assert dict(reconcile(assigned, []).users) == {}


def test_entries_of_other_users_do_not_leak():
    assigned = {
        1: AssignedUser(user_id=1, name="Ann", project_names=("Alpha",)),
        2: AssignedUser(user_id=2, name="Bob", project_names=("Alpha",)),
    }

    result = reconcile(assigned, [_t(2, "Alpha", 9)])

    assert result.users[1].rows[0].is_missing
    assert result.users[2].rows[0].task_number == 9


def test_row_count_matches_assignment_formula():
    assigned = {
        1: AssignedUser(user_id=1, name="Ann", project_names=("Alpha", "Beta", "Gamma")),
        2: AssignedUser(user_id=2, name="Bob", project_names=("Beta",)),
    }
    tuples = [_t(1, "Alpha", 1), _t(1, "Alpha", 2), _t(1, "Alpha", 3), _t(1, "Gamma", 4), _t(2, "Beta", 5), _t(2, "Zeta", 6)]

    result = reconcile(assigned, tuples)

    for user_id, user in assigned.items():
        mine = [t for t in tuples if t.user_id == user_id]
        expected = sum(max(1, sum(1 for t in mine if t.project_name == p)) for p in user.project_names)
        assert len(result.users[user_id].rows) == expected


def test_reconcile_is_deterministic():
    assigned = {1: AssignedUser(user_id=1, name="Ann", project_names=("Alpha", "Beta"))}
    tuples = [_t(1, "Beta", 2), _t(1, "Alpha", 1)]

    first = reconcile(assigned, tuples)
    second = reconcile(assigned, tuples)

    assert dict(first.users) == dict(second.users)
    assert first.unmatched_entries == second.unmatched_entries


def test_rows_follow_assignment_order_not_report_order():
    assigned = {1: AssignedUser(user_id=1, name="Ann", project_names=("Beta", "Alpha"))}

    result = reconcile(assigned, [_t(1, "Alpha", 1), _t(1, "Beta", 2)])

    assert [r.project_name for r in result.users[1].rows] == ["Beta", "Alpha"]
