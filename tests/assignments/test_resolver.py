from __future__ import annotations

from work_reports.assignments.resolver import AssignmentResolver


def test_duplicate_assignments_are_deduplicated_in_first_seen_order(users, projects, assignments):
    ann = users.add("Ann")
    alpha, beta = projects.add("Alpha"), projects.add("Beta")
    assignments.assign(ann, beta, alpha, beta, alpha)

    resolved = AssignmentResolver(assignments, users, projects).resolve()

    assert resolved.users[ann.user_id].project_names == ("Beta", "Alpha")
    assert resolved.users[ann.user_id].name == "Ann"
    assert resolved.skipped == 0


def test_dangling_project_or_user_is_skipped_without_aborting(users, projects, assignments):
    ann, bob = users.add("Ann"), users.add("Bob")
    alpha, gone = projects.add("Alpha"), projects.add("Gone")
    assignments.assign(ann, gone, alpha)
    assignments.assign(bob, alpha)
    projects.delete_by_id(gone.project_id)
    users.delete_by_id(bob.user_id)

    resolved = AssignmentResolver(assignments, users, projects).resolve()

    assert list(resolved.users) == [ann.user_id]
    assert resolved.users[ann.user_id].project_names == ("Alpha",)
    assert resolved.skipped == 2


def test_users_keep_insertion_order_of_first_assignment(users, projects, assignments):
    ann, bob = users.add("Ann"), users.add("Bob")
    alpha = projects.add("Alpha")
    assignments.assign(bob, alpha)
    assignments.assign(ann, alpha)

    resolved = AssignmentResolver(assignments, users, projects).resolve()

    assert [u.name for u in resolved.users.values()] == ["Bob", "Ann"]


def test_single_user_variant(users, projects, assignments):
    ann, bob = users.add("Ann"), users.add("Bob")
    alpha, beta = projects.add("Alpha"), projects.add("Beta")
    assignments.assign(ann, alpha)
    assignments.assign(bob, beta)

    resolved = AssignmentResolver(assignments, users, projects).resolve(bob.user_id)

    assert list(resolved.users) == [bob.user_id]
    assert resolved.users[bob.user_id].project_names == ("Beta",)


def test_renamed_project_resolves_to_current_name(users, projects, assignments):
    ann = users.add("Ann")
    alpha = projects.add("Alpha")
    assignments.assign(ann, alpha)
    projects.update_name(alpha.project_id, name="Alpha v2", name_key="alpha v2")

    resolved = AssignmentResolver(assignments, users, projects).resolve()

    assert resolved.users[ann.user_id].project_names == ("Alpha v2",)


def test_first_seen_project_id_is_kept_per_name(users, projects, assignments):
    ann = users.add("Ann")
    alpha, beta = projects.add("Alpha"), projects.add("Beta")
    assignments.assign(ann, beta, alpha, beta)

    resolved = AssignmentResolver(assignments, users, projects).resolve(ann.user_id)

    assert resolved.users[ann.user_id].project_ids == (beta.project_id, alpha.project_id)
