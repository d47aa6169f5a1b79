from __future__ import annotations

import pytest

from src.worktrack.worktrack.assignments.model import Assignment
from src.worktrack.worktrack.core.enums import Role, SubmissionStatus
from src.worktrack.worktrack.core.exceptions import AuthorizationError, NotFoundError
from src.worktrack.worktrack.staff.model import Department, Employee, SubDepartment
from src.worktrack.worktrack.staff.service import StaffService, profile_stats, search_staff
from src.worktrack.worktrack.submissions.model import AssignmentRef, WorkSubmission


class ListRepo:
    def __init__(self, rows):
        self.rows = list(rows)
        self.calls = 0

    def list_all(self):
        self.calls += 1
        return list(self.rows)


EMPLOYEES = [
    Employee(employee_id="1", name="Ada Admin", email="ada@example.com", role=Role.ADMIN),
    Employee(employee_id="4", name="Alice Nguyen", email="alice@example.com", role=Role.STAFF, department_id="1", sub_department_id="3"),
    Employee(employee_id="5", name="Bob Tran", email="bob@corp.example", role=Role.STAFF),
]


def sub(submission_id, staff_id, status, *, assignment_status=None):
    assignment = AssignmentRef(assignment_id="10", status=assignment_status) if assignment_status else None
    return WorkSubmission(submission_id=submission_id, staff_id=staff_id, status=status, assignment=assignment)


def make_service():
    return StaffService(
        ListRepo(EMPLOYEES),
        ListRepo([Department(department_id="1", name="Operations"), Department(department_id="2", name="Sales")]),
        ListRepo([SubDepartment(sub_department_id="3", name="Warehouse", department_id="1")]),
        ListRepo([
            Assignment(assignment_id="10", responsibility_id="1", staff_id="4"),
            Assignment(assignment_id="11", responsibility_id="1", staff_id="5"),
        ]),
        ListRepo([
            sub("1", "4", SubmissionStatus.PENDING),
            sub("2", "4", SubmissionStatus.SUBMITTED),
            sub("3", "4", SubmissionStatus.SUBMITTED, assignment_status=SubmissionStatus.VERIFIED),
            sub("4", "4", SubmissionStatus.REJECTED),
            sub("5", "5", SubmissionStatus.VERIFIED),
        ]),
    )


def test_list_staff_only_returns_staff_role():
    svc = make_service()
    assert [e.employee_id for e in svc.list_staff(current_role=Role.MANAGER)] == ["4", "5"]


def test_search_staff_matches_name_or_email_case_insensitive():
    assert [e.employee_id for e in search_staff(EMPLOYEES, "CORP")] == ["5"]
    assert [e.employee_id for e in search_staff(EMPLOYEES, "alice")] == ["4"]
    assert len(search_staff(EMPLOYEES, "  ")) == 3


def test_staff_cannot_list_staff():
    with pytest.raises(AuthorizationError):
        make_service().list_staff(current_role=Role.STAFF)


def test_get_staff_unknown_id():
    with pytest.raises(NotFoundError):
        make_service().get_staff(current_role=Role.MANAGER, staff_id="1")


def test_profile_stats_counts_pending_and_submitted_together():
    stats = profile_stats([
        sub("1", "4", SubmissionStatus.PENDING),
        sub("2", "4", SubmissionStatus.SUBMITTED),
        sub("3", "4", SubmissionStatus.REJECTED),
    ])
    assert (stats.pending, stats.verified, stats.rejected, stats.total) == (2, 0, 1, 3)


def test_staff_profile_resolves_department_from_employee():
    profile = make_service().staff_profile(current_role=Role.ADMIN, staff_id="4")

    assert profile.staff.name == "Alice Nguyen"
    assert profile.department.name == "Operations"
    assert profile.sub_department.name == "Warehouse"
    assert [a.assignment_id for a in profile.assignments] == ["10"]
    assert [s.submission_id for s in profile.submissions] == ["1", "2", "3", "4"]
    assert (profile.stats.pending, profile.stats.verified, profile.stats.rejected, profile.stats.total) == (2, 1, 1, 4)


def test_staff_profile_query_overrides_department():
    profile = make_service().staff_profile(current_role=Role.ADMIN, staff_id="4", department_id="2")
    assert profile.department.name == "Sales"


def test_staff_profile_uses_injected_gather():
    seen = {}

    def gather(**calls):
        seen.update(calls)
        return {name: fn() for name, fn in calls.items()}

    svc = make_service()
    svc._gather = gather
    svc.staff_profile(current_role=Role.ADMIN, staff_id="5")
    assert sorted(seen) == ["assignments", "departments", "employees", "sub_departments", "submissions"]


def test_staff_profile_missing_employee():
    with pytest.raises(NotFoundError):
        make_service().staff_profile(current_role=Role.ADMIN, staff_id="99")


def test_staff_profile_requires_admin():
    with pytest.raises(AuthorizationError):
        make_service().staff_profile(current_role=Role.MANAGER, staff_id="4")
