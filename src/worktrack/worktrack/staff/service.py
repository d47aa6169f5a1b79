from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from ..api.client import Gather, run_sequentially
from ..assignments.model import Assignment
from ..assignments.repository import AssignmentRepository
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError
from ..submissions.analytics import group_by_review_state
from ..submissions.model import WorkSubmission
from ..submissions.repository import WorkSubmissionRepository
from .department_repository import DepartmentRepository, SubDepartmentRepository
from .model import Department, Employee, SubDepartment
from .repository import EmployeeRepository


@dataclass(frozen=True)
class ProfileStats:
    pending: int
    verified: int
    rejected: int
    total: int


@dataclass(frozen=True)
class StaffProfile:
    staff: Employee
    department: Optional[Department]
    sub_department: Optional[SubDepartment]
    assignments: list[Assignment]
    submissions: list[WorkSubmission]
    stats: ProfileStats


def staff_members(employees: Iterable[Employee]) -> list[Employee]:
    return [e for e in employees if e.role == Role.STAFF]


def search_staff(employees: Iterable[Employee], query: str) -> list[Employee]:
    """Case-insensitive substring match on name or email."""
    q = (query or "").strip().lower()
    if not q:
        return list(employees)
    return [e for e in employees if q in (e.name or "").lower() or q in (e.email or "").lower()]


def profile_stats(submissions: Sequence[WorkSubmission]) -> ProfileStats:
    groups = group_by_review_state(submissions)
    return ProfileStats(
        pending=len(groups.pending),
        verified=len(groups.approved),
        rejected=len(groups.rejected),
        total=len(submissions),
    )


class StaffService:
    def __init__(
        self,
        employees: EmployeeRepository,
        departments: DepartmentRepository,
        sub_departments: SubDepartmentRepository,
        assignments: AssignmentRepository,
        submissions: WorkSubmissionRepository,
        *,
        gather: Gather = run_sequentially,
    ):
        self._employees = employees
        self._departments = departments
        self._sub_departments = sub_departments
        self._assignments = assignments
        self._submissions = submissions
        self._gather = gather

    def list_staff(self, *, current_role: Role, query: str = "") -> list[Employee]:
        """Manager view; the backend already scopes employees to the manager's sub-department."""
        if current_role not in {Role.MANAGER, Role.ADMIN}:
            raise AuthorizationError("You do not have permission")
        return search_staff(staff_members(self._employees.list_all()), query)

    def get_staff(self, *, current_role: Role, staff_id: str) -> Employee:
        for e in self.list_staff(current_role=current_role):
            if e.employee_id == str(staff_id):
                return e
        raise NotFoundError("Staff member not found")

    def staff_profile(
        self,
        *,
        current_role: Role,
        staff_id: str,
        department_id: Optional[str] = None,
        sub_department_id: Optional[str] = None,
    ) -> StaffProfile:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission")

        data = self._gather(
            departments=self._departments.list_all,
            sub_departments=self._sub_departments.list_all,
            employees=self._employees.list_all,
            assignments=self._assignments.list_all,
            submissions=self._submissions.list_all,
        )

        staff_id = str(staff_id)
        staff = next((e for e in data["employees"] if e.employee_id == staff_id), None)
        if staff is None:
            raise NotFoundError("Staff member not found")

        dept_key = department_id or staff.department_id
        sub_key = sub_department_id or staff.sub_department_id
        department = next((d for d in data["departments"] if d.department_id == dept_key), None)
        sub_department = next((sd for sd in data["sub_departments"] if sd.sub_department_id == sub_key), None)

        submissions = [s for s in data["submissions"] if s.staff_id == staff_id]
        return StaffProfile(
            staff=staff,
            department=department,
            sub_department=sub_department,
            assignments=[a for a in data["assignments"] if a.staff_id == staff_id],
            submissions=submissions,
            stats=profile_stats(submissions),
        )
