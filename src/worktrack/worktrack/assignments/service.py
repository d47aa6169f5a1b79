from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Mapping, Optional, Sequence

from ..api.client import Gather, run_sequentially
from ..common.validators import optional_text, parse_positive_id, require_non_empty
from ..core.constants import CYCLE_FORMAT, ITEMS_PER_PAGE
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..staff.model import Employee
from ..staff.repository import EmployeeRepository
from ..staff.service import staff_members
from ..submissions.model import WorkSubmission
from ..submissions.service import WorkSubmissionService, has_hours
from .model import Assignment, CreatedResponsibility, NewResponsibility, Page, Responsibility
from .repository import AssignmentRepository, ResponsibilityRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AssignmentsView:
    page: Page
    responsibilities: Sequence[Responsibility]
    staff: list[Employee]


@dataclass(frozen=True)
class ResponsibilityResult:
    created: CreatedResponsibility
    submission: Optional[WorkSubmission] = None


def search_assignments(assignments: Iterable[Assignment], query: str) -> list[Assignment]:
    """Case-insensitive match on responsibility title or staff name."""
    q = (query or "").strip().lower()
    if not q:
        return list(assignments)

    out = []
    for a in assignments:
        title = (a.responsibility.title if a.responsibility else "") or ""
        name = (a.staff.name if a.staff else "") or ""
        if q in title.lower() or q in name.lower():
            out.append(a)
    return out


def paginate(items: Sequence, page: int, per_page: int = ITEMS_PER_PAGE) -> Page:
    total = len(items)
    total_pages = math.ceil(total / per_page) if per_page > 0 else 0
    page = max(int(page or 1), 1)
    start = (page - 1) * per_page
    return Page(items=list(items[start : start + per_page]), page=page, total=total, total_pages=total_pages)


class AssignmentService:
    def __init__(
        self,
        assignments: AssignmentRepository,
        responsibilities: ResponsibilityRepository,
        employees: EmployeeRepository,
        submission_service: WorkSubmissionService,
        *,
        gather: Gather = run_sequentially,
    ):
        self._assignments = assignments
        self._responsibilities = responsibilities
        self._employees = employees
        self._submission_service = submission_service
        self._gather = gather

    @staticmethod
    def _require_manager(current_role: Role) -> None:
        if current_role != Role.MANAGER:
            raise AuthorizationError("Only managers can manage assignments")

    def list_view(self, *, current_role: Role, query: str = "", page: int = 1) -> AssignmentsView:
        self._require_manager(current_role)
        data = self._gather(
            assignments=self._assignments.list_all,
            responsibilities=self._responsibilities.list_all,
            employees=self._employees.list_all,
        )
        return AssignmentsView(
            page=paginate(search_assignments(data["assignments"], query), page),
            responsibilities=data["responsibilities"],
            staff=staff_members(data["employees"]),
        )

    def _targets(self, *, employee_id: Optional[str], assign_to_all: bool) -> list[str]:
        """Staff ids an assignment goes to; resolved before anything is written."""
        if assign_to_all:
            targets = [e.employee_id for e in staff_members(self._employees.list_all())]
            if not targets:
                raise ValidationError("There are no staff members to assign")
            return targets
        if not employee_id:
            raise ValidationError("Please select an employee or choose 'Assign to All'")
        return [str(parse_positive_id(employee_id, "Employee"))]

    def _assign(self, *, responsibility_id: str, targets: list[str]) -> list[Assignment]:
        created = [self._assignments.create(responsibility_id=responsibility_id, staff_id=t) for t in targets]
        logger.info("Assigned responsibility %s to %d staff member(s)", responsibility_id, len(created))
        return created

    def create(
        self,
        *,
        current_role: Role,
        responsibility_id: str,
        employee_id: Optional[str] = None,
        assign_to_all: bool = False,
    ) -> list[Assignment]:
        self._require_manager(current_role)
        if not responsibility_id:
            raise ValidationError("Please select a responsibility")
        if not assign_to_all and not employee_id:
            raise ValidationError("Please select an employee or choose 'Assign to All'")

        responsibility_id = str(parse_positive_id(responsibility_id, "Responsibility"))
        return self._assign(
            responsibility_id=responsibility_id,
            targets=self._targets(employee_id=employee_id, assign_to_all=assign_to_all),
        )

    def reassign(
        self,
        *,
        current_role: Role,
        assignment_id: str,
        employee_id: Optional[str] = None,
        assign_to_all: bool = False,
    ) -> list[Assignment]:
        """Replace an assignment: delete it, then re-create it for the new staff member(s).

        The new targets are validated first so a bad request leaves the assignment in place.
        """
        self._require_manager(current_role)
        if not assign_to_all and not employee_id:
            raise ValidationError("Please select a staff member or choose 'Assign to All'")

        current = next((a for a in self._assignments.list_all() if a.assignment_id == str(assignment_id)), None)
        if current is None:
            raise NotFoundError("Assignment not found")
        if not current.responsibility_id:
            raise ValidationError("Assignment has no responsibility")

        targets = self._targets(employee_id=employee_id, assign_to_all=assign_to_all)
        self._assignments.delete(assignment_id=current.assignment_id)
        return self._assign(responsibility_id=current.responsibility_id, targets=targets)

    def delete(self, *, current_role: Role, assignment_id: str) -> None:
        self._require_manager(current_role)
        self._assignments.delete(assignment_id=str(assignment_id))
        logger.info("Deleted assignment %s", assignment_id)

    def create_responsibility(
        self,
        *,
        current_role: Role,
        user_id: Optional[str],
        sub_department_id: Optional[str],
        title: str,
        description: str = "",
        now: datetime,
        work: Optional[Mapping[str, str]] = None,
    ) -> ResponsibilityResult:
        """Staff-created responsibility for the current cycle, optionally with work submitted at once."""
        if current_role != Role.STAFF:
            raise AuthorizationError("Only staff can create their own responsibilities")

        title = require_non_empty(title, "Title")
        if not user_id or not sub_department_id:
            raise ValidationError("User information is incomplete. Please log in again.")

        created = self._responsibilities.create(
            NewResponsibility(
                title=title,
                description=optional_text(description),
                cycle=now.strftime(CYCLE_FORMAT),
                created_by_id=str(user_id),
                sub_department_id=str(sub_department_id),
            )
        )
        logger.info("Staff %s created responsibility %s", user_id, created.responsibility.responsibility_id)

        if not work or not has_hours(work.get("hours_worked")):
            return ResponsibilityResult(created=created)

        if not created.assignments:
            raise ValidationError("Responsibility created but assignment was not found.")

        submission = self._submission_service.submit_work(
            current_role=current_role,
            user_id=str(user_id),
            assignment_id=created.assignments[0].assignment_id,
            hours_worked=work.get("hours_worked"),
            staff_comment=work.get("work_description", ""),
            proof_type=work.get("work_proof_type", "TEXT"),
            proof_text=work.get("work_proof_text", ""),
            proof_url=work.get("work_proof_url", ""),
        )
        return ResponsibilityResult(created=created, submission=submission)
