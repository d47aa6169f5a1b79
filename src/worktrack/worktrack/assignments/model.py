from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import SubmissionStatus
from ..staff.model import Employee
from ..submissions.model import WorkSubmission


@dataclass(frozen=True)
class Responsibility:
    responsibility_id: str
    title: str
    description: Optional[str] = None
    cycle: Optional[str] = None
    sub_department_id: Optional[str] = None
    is_staff_created: bool = False


@dataclass(frozen=True)
class Assignment:
    """Domain entity: a responsibility given to one staff member."""

    assignment_id: str
    responsibility_id: Optional[str]
    staff_id: Optional[str]
    status: Optional[SubmissionStatus] = None
    responsibility: Optional[Responsibility] = None
    staff: Optional[Employee] = None
    work_submissions: tuple[WorkSubmission, ...] = ()


@dataclass(frozen=True)
class NewResponsibility:
    title: str
    description: Optional[str]
    cycle: str
    created_by_id: str
    sub_department_id: str
    is_staff_created: bool = True


@dataclass(frozen=True)
class CreatedResponsibility:
    responsibility: Responsibility
    assignments: tuple[Assignment, ...] = ()


@dataclass(frozen=True)
class Page:
    items: list
    page: int
    total: int
    total_pages: int
