from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..core.enums import DayStatus, SubmissionStatus, WorkProofType


@dataclass(frozen=True)
class AssignmentRef:
    """Assignment fields embedded in a submission payload."""

    assignment_id: str
    status: Optional[SubmissionStatus] = None
    responsibility_title: Optional[str] = None


@dataclass(frozen=True)
class WorkSubmission:
    """Domain entity: one unit of logged work, as returned by the API.

    ``status`` and ``assignment.status`` are parsed once at the API boundary;
    unknown values are stored as None.
    """

    submission_id: str
    staff_id: Optional[str] = None
    assignment_id: Optional[str] = None
    work_date: Optional[datetime] = None
    submitted_at: Optional[datetime] = None
    hours_worked: Optional[float] = None
    status: Optional[SubmissionStatus] = None
    assignment: Optional[AssignmentRef] = None
    staff_comment: Optional[str] = None
    manager_comment: Optional[str] = None
    rejection_reason: Optional[str] = None
    verified_at: Optional[datetime] = None
    work_proof_type: Optional[WorkProofType] = None
    work_proof_text: Optional[str] = None
    work_proof_url: Optional[str] = None


@dataclass(frozen=True)
class NewWorkSubmission:
    assignment_id: str
    staff_id: str
    hours_worked: float
    staff_comment: Optional[str]
    work_proof_type: WorkProofType
    work_proof_text: Optional[str] = None
    work_proof_url: Optional[str] = None


@dataclass(frozen=True)
class DayGroup:
    """Read-model: all submissions bucketed into one calendar day."""

    work_date: date
    submissions: tuple[WorkSubmission, ...]
    total_hours: float
    verified_hours: float
    status: DayStatus

    @property
    def key(self) -> str:
        return self.work_date.isoformat()


@dataclass(frozen=True)
class DateRange:
    """Inclusive range of instants used by the analytics views."""

    start: datetime
    end: datetime


@dataclass(frozen=True)
class DailyPoint:
    day: date
    label: str
    submissions: int = 0
    verified: int = 0
    pending: int = 0
    rejected: int = 0
    hours: float = 0.0


@dataclass(frozen=True)
class SubmissionStats:
    pending: int = 0
    submitted: int = 0
    verified: int = 0
    rejected: int = 0
    total: int = 0
    total_days: int = 0
    verified_days: int = 0


@dataclass(frozen=True)
class AnalyticsStats:
    total: int = 0
    verified: int = 0
    pending: int = 0
    rejected: int = 0
    total_hours: float = 0.0
    verified_hours: float = 0.0
    approval_rate: int = 0


@dataclass(frozen=True)
class ReviewGroups:
    pending: list[WorkSubmission] = field(default_factory=list)
    approved: list[WorkSubmission] = field(default_factory=list)
    rejected: list[WorkSubmission] = field(default_factory=list)
