from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, tzinfo
from typing import Iterable, Optional, Sequence

from ..api.client import Gather, run_sequentially
from ..assignments.model import Assignment
from ..assignments.repository import AssignmentRepository
from ..common.datetime_utils import Clock, day_lock
from ..core.enums import DayLock, DayStatus, Role
from ..core.exceptions import AuthorizationError
from ..submissions.aggregator import bucket_date, group_by_day
from ..submissions.model import DayGroup, WorkSubmission
from ..submissions.repository import WorkSubmissionRepository


@dataclass(frozen=True)
class CalendarDay:
    work_date: date
    group: Optional[DayGroup]
    lock: DayLock
    is_today: bool

    @property
    def status(self) -> DayStatus:
        return self.group.status if self.group else DayStatus.NOT_SUBMITTED

    @property
    def total_hours(self) -> float:
        return self.group.total_hours if self.group else 0.0


@dataclass(frozen=True)
class CalendarMonth:
    month: date
    leading_blanks: int
    days: list[CalendarDay]


@dataclass(frozen=True)
class AssignmentForDay:
    assignment: Assignment
    submission: Optional[WorkSubmission]


@dataclass(frozen=True)
class DayDetail:
    work_date: date
    lock: DayLock
    is_today: bool
    assignments: list[AssignmentForDay]

    @property
    def unsubmitted(self) -> list[AssignmentForDay]:
        return [a for a in self.assignments if a.submission is None]


def month_days(month: date) -> tuple[int, list[date]]:
    """Leading blank cells (Sunday-first grid) and every date of ``month``."""
    first = month.replace(day=1)
    _, last_day = calendar.monthrange(first.year, first.month)
    # date.weekday(): Monday=0; the grid starts on Sunday
    leading = (first.weekday() + 1) % 7
    return leading, [first.replace(day=d) for d in range(1, last_day + 1)]


def calendar_month(submissions: Sequence[WorkSubmission], month: date, today: date, tz: tzinfo) -> CalendarMonth:
    groups = {g.work_date: g for g in group_by_day(submissions, tz)}
    leading, days = month_days(month)
    return CalendarMonth(
        month=month.replace(day=1),
        leading_blanks=leading,
        days=[
            CalendarDay(work_date=d, group=groups.get(d), lock=day_lock(d, today), is_today=d == today)
            for d in days
        ],
    )


def _submission_on(submissions: Iterable[WorkSubmission], day: date, tz: tzinfo, assignment_id: Optional[str] = None):
    for s in submissions:
        if bucket_date(s, tz) != day:
            continue
        if assignment_id is None or s.assignment_id == assignment_id:
            return s
    return None


def assignments_for_date(
    assignments: Iterable[Assignment],
    submissions: Sequence[WorkSubmission],
    day: date,
    tz: tzinfo,
) -> list[AssignmentForDay]:
    """Pair each assignment with its submission for ``day``.

    The assignment's own nested submissions are checked first, then the flat list by assignment id.
    """
    out = []
    for a in assignments:
        found = _submission_on(a.work_submissions, day, tz)
        if found is None:
            found = _submission_on(submissions, day, tz, assignment_id=a.assignment_id)
        out.append(AssignmentForDay(assignment=a, submission=found))
    return out


class WorkCalendarService:
    def __init__(
        self,
        assignments: AssignmentRepository,
        submissions: WorkSubmissionRepository,
        *,
        tz: tzinfo,
        clock: Clock,
        gather: Gather = run_sequentially,
    ):
        self._assignments = assignments
        self._submissions = submissions
        self._tz = tz
        self._clock = clock
        self._gather = gather

    def today(self) -> date:
        return self._clock().astimezone(self._tz).date()

    def view(
        self,
        *,
        current_role: Role,
        month: Optional[date] = None,
        selected: Optional[date] = None,
    ) -> tuple[CalendarMonth, DayDetail]:
        if current_role != Role.STAFF:
            raise AuthorizationError("Only staff have a work calendar")

        today = self.today()
        selected = selected or today
        month = month or selected

        data = self._gather(assignments=self._assignments.list_all, submissions=self._submissions.list_all)
        submissions = list(data["submissions"])

        detail = DayDetail(
            work_date=selected,
            lock=day_lock(selected, today),
            is_today=selected == today,
            assignments=assignments_for_date(data["assignments"], submissions, selected, self._tz),
        )
        return calendar_month(submissions, month, today, self._tz), detail
