from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, tzinfo
from typing import Mapping, Optional, Sequence

from ..common.datetime_utils import Clock, day_lock
from ..common.validators import optional_text, parse_hours, parse_positive_id, require_non_empty
from ..core.constants import DEFAULT_ANALYTICS_DAYS
from ..core.enums import DayLock, Role, WorkProofType
from ..core.exceptions import AuthorizationError, ValidationError
from .aggregator import daily_series, filter_by_range, group_by_day, rollup_stats
from .analytics import analytics_stats, group_by_review_state, last_days_range, month_range, status_distribution
from .model import (
    AnalyticsStats,
    DailyPoint,
    DateRange,
    DayGroup,
    NewWorkSubmission,
    ReviewGroups,
    SubmissionStats,
    WorkSubmission,
)
from .repository import WorkSubmissionRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubmissionsOverview:
    days: list[DayGroup]
    stats: SubmissionStats


@dataclass(frozen=True)
class StaffAnalytics:
    date_range: DateRange
    review: ReviewGroups
    stats: AnalyticsStats
    series: list[DailyPoint]
    distribution: list[dict]


class WorkSubmissionService:
    def __init__(self, submissions: WorkSubmissionRepository, *, tz: tzinfo, clock: Clock):
        self._submissions = submissions
        self._tz = tz
        self._clock = clock

    def today(self) -> date:
        return self._clock().astimezone(self._tz).date()

    def list_all(self) -> Sequence[WorkSubmission]:
        return self._submissions.list_all()

    def list_for_staff(self, staff_id: str) -> list[WorkSubmission]:
        return [s for s in self._submissions.list_all() if s.staff_id == str(staff_id)]

    def overview(self, submissions: Sequence[WorkSubmission]) -> SubmissionsOverview:
        days = group_by_day(submissions, self._tz)
        return SubmissionsOverview(days=days, stats=rollup_stats(days, submissions))

    def my_submissions_by_day(self, *, current_role: Role) -> SubmissionsOverview:
        """Staff view: the backend already scopes the list to the logged-in user."""
        if current_role != Role.STAFF:
            raise AuthorizationError("Only staff can view their work submissions")
        return self.overview(list(self._submissions.list_all()))

    @staticmethod
    def _proof(proof_type: str, proof_text: str, proof_url: str) -> tuple[WorkProofType, Optional[str], Optional[str]]:
        parsed = WorkProofType.parse(proof_type or WorkProofType.TEXT.value)
        if parsed is None:
            raise ValidationError("Work proof type must be TEXT, PDF or IMAGE")
        if parsed == WorkProofType.TEXT:
            return parsed, optional_text(proof_text), None
        return parsed, None, optional_text(proof_url)

    def _build(
        self,
        *,
        user_id: str,
        assignment_id: str,
        hours_worked,
        staff_comment: str = "",
        proof_type: str = "TEXT",
        proof_text: str = "",
        proof_url: str = "",
    ) -> NewWorkSubmission:
        kind, text, url = self._proof(proof_type, proof_text, proof_url)
        return NewWorkSubmission(
            assignment_id=str(parse_positive_id(assignment_id, "Assignment")),
            staff_id=str(parse_positive_id(user_id, "User")),
            hours_worked=parse_hours(hours_worked),
            staff_comment=optional_text(staff_comment),
            work_proof_type=kind,
            work_proof_text=text,
            work_proof_url=url,
        )

    def _create(self, new: NewWorkSubmission) -> WorkSubmission:
        created = self._submissions.create(new)
        logger.info("Staff %s submitted %.1fh for assignment %s", new.staff_id, new.hours_worked, new.assignment_id)
        return created

    def submit_work(
        self,
        *,
        current_role: Role,
        user_id: str,
        assignment_id: str,
        hours_worked,
        staff_comment: str = "",
        proof_type: str = "TEXT",
        proof_text: str = "",
        proof_url: str = "",
    ) -> WorkSubmission:
        if current_role != Role.STAFF:
            raise AuthorizationError("Only staff can submit work")

        return self._create(
            self._build(
                user_id=user_id,
                assignment_id=assignment_id,
                hours_worked=hours_worked,
                staff_comment=staff_comment,
                proof_type=proof_type,
                proof_text=proof_text,
                proof_url=proof_url,
            )
        )

    def submit_all(
        self,
        *,
        current_role: Role,
        user_id: str,
        work_date: date,
        entries: Mapping[str, Mapping[str, str]],
    ) -> list[WorkSubmission]:
        """Submit every filled entry of a day's form (entries keyed by assignment id).

        All entries are validated before the first one is sent, so a bad entry saves nothing.
        """
        if current_role != Role.STAFF:
            raise AuthorizationError("Only staff can submit work")

        lock = day_lock(work_date, self.today())
        if lock == DayLock.LOCKED:
            raise ValidationError("This date is locked - view only")
        if lock == DayLock.FUTURE:
            raise ValidationError("Future date - cannot submit yet")

        filled = [(aid, e) for aid, e in entries.items() if has_hours(e.get("hours_worked"))]
        if not filled:
            raise ValidationError("Enter hours for at least one assignment")

        pending = [
            self._build(
                user_id=user_id,
                assignment_id=aid,
                hours_worked=e.get("hours_worked"),
                staff_comment=e.get("work_description", ""),
                proof_type=e.get("work_proof_type", "TEXT"),
                proof_text=e.get("work_proof_text", ""),
                proof_url=e.get("work_proof_url", ""),
            )
            for aid, e in filled
        ]
        return [self._create(new) for new in pending]

    def verify(
        self,
        *,
        current_role: Role,
        manager_id: str,
        submission_id: str,
        approved: bool,
        manager_comment: str = "",
    ) -> None:
        if current_role != Role.MANAGER:
            raise AuthorizationError("Only managers can review submissions")

        comment = None
        if not approved:
            comment = require_non_empty(manager_comment, "Rejection reason")

        self._submissions.verify(submission_id=str(submission_id), approved=bool(approved), manager_comment=comment)
        logger.info(
            "Manager %s %s submission %s",
            manager_id,
            "approved" if approved else "rejected",
            submission_id,
        )

    def default_range(self, days: int = DEFAULT_ANALYTICS_DAYS) -> DateRange:
        return last_days_range(self._clock().astimezone(self._tz), days)

    def this_month_range(self) -> DateRange:
        return month_range(self._clock().astimezone(self._tz))

    def staff_analytics(
        self,
        *,
        current_role: Role,
        staff_id: str,
        date_range: Optional[DateRange] = None,
    ) -> StaffAnalytics:
        if current_role not in {Role.MANAGER, Role.ADMIN}:
            raise AuthorizationError("You do not have permission")

        rng = date_range or self.default_range()
        if rng.end < rng.start:
            raise ValidationError("End date must be on or after start date")

        submissions = self.list_for_staff(staff_id)
        in_range = filter_by_range(submissions, rng, self._tz)
        stats = analytics_stats(in_range)
        return StaffAnalytics(
            date_range=rng,
            review=group_by_review_state(submissions),
            stats=stats,
            series=daily_series(in_range, rng, self._tz),
            distribution=status_distribution(stats),
        )


def has_hours(value) -> bool:
    try:
        return float(value) > 0
    except (TypeError, ValueError):
        return False

