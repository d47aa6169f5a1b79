"""Day status derivation.

A day's headline status is chosen from an ordered rule table: rules are
evaluated top-down and the first one that matches wins. Supporting a new
status means inserting one row at the right precedence.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Callable, Iterable, Sequence

from ..core.enums import DayStatus, SubmissionStatus
from .model import WorkSubmission

OPEN_STATUSES = frozenset({SubmissionStatus.SUBMITTED, SubmissionStatus.PENDING})


def effective_status(submission: WorkSubmission) -> SubmissionStatus:
    """Assignment status when present, else the submission's own, else SUBMITTED."""
    if submission.assignment is not None and submission.assignment.status is not None:
        return submission.assignment.status
    if submission.status is not None:
        return submission.status
    return SubmissionStatus.SUBMITTED


@dataclass(frozen=True)
class StatusCounts:
    """Effective-status tally for one day's submissions."""

    total: int
    by_status: Counter

    @classmethod
    def of(cls, submissions: Iterable[WorkSubmission]) -> "StatusCounts":
        counts = Counter(effective_status(s) for s in submissions)
        return cls(total=sum(counts.values()), by_status=counts)

    def count(self, *statuses: SubmissionStatus) -> int:
        return sum(self.by_status[s] for s in statuses)


@dataclass(frozen=True)
class DayStatusRule:
    name: str
    status: DayStatus
    matches: Callable[[StatusCounts], bool]


DAY_STATUS_RULES: tuple[DayStatusRule, ...] = (
    DayStatusRule(
        name="empty",
        status=DayStatus.NOT_SUBMITTED,
        matches=lambda c: c.total == 0,
    ),
    DayStatusRule(
        name="all_verified",
        status=DayStatus.VERIFIED,
        matches=lambda c: c.count(SubmissionStatus.VERIFIED) == c.total,
    ),
    DayStatusRule(
        name="only_rejected",
        status=DayStatus.REJECTED,
        matches=lambda c: c.count(SubmissionStatus.REJECTED) > 0
        and c.count(SubmissionStatus.VERIFIED, *OPEN_STATUSES) == 0,
    ),
    DayStatusRule(
        name="awaiting_review",
        status=DayStatus.SUBMITTED,
        matches=lambda c: c.count(*OPEN_STATUSES) > 0,
    ),
    DayStatusRule(
        name="fallback",
        status=DayStatus.SUBMITTED,
        matches=lambda c: True,
    ),
)


def day_status(
    submissions: Sequence[WorkSubmission],
    *,
    rules: Sequence[DayStatusRule] = DAY_STATUS_RULES,
) -> DayStatus:
    counts = StatusCounts.of(submissions)
    for rule in rules:
        if rule.matches(counts):
            return rule.status
    return DayStatus.SUBMITTED
