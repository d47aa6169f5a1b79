from __future__ import annotations

import pytest

from src.worktrack.worktrack.core.enums import DayStatus, SubmissionStatus
from src.worktrack.worktrack.submissions.day_status import (
    DAY_STATUS_RULES,
    DayStatusRule,
    day_status,
    effective_status,
)
from src.worktrack.worktrack.submissions.model import AssignmentRef, WorkSubmission


def make(status=None, assignment_status=None, sid="1") -> WorkSubmission:
    assignment = AssignmentRef(assignment_id="a1", status=assignment_status) if assignment_status else None
    return WorkSubmission(submission_id=sid, status=status, assignment=assignment)


V = SubmissionStatus.VERIFIED
P = SubmissionStatus.PENDING
S = SubmissionStatus.SUBMITTED
R = SubmissionStatus.REJECTED


@pytest.mark.parametrize(
    "statuses, expected",
    [
        ([], DayStatus.NOT_SUBMITTED),
        ([V], DayStatus.VERIFIED),
        ([V, V], DayStatus.VERIFIED),
        ([V, P], DayStatus.SUBMITTED),
        ([R], DayStatus.REJECTED),
        ([R, S], DayStatus.SUBMITTED),
        ([R, R], DayStatus.REJECTED),
        ([V, R], DayStatus.SUBMITTED),
        ([P], DayStatus.SUBMITTED),
    ],
)
def test_day_status_precedence(statuses, expected):
    subs = [make(status=s, sid=str(i)) for i, s in enumerate(statuses)]
    assert day_status(subs) == expected


def test_assignment_status_wins_over_submission_status():
    s = make(status=SubmissionStatus.SUBMITTED, assignment_status=SubmissionStatus.VERIFIED)
    assert effective_status(s) == SubmissionStatus.VERIFIED
    assert day_status([s]) == DayStatus.VERIFIED


def test_effective_status_falls_back_to_submitted():
    assert effective_status(WorkSubmission(submission_id="x")) == SubmissionStatus.SUBMITTED


def test_effective_status_uses_submission_when_assignment_has_no_status():
    s = WorkSubmission(
        submission_id="x",
        status=SubmissionStatus.REJECTED,
        assignment=AssignmentRef(assignment_id="a1", status=None),
    )
    assert effective_status(s) == SubmissionStatus.REJECTED


def test_rule_table_is_ordered_and_ends_with_fallback():
    assert DAY_STATUS_RULES[0].status == DayStatus.NOT_SUBMITTED
    assert DAY_STATUS_RULES[-1].name == "fallback"


def test_inserting_a_rule_changes_precedence():
    all_pending = DayStatusRule(
        name="all_pending",
        status=DayStatus.NOT_SUBMITTED,
        matches=lambda c: c.total > 0 and c.count(SubmissionStatus.PENDING) == c.total,
    )
    rules = DAY_STATUS_RULES[:1] + (all_pending,) + DAY_STATUS_RULES[1:]

    assert day_status([make(status=P)], rules=rules) == DayStatus.NOT_SUBMITTED
    assert day_status([make(status=P)]) == DayStatus.SUBMITTED
