from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone

from src.worktrack.worktrack.core.enums import SubmissionStatus
from src.worktrack.worktrack.submissions.analytics import (
    analytics_stats,
    approval_rate,
    group_by_review_state,
    last_days_range,
    month_range,
    status_distribution,
)
from src.worktrack.worktrack.submissions.model import AnalyticsStats, WorkSubmission

UTC = timezone.utc


def sub(sid, status, hours=None) -> WorkSubmission:
    return WorkSubmission(
        submission_id=sid,
        submitted_at=datetime(2026, 3, 1, 10, tzinfo=UTC),
        hours_worked=hours,
        status=status,
    )


SUBS = [
    sub("1", SubmissionStatus.VERIFIED, 2),
    sub("2", SubmissionStatus.VERIFIED, 1.5),
    sub("3", SubmissionStatus.PENDING, 4),
    sub("4", SubmissionStatus.SUBMITTED, None),
    sub("5", SubmissionStatus.REJECTED, 3),
    sub("6", SubmissionStatus.VERIFIED, 1),
]


def test_review_groups_split_by_status():
    groups = group_by_review_state(SUBS)
    assert [s.submission_id for s in groups.pending] == ["3", "4"]
    assert [s.submission_id for s in groups.approved] == ["1", "2", "6"]
    assert [s.submission_id for s in groups.rejected] == ["5"]


def test_analytics_stats():
    stats = analytics_stats(SUBS)
    assert stats.total == 6
    assert stats.verified == 3
    assert stats.pending == 2
    assert stats.rejected == 1
    assert stats.total_hours == 11.5
    assert stats.verified_hours == 4.5
    assert stats.approval_rate == 50


def test_approval_rate_rounds_half_up_and_handles_zero():
    assert approval_rate(0, 0) == 0
    assert approval_rate(1, 3) == 33
    assert approval_rate(2, 3) == 67
    assert approval_rate(1, 8) == 13


def test_status_distribution_omits_empty_slices():
    dist = status_distribution(AnalyticsStats(total=2, verified=2, pending=0, rejected=0))
    assert [d["name"] for d in dist] == ["Verified"]
    assert status_distribution(AnalyticsStats()) == []


def test_last_days_range_starts_at_beginning_of_day():
    now = datetime(2026, 3, 31, 15, 30, tzinfo=UTC)
    rng = last_days_range(now, 7)
    assert rng.end == now
    assert rng.start == datetime(2026, 3, 24, tzinfo=UTC)
    assert rng.start.date() == date(2026, 3, 31) - timedelta(days=7)


def test_month_range_covers_whole_month():
    rng = month_range(datetime(2028, 2, 10, 8, 0, tzinfo=UTC))
    assert rng.start == datetime(2028, 2, 1, tzinfo=UTC)
    assert rng.end == datetime.combine(date(2028, 2, 29), time.max, tzinfo=UTC)
