from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

from src.worktrack.worktrack.core.enums import DayStatus, SubmissionStatus
from src.worktrack.worktrack.submissions.aggregator import (
    bucket_date,
    daily_series,
    filter_by_range,
    group_by_day,
    rollup_stats,
    round_half_away,
)
from src.worktrack.worktrack.submissions.model import AssignmentRef, DateRange, WorkSubmission

UTC = timezone.utc
PLUS7 = timezone(timedelta(hours=7))


def sub(sid, submitted_at=None, *, work_date=None, hours=None, status=SubmissionStatus.SUBMITTED) -> WorkSubmission:
    return WorkSubmission(
        submission_id=sid,
        submitted_at=submitted_at,
        work_date=work_date,
        hours_worked=hours,
        status=status,
    )


def at(day: int, hour: int = 10, minute: int = 0) -> datetime:
    return datetime(2026, 3, day, hour, minute, tzinfo=UTC)


SAMPLE = [
    sub("1", at(2), hours=2, status=SubmissionStatus.VERIFIED),
    sub("2", at(1), hours=1.5),
    sub("3", at(2, 15), hours=3.5, status=SubmissionStatus.PENDING),
    sub("4", at(4), hours=8, status=SubmissionStatus.REJECTED),
    sub("5", at(1, 9), work_date=at(3, 0), hours=4, status=SubmissionStatus.VERIFIED),
]


def test_work_date_takes_precedence_over_submitted_at():
    s = sub("x", at(1), work_date=at(3))
    assert bucket_date(s, UTC) == date(2026, 3, 3)


def test_bucket_date_uses_given_timezone():
    s = sub("x", datetime(2026, 3, 1, 20, 0, tzinfo=UTC))
    assert bucket_date(s, UTC) == date(2026, 3, 1)
    assert bucket_date(s, PLUS7) == date(2026, 3, 2)


def test_naive_timestamp_is_read_as_local_to_timezone():
    s = sub("x", datetime(2026, 3, 1, 23, 30))
    assert bucket_date(s, PLUS7) == date(2026, 3, 1)


def test_groups_sorted_by_date_descending():
    groups = group_by_day(SAMPLE, UTC)
    keys = [g.key for g in groups]
    assert keys == ["2026-03-04", "2026-03-03", "2026-03-02", "2026-03-01"]
    assert all(a > b for a, b in zip(keys, keys[1:]))


def test_group_keeps_source_order_and_status():
    by_key = {g.key: g for g in group_by_day(SAMPLE, UTC)}
    day2 = by_key["2026-03-02"]
    assert [s.submission_id for s in day2.submissions] == ["1", "3"]
    assert day2.status == DayStatus.SUBMITTED
    assert by_key["2026-03-03"].status == DayStatus.VERIFIED
    assert by_key["2026-03-04"].status == DayStatus.REJECTED


def test_partition_every_submission_in_exactly_one_group():
    groups = group_by_day(SAMPLE, UTC)
    ids = [s.submission_id for g in groups for s in g.submissions]
    assert sorted(ids) == sorted(s.submission_id for s in SAMPLE)
    assert len(ids) == len(set(ids))


def test_grouping_is_idempotent():
    first = group_by_day(SAMPLE, UTC)
    again = group_by_day([s for g in first for s in g.submissions], UTC)
    assert again == first


def test_hours_accumulation_all_verified():
    subs = [
        sub("a", at(5), hours=2, status=SubmissionStatus.VERIFIED),
        sub("b", at(5, 11), hours=3.5, status=SubmissionStatus.VERIFIED),
        sub("c", at(5, 12), hours=None, status=SubmissionStatus.VERIFIED),
    ]
    (group,) = group_by_day(subs, UTC)
    assert group.total_hours == 5.5
    assert group.verified_hours == 5.5


def test_hours_accumulation_only_first_verified():
    subs = [
        sub("a", at(5), hours=2, status=SubmissionStatus.VERIFIED),
        sub("b", at(5, 11), hours=3.5),
        sub("c", at(5, 12), hours=None),
    ]
    (group,) = group_by_day(subs, UTC)
    assert group.total_hours == 5.5
    assert group.verified_hours == 2


def test_verified_hours_follow_assignment_status():
    s = WorkSubmission(
        submission_id="a",
        submitted_at=at(5),
        hours_worked=3,
        status=SubmissionStatus.SUBMITTED,
        assignment=AssignmentRef(assignment_id="x", status=SubmissionStatus.VERIFIED),
    )
    (group,) = group_by_day([s], UTC)
    assert group.verified_hours == 3


def test_undated_submission_is_grouped_out_but_counted():
    undated = sub("u", None, status=SubmissionStatus.PENDING)
    subs = SAMPLE + [undated]

    groups = group_by_day(subs, UTC)
    assert all(undated not in g.submissions for g in groups)

    stats = rollup_stats(groups, subs)
    assert stats.total == 6
    assert stats.pending == 2


def test_rollup_stats_counts():
    groups = group_by_day(SAMPLE, UTC)
    stats = rollup_stats(groups, SAMPLE)
    assert stats.verified == 2
    assert stats.submitted == 1
    assert stats.pending == 1
    assert stats.rejected == 1
    assert stats.total_days == 4
    assert stats.verified_days == 1


def test_empty_input():
    assert group_by_day([], UTC) == []
    stats = rollup_stats([], [])
    assert stats.total == 0 and stats.total_days == 0


def test_range_filter_is_inclusive_at_both_ends():
    rng = DateRange(start=at(2, 0), end=at(3, 12))
    on_start = sub("s", at(2, 0))
    on_end = sub("e", at(3, 12))
    just_after = sub("late", at(3, 12) + timedelta(milliseconds=1))
    just_before = sub("early", at(2, 0) - timedelta(milliseconds=1))

    kept = filter_by_range([on_start, on_end, just_after, just_before], rng, UTC)
    assert [s.submission_id for s in kept] == ["s", "e"]


def test_range_filter_skips_undated():
    rng = DateRange(start=at(1, 0), end=at(30, 0))
    assert filter_by_range([sub("u", None)], rng, UTC) == []


def test_daily_series_zero_filled_week():
    rng = DateRange(start=at(1, 0), end=at(7, 23, 59))
    points = daily_series([], rng, UTC)
    assert len(points) == 7
    assert [p.day for p in points] == [date(2026, 3, d) for d in range(1, 8)]
    assert all(p.submissions == p.verified == p.pending == p.rejected == 0 for p in points)
    assert all(p.hours == 0.0 for p in points)


def test_daily_series_counts_and_rounding():
    rng = DateRange(start=at(1, 0), end=at(3, 23, 59))
    subs = [
        sub("a", at(1), hours=1.25, status=SubmissionStatus.VERIFIED),
        sub("b", at(1, 11), hours=1.0, status=SubmissionStatus.PENDING),
        sub("c", at(2), hours=0.05, status=SubmissionStatus.REJECTED),
        sub("d", at(2, 11), hours=None, status=SubmissionStatus.SUBMITTED),
    ]
    p1, p2, p3 = daily_series(subs, rng, UTC)

    assert (p1.submissions, p1.verified, p1.pending, p1.rejected) == (2, 1, 1, 0)
    assert p1.hours == 2.3
    assert (p2.submissions, p2.pending, p2.rejected) == (2, 1, 1)
    assert p2.hours == 0.1
    assert p3.submissions == 0
    assert p1.label == "Mar 1"


def test_round_half_away_from_zero():
    assert round_half_away(0.25) == 0.3
    assert round_half_away(2.45) == 2.5
    assert round_half_away(-0.25) == -0.3
    assert round_half_away(1.04) == 1.0
