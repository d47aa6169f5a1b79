"""Day aggregation over already-fetched work submissions.

Every function here is pure: no I/O, no clock, no shared state. The timezone
used for day bucketing is always passed in by the caller.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, tzinfo
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import days_between, to_zone
from ..core.enums import DayStatus, SubmissionStatus
from .day_status import OPEN_STATUSES, day_status, effective_status
from .model import DailyPoint, DateRange, DayGroup, SubmissionStats, WorkSubmission

logger = logging.getLogger(__name__)


def round_half_away(value: float, places: int = 1) -> float:
    """Round half away from zero (``round()`` would round half to even)."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def bucket_instant(submission: WorkSubmission, tz: tzinfo) -> Optional[datetime]:
    """The instant a submission counts for: work_date, else submitted_at, in ``tz``."""
    instant = submission.work_date or submission.submitted_at
    if instant is None:
        return None
    return to_zone(instant, tz)


def bucket_date(submission: WorkSubmission, tz: tzinfo) -> Optional[date]:
    instant = bucket_instant(submission, tz)
    return instant.date() if instant else None


def hours_of(submission: WorkSubmission) -> float:
    return float(submission.hours_worked or 0)


def group_by_day(submissions: Iterable[WorkSubmission], tz: tzinfo) -> list[DayGroup]:
    """Group submissions by calendar day, most recent day first.

    Submissions without any usable date are left out of the groups.
    """
    buckets: dict[date, dict] = {}

    for s in submissions:
        day = bucket_date(s, tz)
        if day is None:
            logger.debug("Submission %s has no usable date; left out of day groups", s.submission_id)
            continue

        b = buckets.get(day)
        if not b:
            b = {"submissions": [], "total_hours": 0.0, "verified_hours": 0.0}
            buckets[day] = b

        b["submissions"].append(s)
        b["total_hours"] += hours_of(s)
        if effective_status(s) == SubmissionStatus.VERIFIED:
            b["verified_hours"] += hours_of(s)

    groups = [
        DayGroup(
            work_date=day,
            submissions=tuple(b["submissions"]),
            total_hours=b["total_hours"],
            verified_hours=b["verified_hours"],
            status=day_status(b["submissions"]),
        )
        for day, b in buckets.items()
    ]
    groups.sort(key=lambda g: g.work_date, reverse=True)
    return groups


def rollup_stats(day_groups: Sequence[DayGroup], submissions: Sequence[WorkSubmission]) -> SubmissionStats:
    """Counts by effective status over all submissions, plus day totals.

    Submission counts come from ``submissions`` so undated records still count.
    """
    counts = {status: 0 for status in SubmissionStatus}
    for s in submissions:
        counts[effective_status(s)] += 1

    return SubmissionStats(
        pending=counts[SubmissionStatus.PENDING],
        submitted=counts[SubmissionStatus.SUBMITTED],
        verified=counts[SubmissionStatus.VERIFIED],
        rejected=counts[SubmissionStatus.REJECTED],
        total=len(submissions),
        total_days=len(day_groups),
        verified_days=sum(1 for g in day_groups if g.status == DayStatus.VERIFIED),
    )


def filter_by_range(submissions: Iterable[WorkSubmission], date_range: DateRange, tz: tzinfo) -> list[WorkSubmission]:
    """Submissions whose bucket instant lies within the range, both ends inclusive."""
    start = to_zone(date_range.start, tz)
    end = to_zone(date_range.end, tz)

    out: list[WorkSubmission] = []
    for s in submissions:
        instant = bucket_instant(s, tz)
        if instant is not None and start <= instant <= end:
            out.append(s)
    return out


def point_label(day: date) -> str:
    return f"{day:%b} {day.day}"


def daily_series(submissions: Iterable[WorkSubmission], date_range: DateRange, tz: tzinfo) -> list[DailyPoint]:
    """One point per calendar day of the range, days without submissions included."""
    days = days_between(to_zone(date_range.start, tz).date(), to_zone(date_range.end, tz).date())
    tallies = {d: {"submissions": 0, "verified": 0, "pending": 0, "rejected": 0, "hours": 0.0} for d in days}

    for s in filter_by_range(submissions, date_range, tz):
        t = tallies.get(bucket_date(s, tz))
        if t is None:
            continue
        status = effective_status(s)
        t["submissions"] += 1
        t["hours"] += hours_of(s)
        if status == SubmissionStatus.VERIFIED:
            t["verified"] += 1
        elif status == SubmissionStatus.REJECTED:
            t["rejected"] += 1
        elif status in OPEN_STATUSES:
            t["pending"] += 1

    return [
        DailyPoint(
            day=d,
            label=point_label(d),
            submissions=t["submissions"],
            verified=t["verified"],
            pending=t["pending"],
            rejected=t["rejected"],
            hours=round_half_away(t["hours"], 1),
        )
        for d, t in tallies.items()
    ]
