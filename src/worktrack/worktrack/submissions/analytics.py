from __future__ import annotations

import calendar
from datetime import datetime, time, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Sequence

from ..core.enums import SubmissionStatus
from .aggregator import hours_of
from .day_status import OPEN_STATUSES, effective_status
from .model import AnalyticsStats, DateRange, ReviewGroups, WorkSubmission


def group_by_review_state(submissions: Iterable[WorkSubmission]) -> ReviewGroups:
    """Split submissions into the manager's pending / approved / rejected tabs."""
    groups = ReviewGroups()
    for s in submissions:
        status = effective_status(s)
        if status in OPEN_STATUSES:
            groups.pending.append(s)
        elif status == SubmissionStatus.VERIFIED:
            groups.approved.append(s)
        elif status == SubmissionStatus.REJECTED:
            groups.rejected.append(s)
    return groups


def approval_rate(verified: int, total: int) -> int:
    """Whole-number percentage of verified submissions, 0 when there are none."""
    if total <= 0:
        return 0
    rate = Decimal(verified * 100) / Decimal(total)
    return int(rate.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def analytics_stats(submissions: Sequence[WorkSubmission]) -> AnalyticsStats:
    groups = group_by_review_state(submissions)
    total = len(submissions)
    verified = len(groups.approved)

    return AnalyticsStats(
        total=total,
        verified=verified,
        pending=len(groups.pending),
        rejected=len(groups.rejected),
        total_hours=sum(hours_of(s) for s in submissions),
        verified_hours=sum(hours_of(s) for s in groups.approved),
        approval_rate=approval_rate(verified, total),
    )


def status_distribution(stats: AnalyticsStats) -> list[dict]:
    """Pie-chart slices; empty slices are omitted."""
    items = [
        {"name": "Verified", "value": stats.verified, "color": "#22c55e"},
        {"name": "Pending", "value": stats.pending, "color": "#f59e0b"},
        {"name": "Rejected", "value": stats.rejected, "color": "#ef4444"},
    ]
    return [item for item in items if item["value"] > 0]


def last_days_range(now: datetime, days: int) -> DateRange:
    """Range covering ``days`` days back from ``now`` up to ``now``.

    The start is the beginning of the first day so the series and the filter agree.
    """
    first_day = (now - timedelta(days=int(days))).date()
    start = datetime.combine(first_day, time.min, tzinfo=now.tzinfo)
    return DateRange(start=start, end=now)


def month_range(now: datetime) -> DateRange:
    """The whole calendar month containing ``now``, first to last day inclusive."""
    _, last_day = calendar.monthrange(now.year, now.month)
    start = datetime.combine(now.date().replace(day=1), time.min, tzinfo=now.tzinfo)
    end = datetime.combine(now.date().replace(day=last_day), time.max, tzinfo=now.tzinfo)
    return DateRange(start=start, end=end)
