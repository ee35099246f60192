"""Visitor metrics aggregation.

Turns a snapshot of visit timestamps into chart buckets. The storage layer
is expected to hand over only events inside the period window; this module
never touches the database or the clock.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timedelta

from siteadmin.analytics.periods import TimePeriod, get_strategy

BucketedCounts = dict[str, int]


@dataclass(frozen=True)
class VisitEvent:
    """A single recorded visit."""

    timestamp: datetime


def hour_axis(now: datetime) -> list[str]:
    """Hour labels of the 24 hours ending at ``now``, oldest first."""
    return [(now - timedelta(hours=i)).strftime("%H") for i in range(23, -1, -1)]


def aggregate(
    events: Iterable[VisitEvent],
    period: TimePeriod | str,
    now: datetime,
) -> BucketedCounts:
    """Count visit events per bucket of the given period.

    Raises:
        InvalidPeriod: if ``period`` is not a known period.
    """
    strategy = get_strategy(period)

    counts: BucketedCounts = {}
    for event in events:
        key = strategy.bucket_key(event.timestamp)
        counts[key] = counts.get(key, 0) + 1

    if not strategy.zero_fill:
        return counts

    # 24 consecutive hours cover every hour label exactly once
    return {key: counts.get(key, 0) for key in hour_axis(now)}
