"""Visitor analytics: time periods and bucket aggregation."""

from siteadmin.analytics.aggregator import BucketedCounts, VisitEvent, aggregate
from siteadmin.analytics.periods import (
    PERIOD_STRATEGIES,
    InvalidPeriod,
    InvalidTimeFilter,
    PeriodStrategy,
    TimePeriod,
    bucket_key,
    parse_period,
    time_filter_start,
    window_start,
)

__all__ = [
    "BucketedCounts",
    "InvalidPeriod",
    "InvalidTimeFilter",
    "PERIOD_STRATEGIES",
    "PeriodStrategy",
    "TimePeriod",
    "VisitEvent",
    "aggregate",
    "bucket_key",
    "parse_period",
    "time_filter_start",
    "window_start",
]
