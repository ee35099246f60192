"""Time periods used to window and bucket visitor activity.

Every period is described by one ``PeriodStrategy`` entry holding its window
start, bucket key format and zero-fill policy, so adding or changing a period
touches a single row of ``PERIOD_STRATEGIES``.
"""

import calendar
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum


class InvalidPeriod(ValueError):
    """Raised when a time period is not one of the supported values."""

    def __init__(self, period: object):
        self.period = period
        super().__init__(f"Invalid time period: {period!r}")


class InvalidTimeFilter(ValueError):
    """Raised when a visitor time filter code is not supported."""

    def __init__(self, code: object):
        self.code = code
        super().__init__(f"Invalid time filter: {code!r}")


class TimePeriod(str, Enum):
    """Chart periods for visitor metrics."""

    LAST_24_HOURS = "last_24_hours"
    LAST_WEEK = "last_week"
    LAST_MONTH = "last_month"
    LAST_YEAR = "last_year"
    ALL_TIME = "all_time"


def months_before(moment: datetime, months: int) -> datetime:
    """Shift a datetime back by calendar months, clamping the day (Mar 31 -> Feb 28)."""
    total = moment.year * 12 + (moment.month - 1) - months
    year, month = divmod(total, 12)
    month += 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


@dataclass(frozen=True)
class PeriodStrategy:
    """Window and bucketing rules of a single period."""

    window_start: Callable[[datetime], datetime | None]
    key_format: str
    zero_fill: bool = False

    def bucket_key(self, timestamp: datetime) -> str:
        return timestamp.strftime(self.key_format)


PERIOD_STRATEGIES: dict[TimePeriod, PeriodStrategy] = {
    TimePeriod.LAST_24_HOURS: PeriodStrategy(
        window_start=lambda now: now - timedelta(hours=24),
        key_format="%H",
        zero_fill=True,
    ),
    TimePeriod.LAST_WEEK: PeriodStrategy(
        window_start=lambda now: now - timedelta(days=7),
        key_format="%m/%d",
    ),
    TimePeriod.LAST_MONTH: PeriodStrategy(
        window_start=lambda now: months_before(now, 1),
        key_format="%m/%d",
    ),
    TimePeriod.LAST_YEAR: PeriodStrategy(
        window_start=lambda now: months_before(now, 12),
        key_format="%Y/%m",
    ),
    TimePeriod.ALL_TIME: PeriodStrategy(
        window_start=lambda now: None,
        key_format="%Y/%m",
    ),
}


def parse_period(value: TimePeriod | str) -> TimePeriod:
    """Convert a raw period value to ``TimePeriod``."""
    try:
        return TimePeriod(value)
    except (ValueError, TypeError):
        raise InvalidPeriod(value) from None


def get_strategy(period: TimePeriod | str) -> PeriodStrategy:
    return PERIOD_STRATEGIES[parse_period(period)]


def window_start(period: TimePeriod | str, now: datetime) -> datetime | None:
    """Lower bound of the period window, None when unbounded."""
    return get_strategy(period).window_start(now)


def bucket_key(timestamp: datetime, period: TimePeriod | str) -> str:
    """Bucket label of a timestamp for the given period."""
    return get_strategy(period).bucket_key(timestamp)


# Short filter codes used by visitor counts and the metrics exporter.
# ALL has no lower bound.
TIME_FILTERS: dict[str, Callable[[datetime], datetime | None]] = {
    "H": lambda now: now - timedelta(hours=1),
    "D": lambda now: now - timedelta(days=1),
    "W": lambda now: now - timedelta(days=7),
    "M": lambda now: months_before(now, 1),
    "Y": lambda now: months_before(now, 12),
    "ALL": lambda now: None,
}


def time_filter_start(code: str, now: datetime) -> datetime | None:
    """Lower bound for a time filter code (H, D, W, M, Y, ALL)."""
    try:
        start = TIME_FILTERS[code]
    except (KeyError, TypeError):
        raise InvalidTimeFilter(code) from None
    return start(now)
