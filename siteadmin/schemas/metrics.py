"""Visitor metrics schemas."""

from pydantic import BaseModel

from siteadmin.analytics import TimePeriod


class VisitorMetricsResponse(BaseModel):
    """Chart data for the visitor metrics page.

    ``visitors_count`` maps bucket labels to visit counts in chart order.
    """

    time_period: TimePeriod
    visitors_count: dict[str, int]
    visitors_country: dict[str, int]
    visitors_city: dict[str, int]
    visitors_browsers: dict[str, int]
    visitors_referers: dict[str, int]


class MetricsExportResponse(BaseModel):
    """Visitor counters for external monitoring."""

    visitors_count: int
    total_visitors_count: int
