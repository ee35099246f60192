"""Visitor metrics service - feeds the aggregator from the visitor table."""

from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from siteadmin.analytics import TimePeriod, aggregate, parse_period, window_start
from siteadmin.schemas.metrics import MetricsExportResponse, VisitorMetricsResponse
from siteadmin.services.visitor_service import VisitorService


def _sort_desc(counts: dict[str, int]) -> dict[str, int]:
    return dict(sorted(counts.items(), key=lambda item: (-item[1], item[0])))


class MetricsService:
    """Builds visitor chart data and exporter counters."""

    def __init__(self, db: AsyncSession, visitor_service: VisitorService | None = None):
        self.db = db
        self.visitor_service = visitor_service or VisitorService(db)

    async def get_visitor_metrics(
        self,
        period: TimePeriod | str,
        now: datetime | None = None,
    ) -> VisitorMetricsResponse:
        """Get bucketed visit counts and visitor breakdowns.

        Raises:
            InvalidPeriod: if ``period`` is unknown. Raised before any query runs.
        """
        period = parse_period(period)
        now = now or datetime.now()

        events = await self.visitor_service.events_in_window(window_start(period, now))
        visitors_count = aggregate(events, period, now)

        # Several raw user agents collapse into one browser name
        browsers: dict[str, int] = {}
        raw_browsers = await self.visitor_service.count_grouped_by("browser")
        for user_agent, count in raw_browsers.items():
            name = self.visitor_service.parser.browser_name(user_agent)
            browsers[name] = browsers.get(name, 0) + count

        return VisitorMetricsResponse(
            time_period=period,
            visitors_count=visitors_count,
            visitors_country=_sort_desc(await self.visitor_service.count_grouped_by("country")),
            visitors_city=_sort_desc(await self.visitor_service.count_grouped_by("city")),
            visitors_browsers=_sort_desc(browsers),
            visitors_referers=_sort_desc(await self.visitor_service.count_grouped_by("referer")),
        )

    async def get_export_counts(
        self, time_filter: str, now: datetime | None = None
    ) -> MetricsExportResponse:
        """Get visitor counters for the metrics exporter.

        Raises:
            InvalidTimeFilter: if ``time_filter`` is unknown.
        """
        return MetricsExportResponse(
            visitors_count=await self.visitor_service.count_by_time_filter(time_filter, now),
            total_visitors_count=await self.visitor_service.count(),
        )
