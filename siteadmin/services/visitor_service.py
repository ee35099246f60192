"""Visitor service for visitor tracking and the visitor manager."""

from datetime import datetime, timedelta

from loguru import logger
from sqlalchemy import asc, desc, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from siteadmin.analytics import VisitEvent, time_filter_start
from siteadmin.core.config import Settings, get_browser_list, get_settings
from siteadmin.models.visitor import Visitor
from siteadmin.schemas.visitor import VisitorDTO, VisitorQueryParams
from siteadmin.services.base_service import BaseService
from siteadmin.services.geolocation import GeoLocator
from siteadmin.utils.client_info import UNKNOWN, ClientContext
from siteadmin.utils.user_agent import UserAgentParser, truncate_user_agent


class VisitorService(BaseService[Visitor]):
    """Visitor service for tracking and querying visitors."""

    def __init__(
        self,
        db: AsyncSession,
        settings: Settings | None = None,
        parser: UserAgentParser | None = None,
        geolocator: GeoLocator | None = None,
    ):
        super().__init__(db, Visitor)
        self.settings = settings or get_settings()
        self.parser = parser or UserAgentParser(get_browser_list())
        self.geolocator = geolocator or GeoLocator(self.settings)

    async def get_by_ip(self, ip_address: str) -> Visitor | None:
        """Get visitor by IP address."""
        result = await self.db.execute(
            select(Visitor).where(Visitor.ip_address == ip_address)
        )
        return result.scalar_one_or_none()

    async def get_visitor_id(self, ip_address: str) -> int | None:
        visitor = await self.get_by_ip(ip_address)
        return visitor.id if visitor else None

    async def track(self, context: ClientContext, now: datetime | None = None) -> Visitor:
        """Record a page visit for the requesting client.

        New clients get a visitor row. Known clients get their last visit
        and user agent refreshed. Banned visitors are returned untouched so
        the caller can reject the request.
        """
        now = now or datetime.now()
        browser = truncate_user_agent(context.user_agent, self.settings.user_agent_max_length)
        os_name = self.parser.os_name(context.user_agent)
        # Internal navigation is not a referer
        referer = context.referer
        if referer == context.host.split(":")[0]:
            referer = UNKNOWN

        visitor = await self.get_by_ip(context.ip_address)
        if visitor is None:
            city, country = await self.geolocator.locate(context.ip_address)
            visitor = Visitor(
                first_visit=now,
                last_visit=now,
                first_visit_site=context.host,
                last_activity=now,
                browser=browser,
                os=os_name,
                referer=referer,
                city=city,
                country=country,
                ip_address=context.ip_address,
                email=UNKNOWN,
                banned_status=False,
                ban_reason="non-banned",
                banned_time=None,
            )
            try:
                visitor = await self.create(visitor)
            except IntegrityError:
                # A concurrent request inserted the same address first
                await self.db.rollback()
                existing = await self.get_by_ip(context.ip_address)
                if existing is None:
                    raise
                return existing
            logger.info(f"New visitor tracked: {context.ip_address}")
            return visitor

        if visitor.banned_status:
            return visitor

        visitor.last_visit = now
        visitor.last_activity = now
        visitor.browser = browser
        visitor.os = os_name
        if visitor.referer == UNKNOWN and referer != UNKNOWN:
            visitor.referer = referer
        return await self.update(visitor)

    async def mark_active(self, ip_address: str, now: datetime | None = None) -> Visitor | None:
        """Refresh the online marker of a visitor."""
        visitor = await self.get_by_ip(ip_address)
        if not visitor:
            return None
        visitor.last_activity = now or datetime.now()
        return await self.update(visitor)

    async def update_email(self, ip_address: str, email: str) -> bool:
        """Store the e-mail address a visitor left in the contact form."""
        result = await self.db.execute(
            update(Visitor).where(Visitor.ip_address == ip_address).values(email=email)
        )
        await self.db.commit()
        return bool(result.rowcount)

    def _online_since(self, now: datetime) -> datetime:
        return now - timedelta(seconds=self.settings.visitor_online_seconds)

    async def get_online_ids(self, now: datetime | None = None) -> list[int]:
        """Get IDs of visitors active within the online window."""
        since = self._online_since(now or datetime.now())
        result = await self.db.execute(
            select(Visitor.id).where(Visitor.last_activity >= since).order_by(Visitor.id)
        )
        return list(result.scalars().all())

    async def get_visitors(
        self, params: VisitorQueryParams, now: datetime | None = None
    ) -> tuple[list[VisitorDTO], int]:
        """Get a page of visitors and the total matching count."""
        now = now or datetime.now()
        filters = []
        if params.filter == "online":
            filters.append(Visitor.last_activity >= self._online_since(now))

        column = getattr(Visitor, params.sort)
        ordering = asc(column) if params.order == "asc" else desc(column)
        query = select(Visitor).where(*filters).order_by(ordering, Visitor.id)

        visitors = await self.paginate(query, params.page, self.settings.items_per_page)
        total = await self.count(*filters)
        return [self.to_dto(v, now) for v in visitors], total

    def to_dto(self, visitor: Visitor, now: datetime) -> VisitorDTO:
        """Convert Visitor model to DTO with a shortened browser name."""
        dto = VisitorDTO.model_validate(visitor)
        dto.browser = self.parser.browser_name(visitor.browser)
        dto.online = visitor.is_online(now, self.settings.visitor_online_seconds)
        return dto

    async def count_visitors(self, filter: str = "all", now: datetime | None = None) -> int:
        """Count all visitors or only online ones."""
        if filter == "online":
            return await self.count(Visitor.last_activity >= self._online_since(now or datetime.now()))
        return await self.count()

    async def count_by_time_filter(self, code: str, now: datetime | None = None) -> int:
        """Count visitors first seen within a time filter (H, D, W, M, Y, ALL).

        Raises:
            InvalidTimeFilter: if the code is unknown.
        """
        start = time_filter_start(code, now or datetime.now())
        if start is None:
            return await self.count()
        return await self.count(Visitor.first_visit >= start)

    async def events_in_window(
        self,
        window_start: datetime | None,
        window_end: datetime | None = None,
    ) -> list[VisitEvent]:
        """Get visit events (last visit times) inside ``[window_start, window_end)``."""
        query = select(Visitor.last_visit).order_by(Visitor.last_visit)
        if window_start is not None:
            query = query.where(Visitor.last_visit >= window_start)
        if window_end is not None:
            query = query.where(Visitor.last_visit < window_end)

        result = await self.db.execute(query)
        return [VisitEvent(timestamp=ts) for ts in result.scalars().all()]

    async def count_grouped_by(self, column_name: str) -> dict[str, int]:
        """Count visitors per distinct value of a column, largest group first."""
        column = getattr(Visitor, column_name)
        result = await self.db.execute(
            select(column, func.count(Visitor.id).label("visitor_count"))
            .group_by(column)
            .order_by(desc("visitor_count"), column)
        )
        return {str(value): count for value, count in result.all()}
