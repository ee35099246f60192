"""Ban service for blocking visitors."""

from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from siteadmin.models.visitor import Visitor
from siteadmin.services.log_service import LogService
from siteadmin.services.message_service import MessageService
from siteadmin.services.visitor_service import VisitorService

DEFAULT_BAN_REASON = "no-reason"


class BanService:
    """Visitor ban management.

    Every ban state change is written to the audit log under ``ban-system``.
    """

    def __init__(self, db: AsyncSession, log_service: LogService):
        self.db = db
        self.log_service = log_service
        self.visitor_service = VisitorService(db)
        self.message_service = MessageService(db)

    async def ban_visitor(
        self,
        ip_address: str,
        reason: str | None,
        banned_by: str,
    ) -> Visitor | None:
        """Ban a visitor and close their open messages.

        Returns None when no visitor with the IP address exists.
        """
        visitor = await self.visitor_service.get_by_ip(ip_address)
        if not visitor:
            return None

        reason = (reason or "").strip() or DEFAULT_BAN_REASON
        visitor.banned_status = True
        visitor.ban_reason = reason
        visitor.banned_time = datetime.now()
        await self.visitor_service.update(visitor)

        await self.log_service.log(
            "ban-system",
            f"visitor with ip: {ip_address} banned for reason: {reason} by {banned_by}",
        )
        await self.message_service.close_all_by_ip(ip_address)
        return visitor

    async def unban_visitor(self, ip_address: str, unbanned_by: str) -> Visitor | None:
        """Lift a ban. Visitors that are not banned are returned unchanged."""
        visitor = await self.visitor_service.get_by_ip(ip_address)
        if not visitor:
            return None
        if not visitor.banned_status:
            return visitor

        visitor.banned_status = False
        await self.visitor_service.update(visitor)

        await self.log_service.log(
            "ban-system",
            f"visitor with ip: {ip_address} unbanned by {unbanned_by}",
        )
        return visitor

    async def is_banned(self, ip_address: str) -> bool:
        visitor = await self.visitor_service.get_by_ip(ip_address)
        return bool(visitor and visitor.banned_status)

    async def get_ban_reason(self, ip_address: str) -> str | None:
        visitor = await self.visitor_service.get_by_ip(ip_address)
        return visitor.ban_reason if visitor else None

    async def get_banned_count(self) -> int:
        return await self.visitor_service.count(Visitor.banned_status.is_(True))
