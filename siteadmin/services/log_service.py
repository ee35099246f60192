"""Audit log service.

Writes and reads the persisted event log shown in the admin log reader.
These rows are separate from the application's loguru output.
"""

from datetime import datetime

import httpx
from loguru import logger
from sqlalchemy import delete, desc, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from siteadmin.core.config import Settings, get_settings
from siteadmin.models.log import STATUS_READ, STATUS_UNREAD, Log
from siteadmin.models.visitor import Visitor
from siteadmin.services.base_service import BaseService
from siteadmin.utils.client_info import SYSTEM_CONTEXT, ClientContext

MAX_MESSAGE_LENGTH = 512
LOGIN_LOG_NAME = "authenticator"

# Minimum LOG_LEVEL required to persist noisy log names
_MIN_LEVEL_BY_NAME = {
    "database": 3,
    "message-sender": 2,
}


class LogService(BaseService[Log]):
    """Audit log service bound to the client making the request."""

    def __init__(
        self,
        db: AsyncSession,
        context: ClientContext = SYSTEM_CONTEXT,
        settings: Settings | None = None,
    ):
        super().__init__(db, Log)
        self.context = context
        self.settings = settings or get_settings()

    def is_anti_log_enabled(self) -> bool:
        """Check whether the client carries the anti-log token (admins browsing their own site)."""
        token = self.settings.anti_log_token
        return bool(token) and self.context.anti_log_token == token

    def should_log(self, name: str, message: str, bypass_antilog: bool = False) -> bool:
        if "Connection refused" in message:
            return False
        if not bypass_antilog and (
            not self.settings.logs_enabled or self.is_anti_log_enabled()
        ):
            return False
        return self.settings.log_level >= _MIN_LEVEL_BY_NAME.get(name, 1)

    async def log(
        self,
        name: str,
        message: str,
        bypass_antilog: bool = False,
    ) -> Log | None:
        """Persist an audit log entry.

        Returns the stored entry, or None when logging is suppressed.
        """
        if not self.should_log(name, message, bypass_antilog):
            return None

        if len(message) >= MAX_MESSAGE_LENGTH:
            message = message[:MAX_MESSAGE_LENGTH] + "..."

        entry = Log(
            name=name,
            value=message,
            time=datetime.now(),
            ip_address=self.context.ip_address,
            browser=self.context.user_agent[:255],
            status=STATUS_UNREAD,
            visitor_id=await self._visitor_id(self.context.ip_address),
        )
        entry = await self.create(entry)
        await self.external_log(message)
        return entry

    async def _visitor_id(self, ip_address: str) -> int | None:
        result = await self.db.execute(
            select(Visitor.id).where(Visitor.ip_address == ip_address)
        )
        return result.scalar_one_or_none()

    async def external_log(self, message: str) -> bool:
        """Forward a log message to the external log collector if configured."""
        if not self.settings.external_log_enabled or not self.settings.external_log_url:
            return False

        try:
            async with httpx.AsyncClient(timeout=5.0) as client:
                response = await client.post(
                    self.settings.external_log_url,
                    params={
                        "name": "site-admin: log",
                        "message": f"site-admin: {message}",
                        "level": 4,
                    },
                    headers={"API-KEY": self.settings.external_log_token},
                )
                response.raise_for_status()
            return True
        except httpx.HTTPError as e:
            logger.warning(f"External log forwarding failed: {e}")
            return False

    async def get_logs(self, status: str, page: int, username: str | None = None) -> list[Log]:
        """Get a page of logs with the given status, newest first."""
        query = select(Log).where(Log.status == status).order_by(desc(Log.id))
        logs = await self.paginate(query, page, self.settings.items_per_page)
        if username:
            await self.log("database", f"user: {username} viewed logs")
        return logs

    async def get_logs_by_ip(self, ip_address: str, page: int, username: str | None = None) -> list[Log]:
        """Get a page of logs recorded for one IP address, newest first."""
        query = select(Log).where(Log.ip_address == ip_address).order_by(desc(Log.id))
        logs = await self.paginate(query, page, self.settings.items_per_page)
        if username:
            await self.log("database", f"user: {username} viewed logs of ip: {ip_address}")
        return logs

    async def count_by_status(self, status: str) -> int:
        return await self.count(Log.status == status)

    async def count_by_ip(self, ip_address: str) -> int:
        return await self.count(Log.ip_address == ip_address)

    async def count_login_logs(self) -> int:
        return await self.count(Log.name == LOGIN_LOG_NAME)

    async def mark_all_read(self) -> int:
        """Mark every unread log as read."""
        result = await self.db.execute(
            update(Log).where(Log.status == STATUS_UNREAD).values(status=STATUS_READ)
        )
        await self.db.commit()
        return result.rowcount or 0

    async def delete_older_than(self, cutoff: datetime) -> int:
        """Delete logs recorded before cutoff."""
        result = await self.db.execute(delete(Log).where(Log.time < cutoff))
        await self.db.commit()
        return result.rowcount or 0
