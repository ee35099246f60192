"""Message service for the contact form inbox."""

from datetime import datetime

from sqlalchemy import desc, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from siteadmin.core.config import Settings, get_settings
from siteadmin.models.message import STATUS_CLOSED, STATUS_OPEN, Message
from siteadmin.services.base_service import BaseService


class MessageService(BaseService[Message]):
    """Inbox message service."""

    def __init__(self, db: AsyncSession, settings: Settings | None = None):
        super().__init__(db, Message)
        self.settings = settings or get_settings()

    async def save_message(
        self,
        name: str,
        email: str,
        message: str,
        ip_address: str,
        visitor_id: int | None,
    ) -> Message:
        """Store a new open message."""
        entry = Message(
            name=name,
            email=email,
            message=message,
            time=datetime.now(),
            ip_address=ip_address,
            status=STATUS_OPEN,
            visitor_id=visitor_id,
        )
        return await self.create(entry)

    async def count_open_by_ip(self, ip_address: str) -> int:
        """Count messages from an IP address still waiting in the inbox."""
        return await self.count(
            Message.ip_address == ip_address,
            Message.status == STATUS_OPEN,
        )

    async def count_by_status(self, status: str) -> int:
        return await self.count(Message.status == status)

    async def get_messages(self, status: str, page: int) -> list[Message]:
        """Get a page of messages with the given status, newest first."""
        query = select(Message).where(Message.status == status).order_by(desc(Message.id))
        return await self.paginate(query, page, self.settings.items_per_page)

    async def close_message(self, message_id: int) -> bool:
        """Close a single message."""
        message = await self.get_by_id(message_id)
        if not message:
            return False
        message.status = STATUS_CLOSED
        await self.update(message)
        return True

    async def close_all_by_ip(self, ip_address: str) -> int:
        """Close every message sent from an IP address."""
        result = await self.db.execute(
            update(Message)
            .where(Message.ip_address == ip_address)
            .values(status=STATUS_CLOSED)
        )
        await self.db.commit()
        return result.rowcount or 0
