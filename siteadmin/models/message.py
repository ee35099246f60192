"""Message model for contact form submissions."""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from siteadmin.db.base import Base

STATUS_OPEN = "open"
STATUS_CLOSED = "closed"


class Message(Base):
    """Inbox message database model."""

    __tablename__ = "messages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255))
    email: Mapped[str] = mapped_column(String(255))
    message: Mapped[str] = mapped_column(Text)
    time: Mapped[datetime] = mapped_column(DateTime, index=True)
    ip_address: Mapped[str] = mapped_column(String(255), index=True)
    status: Mapped[str] = mapped_column(String(32), default=STATUS_OPEN, index=True)
    visitor_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
