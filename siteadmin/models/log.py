"""Log model for the persisted audit log."""

from datetime import datetime

from sqlalchemy import DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from siteadmin.db.base import Base

STATUS_UNREAD = "unreaded"
STATUS_READ = "readed"


class Log(Base):
    """Log database model - system and security events shown in the admin log reader."""

    __tablename__ = "logs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), index=True)
    value: Mapped[str] = mapped_column(Text)
    time: Mapped[datetime] = mapped_column(DateTime, index=True)
    ip_address: Mapped[str] = mapped_column(String(255), index=True)
    browser: Mapped[str] = mapped_column(String(255))
    status: Mapped[str] = mapped_column(String(32), default=STATUS_UNREAD)
    visitor_id: Mapped[int | None] = mapped_column(Integer, nullable=True)

    __table_args__ = (
        Index("ix_logs_status_time", "status", "time"),
    )
