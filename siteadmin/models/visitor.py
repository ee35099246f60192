"""Visitor model for tracked website visitors."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from siteadmin.db.base import Base


class Visitor(Base):
    """Visitor database model - one row per distinct client IP address."""

    __tablename__ = "visitors"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Visit timeline
    first_visit: Mapped[datetime] = mapped_column(DateTime, index=True)
    last_visit: Mapped[datetime] = mapped_column(DateTime, index=True)
    first_visit_site: Mapped[str] = mapped_column(String(255), default="Unknown")
    last_activity: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    # Client info
    browser: Mapped[str] = mapped_column(String(255), default="Unknown")
    os: Mapped[str] = mapped_column(String(255), default="Unknown OS")
    referer: Mapped[str] = mapped_column(String(255), default="Unknown")
    city: Mapped[str] = mapped_column(String(255), default="Unknown")
    country: Mapped[str] = mapped_column(String(255), default="Unknown")
    ip_address: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    email: Mapped[str] = mapped_column(String(255), default="Unknown")

    # Ban state
    banned_status: Mapped[bool] = mapped_column(Boolean, default=False)
    ban_reason: Mapped[str] = mapped_column(String(255), default="non-banned")
    banned_time: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    __table_args__ = (
        Index("ix_visitors_banned_status", "banned_status"),
    )

    def is_online(self, now: datetime, online_seconds: int) -> bool:
        """Check whether the visitor reported activity recently."""
        if self.last_activity is None:
            return False
        return (now - self.last_activity).total_seconds() <= online_seconds
