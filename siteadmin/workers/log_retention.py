"""Log retention worker for cleaning up old audit logs."""

from datetime import datetime, timedelta

from loguru import logger

from siteadmin.core.config import get_settings
from siteadmin.db.session import async_session_maker
from siteadmin.services.log_service import LogService

settings = get_settings()


class LogRetentionWorker:
    """Worker for deleting audit logs older than the retention window."""

    def __init__(self, retention_days: int | None = None, session_maker=None):
        self.retention_days = (
            settings.log_retention_days if retention_days is None else retention_days
        )
        self.session_maker = session_maker or async_session_maker

    async def run(self, now: datetime | None = None) -> int:
        """Run the retention cleanup and return the number of deleted logs."""
        if self.retention_days <= 0:
            logger.debug("Log retention disabled")
            return 0

        logger.info(f"Running log retention cleanup (keeping {self.retention_days} days)")
        cutoff = (now or datetime.now()) - timedelta(days=self.retention_days)

        async with self.session_maker() as db:
            try:
                deleted_count = await LogService(db).delete_older_than(cutoff)
                logger.info(f"Deleted {deleted_count} old logs")
                return deleted_count
            except Exception as e:
                logger.error(f"Log retention error: {e}")
                await db.rollback()
                return 0
