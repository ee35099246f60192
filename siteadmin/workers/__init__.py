"""Background workers for scheduled tasks."""

from siteadmin.workers.log_retention import LogRetentionWorker

__all__ = ["LogRetentionWorker"]
