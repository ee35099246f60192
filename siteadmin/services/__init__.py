"""Service layer for business logic."""

from siteadmin.services.auth_service import AuthService
from siteadmin.services.ban_service import BanService
from siteadmin.services.geolocation import GeoLocator
from siteadmin.services.log_service import LogService
from siteadmin.services.message_service import MessageService
from siteadmin.services.metrics_service import MetricsService
from siteadmin.services.user_service import UserService
from siteadmin.services.visitor_service import VisitorService

__all__ = [
    "AuthService",
    "BanService",
    "GeoLocator",
    "LogService",
    "MessageService",
    "MetricsService",
    "UserService",
    "VisitorService",
]
