"""Pydantic schemas for API request/response validation."""

from siteadmin.schemas.auth import ChangePassword, Token, UserCreate, UserDTO, UserLogin
from siteadmin.schemas.log import LogCountResponse, LogDTO, LogPagedResponse
from siteadmin.schemas.message import (
    ContactMessageCreate,
    MessageCountResponse,
    MessageDTO,
    MessagePagedResponse,
)
from siteadmin.schemas.metrics import MetricsExportResponse, VisitorMetricsResponse
from siteadmin.schemas.visitor import (
    BanRequest,
    VisitorCountResponse,
    VisitorDTO,
    VisitorPagedResponse,
    VisitorQueryParams,
    VisitResponse,
)

__all__ = [
    # Auth
    "ChangePassword",
    "Token",
    "UserCreate",
    "UserDTO",
    "UserLogin",
    # Logs
    "LogCountResponse",
    "LogDTO",
    "LogPagedResponse",
    # Messages
    "ContactMessageCreate",
    "MessageCountResponse",
    "MessageDTO",
    "MessagePagedResponse",
    # Metrics
    "MetricsExportResponse",
    "VisitorMetricsResponse",
    # Visitors
    "BanRequest",
    "VisitorCountResponse",
    "VisitorDTO",
    "VisitorPagedResponse",
    "VisitorQueryParams",
    "VisitResponse",
]
