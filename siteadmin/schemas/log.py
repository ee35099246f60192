"""Audit log schemas for API request/response."""

from datetime import datetime

from pydantic import BaseModel


class LogDTO(BaseModel):
    """Log entry response schema."""

    id: int
    name: str
    value: str
    time: datetime
    ip_address: str
    browser: str
    status: str
    visitor_id: int | None = None

    model_config = {"from_attributes": True}


class LogPagedResponse(BaseModel):
    """Paginated log response."""

    logs: list[LogDTO]
    total: int
    page: int
    limit: int


class LogCountResponse(BaseModel):
    """Log counters for the dashboard."""

    unread: int
    read: int
    login: int
