"""Visitor schemas for API request/response."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class VisitorDTO(BaseModel):
    """Visitor response schema."""

    id: int
    first_visit: datetime
    last_visit: datetime
    first_visit_site: str
    browser: str
    os: str
    referer: str
    city: str
    country: str
    ip_address: str
    email: str
    banned_status: bool
    ban_reason: str
    banned_time: datetime | None = None
    online: bool = False

    model_config = {"from_attributes": True}


class VisitorQueryParams(BaseModel):
    """Visitor list query parameters."""

    page: int = Field(1, ge=1)
    filter: Literal["all", "online"] = "all"
    sort: Literal[
        "id", "first_visit", "last_visit", "browser", "os",
        "referer", "city", "country", "ip_address", "email", "banned_status",
    ] = "id"
    order: Literal["asc", "desc"] = "asc"


class VisitorPagedResponse(BaseModel):
    """Paginated visitor list response."""

    visitors: list[VisitorDTO]
    total: int
    page: int
    limit: int
    online_ids: list[int] = []
    banned_count: int = 0


class VisitorCountResponse(BaseModel):
    """Visitor counters response."""

    total: int
    online: int
    banned: int


class VisitResponse(BaseModel):
    """Result of a tracked page visit."""

    visitor_id: int
    status: str = "success"


class BanRequest(BaseModel):
    """Ban request schema."""

    reason: str | None = Field(None, max_length=255)
