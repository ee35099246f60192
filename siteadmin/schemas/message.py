"""Contact message schemas for API request/response."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field


class ContactMessageCreate(BaseModel):
    """Public contact form submission.

    ``website`` is a honeypot field hidden from humans; bots fill it in.
    """

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    message: str = Field(..., min_length=1)
    website: str | None = None


class MessageDTO(BaseModel):
    """Inbox message response schema."""

    id: int
    name: str
    email: str
    message: str
    time: datetime
    ip_address: str
    status: str
    visitor_id: int | None = None

    model_config = {"from_attributes": True}


class MessagePagedResponse(BaseModel):
    """Paginated inbox response."""

    messages: list[MessageDTO]
    total: int
    page: int
    limit: int


class MessageCountResponse(BaseModel):
    """Inbox counters."""

    open: int
    closed: int
