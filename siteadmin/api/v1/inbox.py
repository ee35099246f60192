"""Inbox API endpoints for contact messages."""

from typing import Literal

from fastapi import APIRouter, HTTPException, Query, status

from siteadmin.core.deps import AuditLog, CurrentUserRequired, DBSession
from siteadmin.models.message import STATUS_CLOSED, STATUS_OPEN
from siteadmin.schemas.message import MessageCountResponse, MessageDTO, MessagePagedResponse
from siteadmin.services.message_service import MessageService

router = APIRouter()


@router.get("", response_model=MessagePagedResponse)
async def get_messages(
    db: DBSession,
    current_user: CurrentUserRequired,
    message_status: Literal["open", "closed"] = Query(STATUS_OPEN, alias="status"),
    page: int = Query(1, ge=1),
) -> MessagePagedResponse:
    """
    Get a page of inbox messages, newest first.

    - **status**: open or closed
    - **page**: Page number (1-based)
    """
    message_service = MessageService(db)
    messages = await message_service.get_messages(message_status, page)
    return MessagePagedResponse(
        messages=[MessageDTO.model_validate(m) for m in messages],
        total=await message_service.count_by_status(message_status),
        page=page,
        limit=message_service.settings.items_per_page,
    )


@router.get("/count", response_model=MessageCountResponse)
async def get_message_counts(
    db: DBSession,
    current_user: CurrentUserRequired,
) -> MessageCountResponse:
    """Get open and closed message counters."""
    message_service = MessageService(db)
    return MessageCountResponse(
        open=await message_service.count_by_status(STATUS_OPEN),
        closed=await message_service.count_by_status(STATUS_CLOSED),
    )


@router.post("/{message_id}/close")
async def close_message(
    message_id: int,
    db: DBSession,
    current_user: CurrentUserRequired,
    log_service: AuditLog,
) -> dict:
    """Close an inbox message."""
    if not await MessageService(db).close_message(message_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Message not found",
        )
    await log_service.log(
        "message-sender",
        f"user: {current_user.username} closed message: {message_id}",
    )
    return {"status": "success"}
