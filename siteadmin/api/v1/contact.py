"""Public contact form endpoint."""

from fastapi import APIRouter, HTTPException, status

from siteadmin.core.deps import AuditLog, Client, DBSession, TrackedVisitor
from siteadmin.schemas.message import ContactMessageCreate
from siteadmin.services.message_service import MessageService
from siteadmin.services.visitor_service import VisitorService

router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
async def send_message(
    data: ContactMessageCreate,
    db: DBSession,
    client: Client,
    visitor: TrackedVisitor,
    log_service: AuditLog,
) -> dict:
    """
    Send a message to the site owner inbox.

    - **name**: Sender name
    - **email**: Sender e-mail, also stored on the visitor record
    - **message**: Message text
    """
    message_service = MessageService(db)

    if data.website:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Message rejected",
        )

    if len(data.message) > message_service.settings.message_max_length:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Message is longer than {message_service.settings.message_max_length} characters",
        )

    open_count = await message_service.count_open_by_ip(client.ip_address)
    if open_count >= message_service.settings.open_message_limit:
        await log_service.log(
            "message-sender",
            f"visitor: {client.ip_address} trying send new message but has reached the open message limit",
        )
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="You have reached the maximum number of open messages",
        )

    message = await message_service.save_message(
        name=data.name,
        email=str(data.email),
        message=data.message,
        ip_address=client.ip_address,
        visitor_id=visitor.id,
    )
    await VisitorService(db).update_email(client.ip_address, str(data.email))
    await log_service.log("message-sender", f"visitor: {client.ip_address} sent new message")
    return {"status": "success", "id": message.id}
