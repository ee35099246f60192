"""Audit log reader API endpoints."""

from typing import Literal

from fastapi import APIRouter, HTTPException, Query, Response, status

from siteadmin.core.deps import AuditLog, CurrentUserRequired
from siteadmin.models.log import STATUS_READ, STATUS_UNREAD
from siteadmin.schemas.log import LogCountResponse, LogDTO, LogPagedResponse
from siteadmin.utils.client_info import ANTI_LOG_COOKIE, ANTI_LOG_MAX_AGE

router = APIRouter()


@router.get("", response_model=LogPagedResponse)
async def get_logs(
    current_user: CurrentUserRequired,
    log_service: AuditLog,
    log_status: Literal["unreaded", "readed"] = Query(STATUS_UNREAD, alias="status"),
    page: int = Query(1, ge=1),
) -> LogPagedResponse:
    """
    Get a page of audit logs, newest first.

    - **status**: unreaded or readed
    - **page**: Page number (1-based)
    """
    total = await log_service.count_by_status(log_status)
    logs = await log_service.get_logs(log_status, page, current_user.username)
    return LogPagedResponse(
        logs=[LogDTO.model_validate(log) for log in logs],
        total=total,
        page=page,
        limit=log_service.settings.items_per_page,
    )


@router.get("/count", response_model=LogCountResponse)
async def get_log_counts(
    current_user: CurrentUserRequired,
    log_service: AuditLog,
) -> LogCountResponse:
    """Get unread, read and login log counters."""
    return LogCountResponse(
        unread=await log_service.count_by_status(STATUS_UNREAD),
        read=await log_service.count_by_status(STATUS_READ),
        login=await log_service.count_login_logs(),
    )


@router.get("/ip/{ip_address}", response_model=LogPagedResponse)
async def get_logs_by_ip(
    ip_address: str,
    current_user: CurrentUserRequired,
    log_service: AuditLog,
    page: int = Query(1, ge=1),
) -> LogPagedResponse:
    """Get a page of audit logs recorded for one IP address."""
    total = await log_service.count_by_ip(ip_address)
    logs = await log_service.get_logs_by_ip(ip_address, page, current_user.username)
    return LogPagedResponse(
        logs=[LogDTO.model_validate(log) for log in logs],
        total=total,
        page=page,
        limit=log_service.settings.items_per_page,
    )


@router.post("/read")
async def mark_logs_read(
    current_user: CurrentUserRequired,
    log_service: AuditLog,
) -> dict:
    """Mark every unread log as read."""
    updated = await log_service.mark_all_read()
    await log_service.log("database", f"user: {current_user.username} set all logs to read")
    return {"status": "success", "updated": updated}


@router.delete("")
async def delete_logs(
    current_user: CurrentUserRequired,
    log_service: AuditLog,
) -> dict:
    """Delete every audit log."""
    deleted = await log_service.delete_all()
    await log_service.log("database", f"user: {current_user.username} deleted all logs")
    return {"status": "success", "deleted": deleted}


@router.post("/antilog")
async def toggle_antilog(
    response: Response,
    current_user: CurrentUserRequired,
    log_service: AuditLog,
) -> dict:
    """
    Toggle the anti-log cookie for the calling browser.

    Requests carrying the cookie are not written to the audit log, so the
    site owner can browse the site without filling the log.
    """
    token = log_service.settings.anti_log_token
    if not token:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Anti-log token is not configured",
        )

    if log_service.is_anti_log_enabled():
        response.delete_cookie(ANTI_LOG_COOKIE)
        await log_service.log(
            "anti-log", f"user: {current_user.username} unset antilog", bypass_antilog=True
        )
        return {"status": "success", "antilog": False}

    response.set_cookie(
        ANTI_LOG_COOKIE,
        token,
        max_age=ANTI_LOG_MAX_AGE,
        httponly=True,
        samesite="lax",
    )
    await log_service.log(
        "anti-log", f"user: {current_user.username} set antilog", bypass_antilog=True
    )
    return {"status": "success", "antilog": True}
