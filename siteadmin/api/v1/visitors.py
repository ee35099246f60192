"""Visitor manager API endpoints."""

from datetime import datetime
from typing import Literal

from fastapi import APIRouter, HTTPException, Query, status

from siteadmin.analytics import TimePeriod
from siteadmin.core.deps import AuditLog, CurrentUserRequired, DBSession
from siteadmin.schemas.metrics import VisitorMetricsResponse
from siteadmin.schemas.visitor import (
    BanRequest,
    VisitorCountResponse,
    VisitorDTO,
    VisitorPagedResponse,
    VisitorQueryParams,
)
from siteadmin.services.ban_service import BanService
from siteadmin.services.metrics_service import MetricsService
from siteadmin.services.visitor_service import VisitorService

router = APIRouter()


@router.get("", response_model=VisitorPagedResponse)
async def get_visitors(
    db: DBSession,
    current_user: CurrentUserRequired,
    log_service: AuditLog,
    page: int = Query(1, ge=1),
    filter: Literal["all", "online"] = Query("all"),
    sort: str = Query("id"),
    order: Literal["asc", "desc"] = Query("asc"),
) -> VisitorPagedResponse:
    """
    Get paginated visitor list.

    - **page**: Page number (1-based)
    - **filter**: all or online
    - **sort**: Column to sort by
    - **order**: asc or desc
    """
    try:
        params = VisitorQueryParams(page=page, filter=filter, sort=sort, order=order)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid sort column: {sort}",
        ) from None

    visitor_service = VisitorService(db)
    visitors, total = await visitor_service.get_visitors(params)
    return VisitorPagedResponse(
        visitors=visitors,
        total=total,
        page=params.page,
        limit=visitor_service.settings.items_per_page,
        online_ids=await visitor_service.get_online_ids(),
        banned_count=await BanService(db, log_service).get_banned_count(),
    )


@router.get("/count", response_model=VisitorCountResponse)
async def get_visitor_counts(
    db: DBSession,
    current_user: CurrentUserRequired,
    log_service: AuditLog,
) -> VisitorCountResponse:
    """Get total, online and banned visitor counts."""
    visitor_service = VisitorService(db)
    return VisitorCountResponse(
        total=await visitor_service.count_visitors("all"),
        online=await visitor_service.count_visitors("online"),
        banned=await BanService(db, log_service).get_banned_count(),
    )


@router.get("/metrics", response_model=VisitorMetricsResponse)
async def get_visitor_metrics(
    db: DBSession,
    current_user: CurrentUserRequired,
    time_period: str = Query(TimePeriod.LAST_WEEK.value),
) -> VisitorMetricsResponse:
    """
    Get visitor chart data.

    - **time_period**: last_24_hours, last_week, last_month, last_year or all_time
    """
    return await MetricsService(db).get_visitor_metrics(time_period)


@router.delete("")
async def delete_all_visitors(
    db: DBSession,
    current_user: CurrentUserRequired,
    log_service: AuditLog,
) -> dict:
    """Delete every tracked visitor."""
    deleted = await VisitorService(db).delete_all()
    await log_service.log(
        "database",
        f"user: {current_user.username} deleted all visitors",
    )
    return {"status": "success", "deleted": deleted}


@router.get("/{visitor_id}", response_model=VisitorDTO)
async def get_visitor(
    visitor_id: int,
    db: DBSession,
    current_user: CurrentUserRequired,
) -> VisitorDTO:
    """Get visitor by ID."""
    visitor_service = VisitorService(db)
    visitor = await visitor_service.get_by_id(visitor_id)
    if not visitor:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Visitor not found",
        )
    return visitor_service.to_dto(visitor, datetime.now())


async def _visitor_ip(db: DBSession, visitor_id: int) -> str:
    visitor = await VisitorService(db).get_by_id(visitor_id)
    if not visitor:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Visitor not found",
        )
    return visitor.ip_address


@router.post("/{visitor_id}/ban", response_model=VisitorDTO)
async def ban_visitor(
    visitor_id: int,
    data: BanRequest,
    db: DBSession,
    current_user: CurrentUserRequired,
    log_service: AuditLog,
) -> VisitorDTO:
    """
    Ban a visitor and close their open messages.

    - **reason**: Ban reason shown to the visitor (default: no-reason)
    """
    ip_address = await _visitor_ip(db, visitor_id)
    visitor = await BanService(db, log_service).ban_visitor(
        ip_address, data.reason, current_user.username
    )
    if not visitor:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Visitor not found",
        )
    return VisitorService(db).to_dto(visitor, datetime.now())


@router.post("/{visitor_id}/unban", response_model=VisitorDTO)
async def unban_visitor(
    visitor_id: int,
    db: DBSession,
    current_user: CurrentUserRequired,
    log_service: AuditLog,
) -> VisitorDTO:
    """Lift a visitor ban."""
    ip_address = await _visitor_ip(db, visitor_id)
    visitor = await BanService(db, log_service).unban_visitor(
        ip_address, current_user.username
    )
    if not visitor:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Visitor not found",
        )
    return VisitorService(db).to_dto(visitor, datetime.now())
