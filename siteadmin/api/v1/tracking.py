"""Public visitor tracking endpoints called by the site frontend."""

from fastapi import APIRouter, HTTPException, status

from siteadmin.core.deps import Client, DBSession, TrackedVisitor
from siteadmin.schemas.visitor import VisitResponse
from siteadmin.services.visitor_service import VisitorService

router = APIRouter()


@router.post("/visit", response_model=VisitResponse)
async def visit(visitor: TrackedVisitor) -> VisitResponse:
    """Record a page visit. Banned visitors get 403 with the ban reason."""
    return VisitResponse(visitor_id=visitor.id)


@router.post("/activity", response_model=VisitResponse)
async def activity(db: DBSession, client: Client) -> VisitResponse:
    """Keep the requesting visitor marked as online."""
    visitor = await VisitorService(db).mark_active(client.ip_address)
    if not visitor:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Visitor not found",
        )
    return VisitResponse(visitor_id=visitor.id)
