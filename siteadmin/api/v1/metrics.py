"""Metrics exporter endpoint for external monitoring."""

from fastapi import APIRouter, HTTPException, Query, status

from siteadmin.core.config import get_settings
from siteadmin.core.deps import Client, DBSession
from siteadmin.schemas.metrics import MetricsExportResponse
from siteadmin.services.metrics_service import MetricsService

router = APIRouter()

ANY_IP = "%"


@router.get("/export", response_model=MetricsExportResponse)
async def export_metrics(
    db: DBSession,
    client: Client,
    time_period: str = Query("H"),
) -> MetricsExportResponse:
    """
    Export visitor counters.

    - **time_period**: H, D, W, M, Y or ALL
    """
    settings = get_settings()
    allowed_ip = settings.metrics_exporter_allowed_ip
    if not settings.metrics_exporter_enabled or (
        allowed_ip != ANY_IP and client.ip_address != allowed_ip
    ):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Metrics exporter is not allowed for this client",
        )

    return await MetricsService(db).get_export_counts(time_period)
