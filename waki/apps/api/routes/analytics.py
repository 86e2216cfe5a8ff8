from __future__ import annotations

from typing import Any, Dict, Literal

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response

from waki.apps.api.deps.auth import get_current_user_id
from waki.apps.api.deps.services import get_analytics_service
from waki.apps.engine.analytics import AnalyticsService, DashboardUnavailableError

router = APIRouter(prefix="/analytics", tags=["analytics"])

_MEDIA_TYPES = {"json": "application/json", "csv": "text/csv"}


@router.get("/dashboard")
async def get_dashboard(
    user_id: str = Depends(get_current_user_id),
    service: AnalyticsService = Depends(get_analytics_service),
) -> Dict[str, Any]:
    try:
        dashboard = await service.compute_dashboard(user_id)
    except DashboardUnavailableError as exc:
        raise HTTPException(status_code=500, detail="Failed to get dashboard data") from exc
    return dashboard.to_wire()


@router.get("/export")
async def export_analytics(
    format: Literal["json", "csv"] = Query(default="json"),
    user_id: str = Depends(get_current_user_id),
    service: AnalyticsService = Depends(get_analytics_service),
) -> Response:
    try:
        body = await service.export_dashboard(user_id, format)
    except DashboardUnavailableError as exc:
        raise HTTPException(status_code=500, detail="Failed to export analytics") from exc
    return Response(
        content=body,
        media_type=_MEDIA_TYPES[format],
        headers={"Content-Disposition": f"attachment; filename=analytics.{format}"},
    )


__all__ = ["router"]
