from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from campusconnect.api.deps import get_current_organization
from campusconnect.database import get_db
from campusconnect.models.organizations import Organization
from campusconnect.schemas.dashboard import DashboardStatsResponse
from campusconnect.services.dashboard import dashboard_service

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DashboardStatsResponse)
async def get_dashboard_stats(
    current_organization: Organization = Depends(get_current_organization),
    db: AsyncSession = Depends(get_db),
) -> Any:
    """
    Summary counters for the caller's dashboard
    """
    stats = await dashboard_service.get_stats(db, current_organization)
    return {"success": True, "data": stats}
