"""
Dashboard endpoint — returns message totals, online visitors, visit counts,
conversion rate and a short activity feed.

  GET /api/dashboard-data
"""
from fastapi import APIRouter, Depends

from app.dependencies import get_analytics
from app.schemas.response import (
    DashboardResponse,
    MessagesSummary,
    VisitsSummary,
)
from app.services.state import AnalyticsState

router = APIRouter(tags=["dashboard"])


@router.get("/api/dashboard-data", response_model=DashboardResponse)
async def get_dashboard_data(
    analytics: AnalyticsState = Depends(get_analytics),
) -> DashboardResponse:
    """Return a fresh snapshot of site activity."""
    snap = analytics.dashboard.snapshot()

    return DashboardResponse(
        messages=MessagesSummary(
            total=snap.messages_total,
            weekly=snap.messages_weekly,
            items=snap.recent_messages,
        ),
        online_users=snap.online_users,
        visits=VisitsSummary(
            today=snap.visits_today,
            change=snap.visits_change,
        ),
        conversion_rate=snap.conversion_rate,
        recent_activity=snap.recent_activity,
    )
