"""
Statistics API endpoints for the dashboard.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from transit_delay.config import Settings
from transit_delay.database import get_db
from transit_delay.dependencies import get_app_settings
from transit_delay.schemas.stats import DashboardStats, RouteStats
from transit_delay.services.stats_service import get_dashboard_stats, get_route_stats

router = APIRouter()


@router.get("/dashboard", response_model=DashboardStats)
async def dashboard_stats(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    """
    Total queries, average delay, on-time percentage and the latest queries.
    """
    return await get_dashboard_stats(
        db,
        on_time_threshold=settings.on_time_threshold_minutes,
        recent_limit=settings.dashboard_recent_limit,
    )


@router.get("/routes", response_model=list[RouteStats])
async def route_stats(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    """
    Per-route query counts, average delay and on-time percentage,
    busiest route first.
    """
    return await get_route_stats(db, on_time_threshold=settings.on_time_threshold_minutes)
