"""
Admin dashboard endpoints.
"""

import platform
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from venue_platform.api.deps import require_admin
from venue_platform.core.config import get_settings
from venue_platform.db.session import get_db
from venue_platform.models.user import User
from venue_platform.schemas.dashboard import (
    DashboardActivities,
    DashboardAnalytics,
    DashboardStats,
    SystemHealth,
)
from venue_platform.services import dashboard_service
from venue_platform.services.cache_service import get_cache_stats

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])
settings = get_settings()

_started_at = time.monotonic()


@router.get("/stats", response_model=DashboardStats)
async def stats(
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await dashboard_service.dashboard_stats(db)


@router.get("/analytics", response_model=DashboardAnalytics)
async def analytics(
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await dashboard_service.dashboard_analytics(db)


@router.get("/activities", response_model=DashboardActivities)
async def activities(
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await dashboard_service.recent_activities(db)


@router.get("/health", response_model=SystemHealth)
async def health(
    request: Request,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    sweeper = getattr(request.app.state, "sweeper", None)
    return SystemHealth(
        server={
            "status": "healthy",
            "uptime_seconds": round(time.monotonic() - _started_at, 1),
            "python_version": platform.python_version(),
            "environment": settings.ENVIRONMENT,
        },
        database=await dashboard_service.database_status(db),
        cache=await get_cache_stats(),
        sweeper={
            "enabled": settings.SWEEPER_ENABLED,
            "running": bool(sweeper and sweeper.running),
            "interval_seconds": settings.SWEEPER_INTERVAL_SECONDS,
        },
        api={"status": "operational", "version": settings.APP_VERSION},
        timestamp=datetime.now(timezone.utc),
    )
