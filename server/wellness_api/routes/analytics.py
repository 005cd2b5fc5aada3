"""Analytics API routes."""
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import APIRouter, Query

from ..config import get_settings
from ..services.stats_engine import build_dashboard, build_mood_trends, to_day
from .common import success
from .goals import fetch_goals
from .habits import fetch_active_habits
from .journals import fetch_journals
from .moods import fetch_moods

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/analytics", tags=["Analytics"])


def _window_start(days: Optional[int], now: datetime) -> str:
    """First calendar day of the ``days``-day window that ends today inclusive."""
    if days is None:
        days = get_settings().default_lookback_days
    return (to_day(now) - timedelta(days=days - 1)).isoformat()


@router.get("/dashboard")
async def get_dashboard_analytics(
    days: Optional[int] = Query(default=None, ge=1, le=365, description="Lookback window in days"),
):
    """
    Dashboard statistics, charts and insights.
    Moods and journals are limited to the lookback window; all goals and
    active habits are included.
    """
    now = datetime.now(timezone.utc)
    start = _window_start(days, now)

    dashboard = build_dashboard(
        moods=fetch_moods(start_date=start),
        journals=fetch_journals(start_date=start),
        goals=fetch_goals(),
        habits=fetch_active_habits(),
        now=now,
    )
    logger.info(f"[ANALYTICS] Dashboard served for window starting {start}")
    return success(dashboard)


@router.get("/mood-trends")
async def get_mood_trends(
    days: Optional[int] = Query(default=None, ge=1, le=365, description="Lookback window in days"),
):
    """Weekly mood series, distribution and week-over-week trend."""
    now = datetime.now(timezone.utc)
    moods = fetch_moods(start_date=_window_start(days, now), ascending=True)
    return success(build_mood_trends(moods, now))
