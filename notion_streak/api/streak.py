from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from notion_streak.api.deps import get_app_settings, get_streak_cache
from notion_streak.core.config import Settings
from notion_streak.features.streaks.cache import StreakCache
from notion_streak.features.widget.render import render_widget

logger = logging.getLogger("notion_streak")

router = APIRouter()


def _iso(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


@router.get("/", response_class=HTMLResponse)
async def streak_widget(
    cache: StreakCache = Depends(get_streak_cache),
    settings: Settings = Depends(get_app_settings),
):
    """Embeddable HTML card with the current streak."""
    streak = await cache.get_streak()
    snapshot = cache.snapshot()
    updated_at = snapshot.computed_at if snapshot.ever_computed else datetime.now(timezone.utc)
    return HTMLResponse(render_widget(streak, updated_at, settings.DISPLAY_TIMEZONE))


@router.get("/api/streak")
async def get_streak(
    cache: StreakCache = Depends(get_streak_cache),
    settings: Settings = Depends(get_app_settings),
):
    streak = await cache.get_streak()
    snapshot = cache.snapshot()
    return {
        "streak": streak,
        "lastUpdated": _iso(snapshot.computed_at) if snapshot.ever_computed else None,
        "timezone": settings.DISPLAY_TIMEZONE,
    }


@router.get("/refresh")
async def refresh_streak(cache: StreakCache = Depends(get_streak_cache)):
    """Drop the cached value and recompute now."""
    streak = await cache.get_streak(force_refresh=True)
    logger.info("streak.refresh_requested", extra={"streak": streak})
    return {"message": "Streak refreshed", "streak": streak}
