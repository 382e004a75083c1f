from fastapi import Depends, Request

from notion_streak.core.config import Settings, missing_config
from notion_streak.core.errors import ConfigurationMissingError
from notion_streak.features.streaks.cache import StreakCache


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def require_config(settings: Settings = Depends(get_app_settings)) -> Settings:
    """Fail the request with 500 before any Notion call if config is missing."""
    missing = missing_config(settings)
    if missing:
        raise ConfigurationMissingError(missing)
    return settings


def get_streak_cache(request: Request, _: Settings = Depends(require_config)) -> StreakCache:
    cache = getattr(request.app.state, "streak_cache", None)
    if cache is None:
        raise ConfigurationMissingError(missing_config(request.app.state.settings) or ["NOTION_TOKEN"])
    return cache
