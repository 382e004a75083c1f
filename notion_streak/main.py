import logging
from contextlib import asynccontextmanager
from datetime import timedelta
from typing import Optional

from fastapi import FastAPI
from starlette.exceptions import HTTPException as StarletteHTTPException

from notion_streak.api import health, streak
from notion_streak.core.config import Settings, get_settings, missing_config, validate_config
from notion_streak.core.errors import (
    AppError,
    app_error_handler,
    http_error_handler,
    unhandled_exception_handler,
)
from notion_streak.core.logging import configure_logging
from notion_streak.core.middleware.cors import WidgetCorsMiddleware
from notion_streak.core.middleware.request_id import RequestIdMiddleware
from notion_streak.features.notion.client import NotionClient
from notion_streak.features.streaks.cache import StreakCache
from notion_streak.features.streaks.calculator import MissingPropertyPolicy
from notion_streak.features.streaks.service import StreakService
from notion_streak.features.streaks.source import RecordSource

logger = logging.getLogger("notion_streak")


def build_streak_cache(settings: Settings, client: NotionClient) -> StreakCache:
    source = RecordSource(
        client,
        settings.NOTION_DATABASE_ID,
        sort_property=settings.STREAK_DATE_PROPERTY,
        page_size=settings.NOTION_PAGE_SIZE,
    )
    service = StreakService(
        source,
        field_name=settings.STREAK_PROPERTY,
        missing_policy=MissingPropertyPolicy(settings.STREAK_MISSING_PROPERTY_POLICY),
    )
    return StreakCache(service.compute, ttl=timedelta(seconds=settings.STREAK_CACHE_TTL_SECONDS))


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting notion streak widget...")
    cache: Optional[StreakCache] = app.state.streak_cache
    if cache is not None and app.state.warm_on_startup:
        streak_value = await cache.get_streak()
        logger.info(f"Initial streak: {streak_value}")
    try:
        yield
    finally:
        client: Optional[NotionClient] = app.state.notion_client
        if client is not None:
            await client.aclose()
        logger.info("Stopping notion streak widget...")


def create_app(
    settings: Optional[Settings] = None,
    *,
    cache: Optional[StreakCache] = None,
    warm_on_startup: bool = True,
) -> FastAPI:
    """Composition root: settings, Notion client and the streak cache live on app.state."""
    settings = settings or get_settings()
    configure_logging(settings.ENV)
    validate_config(settings)

    client: Optional[NotionClient] = None
    if cache is None and not missing_config(settings):
        client = NotionClient(
            settings.NOTION_TOKEN,
            base_url=settings.NOTION_API_URL,
            notion_version=settings.NOTION_VERSION,
            timeout=settings.NOTION_TIMEOUT_SECONDS,
        )
        cache = build_streak_cache(settings, client)

    app = FastAPI(title="Notion Streak Widget", lifespan=lifespan)
    app.state.settings = settings
    app.state.notion_client = client
    app.state.streak_cache = cache
    app.state.warm_on_startup = warm_on_startup

    app.add_middleware(WidgetCorsMiddleware)
    app.add_middleware(RequestIdMiddleware)

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(streak.router, tags=["streak"])
    app.include_router(health.router)
    return app
