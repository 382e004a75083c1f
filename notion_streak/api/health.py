"""
Liveness and readiness endpoints.

Neither endpoint calls Notion; readiness only checks configuration.
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from notion_streak.api.deps import get_app_settings
from notion_streak.core.config import Settings, missing_config

logger = logging.getLogger("notion_streak")

router = APIRouter(tags=["health"])


@router.get("/healthz")
def healthz():
    """Lightweight liveness check (no deps)."""
    return {"status": "ok"}


@router.get("/readyz")
def readyz(settings: Settings = Depends(get_app_settings)):
    missing = missing_config(settings)
    if missing:
        detail = f"missing configuration: {', '.join(missing)}"
        logger.warning(f"[readyz] {detail}")
        return JSONResponse(status_code=503, content={"status": "error", "detail": detail})
    return {"status": "ok"}
