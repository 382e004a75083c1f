"""Error normalization and handlers."""

import logging
from typing import Iterable, Optional
from uuid import uuid4

from starlette.exceptions import HTTPException
from fastapi.responses import JSONResponse
from starlette.requests import Request

from notion_streak.core.logging import get_request_id
from notion_streak.core.middleware.cors import apply_cors_headers


class AppError(Exception):
    code = "app_error"
    status_code = 500

    def __init__(self, message: str, *, code: Optional[str] = None, status_code: Optional[int] = None, request_id: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code
        if status_code:
            self.status_code = status_code
        self.request_id = request_id


class ConfigurationMissingError(AppError):
    """Raised when the Notion credential or database id is not configured."""
    code = "configuration_missing"
    status_code = 500

    def __init__(self, missing: Iterable[str], **kwargs):
        self.missing = list(missing)
        super().__init__(
            f"Missing required configuration: {', '.join(self.missing)}",
            **kwargs,
        )


class SourceUnavailableError(AppError):
    """The Notion database query failed (transport, status or payload)."""
    code = "source_unavailable"
    status_code = 502

    def __init__(self, message: str, *, cause: Optional[BaseException] = None, status: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.cause = cause
        self.status = status


def _extract_request_id(request: Request, fallback: Optional[str] = None) -> str:
    return (
        getattr(request.state, "request_id", None)
        or get_request_id()
        or fallback
        or str(uuid4())
    )


def _error_payload(code: str, message: str, request_id: str) -> dict:
    return {
        "error": {"code": code, "message": message, "request_id": request_id},
        "detail": message,
    }


def _error_response(status_code: int, payload: dict, rid: str) -> JSONResponse:
    response = JSONResponse(status_code=status_code, content=payload)
    response.headers["x-request-id"] = rid
    apply_cors_headers(response)
    return response


async def app_error_handler(request: Request, exc: AppError):
    rid = exc.request_id or _extract_request_id(request)
    payload = _error_payload(exc.code, exc.message, rid)
    logger = logging.getLogger("notion_streak")
    log_level = logging.ERROR if exc.status_code >= 500 else logging.WARNING
    logger.log(
        log_level,
        "app.error",
        extra={"request_id": rid, "error_code": exc.code, "error_message": exc.message, "status": exc.status_code},
    )
    return _error_response(exc.status_code, payload, rid)


async def http_error_handler(request: Request, exc: HTTPException):
    rid = _extract_request_id(request)
    code = "not_found" if exc.status_code == 404 else "http_error"
    message = exc.detail if exc.detail else "HTTP error"
    payload = _error_payload(code, message, rid)
    logger = logging.getLogger("notion_streak")
    logger.warning("http.error", extra={"request_id": rid, "error_code": code, "status": exc.status_code})
    return _error_response(exc.status_code, payload, rid)


async def unhandled_exception_handler(request: Request, exc: Exception):
    rid = _extract_request_id(request)
    logger = logging.getLogger("notion_streak")
    logger.error("unhandled.exception", exc_info=True, extra={"request_id": rid, "error_code": "internal_error"})
    payload = _error_payload("internal_error", f"Unexpected error: {exc}", rid)
    return _error_response(500, payload, rid)
