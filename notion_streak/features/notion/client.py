"""Thin async client for the Notion database query endpoint."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from notion_streak.core.errors import SourceUnavailableError

logger = logging.getLogger("notion_streak")

NOTION_API_URL = "https://api.notion.com/v1"
NOTION_VERSION = "2022-06-28"
NOTION_TIMEOUT_SECONDS = 10.0


class NotionClient:
    """Issues `databases/{id}/query` calls with a bearer token.

    Every failure mode (transport, non-2xx, bad JSON) is raised as
    SourceUnavailableError so callers only handle one type.
    """

    def __init__(
        self,
        token: str,
        *,
        base_url: str = NOTION_API_URL,
        notion_version: str = NOTION_VERSION,
        timeout: float = NOTION_TIMEOUT_SECONDS,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self._token = token
        self._base_url = base_url.rstrip("/")
        self._notion_version = notion_version
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=timeout)

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self._token}",
            "Notion-Version": self._notion_version,
            "Content-Type": "application/json",
        }

    async def query_database(
        self,
        database_id: str,
        *,
        start_cursor: Optional[str] = None,
        page_size: int = 100,
        sorts: Optional[List[Dict[str, str]]] = None,
    ) -> Dict[str, Any]:
        body: Dict[str, Any] = {"page_size": page_size}
        if sorts:
            body["sorts"] = sorts
        if start_cursor:
            body["start_cursor"] = start_cursor

        url = f"{self._base_url}/databases/{database_id}/query"
        try:
            response = await self._client.post(url, json=body, headers=self._headers())
        except httpx.HTTPError as exc:
            raise SourceUnavailableError(f"Notion query failed: {exc.__class__.__name__}: {exc}", cause=exc) from exc

        if response.status_code >= 400:
            raise SourceUnavailableError(
                f"Notion query failed with status {response.status_code}: {_error_detail(response)}",
                status=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise SourceUnavailableError("Notion query returned a non-JSON body", cause=exc, status=response.status_code) from exc
        if not isinstance(payload, dict):
            raise SourceUnavailableError("Notion query returned an unexpected payload", status=response.status_code)
        return payload

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text[:200] or "no body"
    if isinstance(body, dict):
        code = body.get("code")
        message = body.get("message")
        if code or message:
            return f"{code or 'error'}: {message or ''}".strip()
    return str(body)[:200]
