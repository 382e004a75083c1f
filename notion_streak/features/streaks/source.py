from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Protocol

from notion_streak.core.errors import SourceUnavailableError
from notion_streak.models.record import Record

logger = logging.getLogger("notion_streak")


class DatabaseQuery(Protocol):
    async def query_database(
        self,
        database_id: str,
        *,
        start_cursor: Optional[str] = None,
        page_size: int = 100,
        sorts: Optional[List[Dict[str, str]]] = None,
    ) -> Dict[str, Any]:
        ...


class RecordSource:
    """Reads every row of a database, newest first by the date property."""

    def __init__(self, client: DatabaseQuery, database_id: str, *, sort_property: str = "Date", page_size: int = 100):
        self._client = client
        self._database_id = database_id
        self._sorts = [{"property": sort_property, "direction": "descending"}]
        self._page_size = max(1, min(100, page_size))

    async def fetch_all_records(self) -> List[Record]:
        records: List[Record] = []
        cursor: Optional[str] = None
        pages = 0

        while True:
            response = await self._client.query_database(
                self._database_id,
                start_cursor=cursor,
                page_size=self._page_size,
                sorts=self._sorts,
            )
            pages += 1
            records.extend(Record.from_notion(page) for page in response.get("results") or [])

            if not response.get("has_more"):
                break
            cursor = response.get("next_cursor")
            if not cursor:
                raise SourceUnavailableError("Notion reported more results but returned no next_cursor")

        logger.info("source.fetched", extra={"pages": pages, "records": len(records)})
        return records
