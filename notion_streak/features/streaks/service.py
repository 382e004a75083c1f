from __future__ import annotations

import logging

from notion_streak.features.streaks.calculator import MissingPropertyPolicy, calculate_streak
from notion_streak.features.streaks.predicate import DEFAULT_FIELD
from notion_streak.features.streaks.source import RecordSource

logger = logging.getLogger("notion_streak")


class StreakService:
    """Fetches the whole database and reduces it to a streak length."""

    def __init__(
        self,
        source: RecordSource,
        *,
        field_name: str = DEFAULT_FIELD,
        missing_policy: MissingPropertyPolicy = MissingPropertyPolicy.BREAK,
    ):
        self._source = source
        self._field_name = field_name
        self._missing_policy = missing_policy

    async def compute(self) -> int:
        records = await self._source.fetch_all_records()
        streak = calculate_streak(
            records,
            field_name=self._field_name,
            missing_policy=self._missing_policy,
        )
        logger.info(
            "streak.computed",
            extra={"records": len(records), "streak": streak, "missing_policy": self._missing_policy.value},
        )
        return streak
