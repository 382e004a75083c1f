from __future__ import annotations

from enum import Enum
from typing import Iterable

from notion_streak.features.streaks.predicate import DEFAULT_FIELD, extract_on_track
from notion_streak.models.record import OnTrack, Record


class MissingPropertyPolicy(str, Enum):
    """What a record without the tracked property does to the streak."""
    BREAK = "break"
    SKIP = "skip"


def calculate_streak(
    records: Iterable[Record],
    *,
    field_name: str = DEFAULT_FIELD,
    missing_policy: MissingPropertyPolicy = MissingPropertyPolicy.BREAK,
) -> int:
    """Count leading on-track records; `records` must be newest first."""
    streak = 0
    for record in records:
        if missing_policy is MissingPropertyPolicy.SKIP and field_name not in record.properties:
            continue
        if extract_on_track(record, field_name) is not OnTrack.ON_TRACK:
            break
        streak += 1
    return streak
