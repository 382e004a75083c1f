from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Awaitable, Callable, Optional

from notion_streak.core.errors import SourceUnavailableError
from notion_streak.core.logging import log_event

EPOCH = datetime.fromtimestamp(0, timezone.utc)
DEFAULT_TTL = timedelta(hours=1)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class StreakSnapshot:
    value: int
    computed_at: datetime

    @property
    def ever_computed(self) -> bool:
        return self.computed_at > EPOCH


class StreakCache:
    """
    Last good streak plus the time it was computed.

    Fresh reads never touch the source. Stale reads (or a forced refresh)
    recompute once under a lock; callers that queued behind an in-flight
    recompute reuse its result. A failed recompute keeps the old value and
    leaves computed_at alone, so the next request retries.
    """

    def __init__(
        self,
        compute: Callable[[], Awaitable[int]],
        *,
        ttl: timedelta = DEFAULT_TTL,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._compute = compute
        self._ttl = ttl
        self._clock = clock
        self._value = 0
        self._computed_at = EPOCH
        self._lock = asyncio.Lock()
        self._runs_started = 0

    def snapshot(self) -> StreakSnapshot:
        return StreakSnapshot(value=self._value, computed_at=self._computed_at)

    def is_fresh(self, now: Optional[datetime] = None) -> bool:
        current = now or self._clock()
        return current - self._computed_at < self._ttl

    async def get_streak(self, force_refresh: bool = False) -> int:
        # A forced refresh may only reuse a recompute that began after it was asked for.
        ticket = self._runs_started
        if force_refresh:
            self._computed_at = EPOCH
        elif self.is_fresh():
            return self._value

        async with self._lock:
            if force_refresh:
                if self._runs_started > ticket:
                    return self._value
            elif self.is_fresh():
                # Another caller refreshed while we waited.
                return self._value
            self._runs_started += 1
            await self._recompute()
        return self._value

    async def _recompute(self) -> None:
        try:
            value = await self._compute()
        except SourceUnavailableError as exc:
            log_event(
                "warning",
                "streak.refresh_failed",
                event_type="cache.refresh",
                error_code=exc.code,
                extra={"error_message": exc.message, "cached_streak": self._value},
            )
            return
        except Exception as exc:
            log_event(
                "error",
                "streak.refresh_failed",
                event_type="cache.refresh",
                error_code="compute_failed",
                extra={"error_message": repr(exc), "cached_streak": self._value},
                exc_info=True,
            )
            return

        self._value = value
        self._computed_at = self._clock()
        log_event(
            "info",
            f"Streak updated: {value}",
            event_type="cache.refresh",
            extra={"streak": value},
        )
