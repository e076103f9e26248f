"""Fixed-window quota limiter backed by Redis.

Each identifier gets a counter per window.  The window index is
``now // window``, so every identifier's windows share the same boundaries.

Key layout::

    {prefix}:{identifier}:{window_index}

The first increment in a window sets the key's expiry to the window length,
so stale counters clean themselves up.  Increment and expiry run together in
one Lua script, so a counter never exists without its TTL and the count is
correct under concurrent requests for the same user.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

import redis.asyncio as aioredis

logger = logging.getLogger(__name__)

# KEYS[1] = counter key, ARGV[1] = window length in milliseconds.
FIXED_WINDOW_SCRIPT = """
local used = redis.call("INCR", KEYS[1])
if used == 1 then
    redis.call("PEXPIRE", KEYS[1], ARGV[1])
end
return used
"""


@dataclass(frozen=True)
class LimitResult:
    """Outcome of consuming one permit.

    Attributes:
        success: ``True`` if the permit was granted.
        limit: Permits per window.
        remaining: Permits left in the current window (never negative).
        reset: Epoch milliseconds at which the current window ends.
    """

    success: bool
    limit: int
    remaining: int
    reset: int


class FixedWindowRateLimiter:
    """Grant at most ``limit`` permits per identifier per window.

    Args:
        redis: Async Redis connection.
        limit: Permits per window.
        window_seconds: Window length in seconds.
        prefix: Key namespace.
        clock: Returns the current time in seconds.  Defaults to
            :func:`time.time`.
    """

    def __init__(
        self,
        redis: aioredis.Redis,
        *,
        limit: int,
        window_seconds: int,
        prefix: str,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if limit < 1:
            raise ValueError("limit must be at least 1")
        if window_seconds < 1:
            raise ValueError("window_seconds must be at least 1")
        self._script = redis.register_script(FIXED_WINDOW_SCRIPT)
        self._limit = limit
        self._window_ms = window_seconds * 1000
        self._prefix = prefix
        self._clock = clock

    def key_for(self, identifier: str, now_ms: int) -> str:
        return f"{self._prefix}:{identifier}:{now_ms // self._window_ms}"

    async def limit(self, identifier: str) -> LimitResult:
        """Consume one permit for *identifier*."""
        now_ms = int(self._clock() * 1000)
        key = self.key_for(identifier, now_ms)

        used = int(await self._script(keys=[key], args=[self._window_ms]))

        result = LimitResult(
            success=used <= self._limit,
            limit=self._limit,
            remaining=max(0, self._limit - used),
            reset=(now_ms // self._window_ms + 1) * self._window_ms,
        )
        logger.debug(f"Quota for {identifier}: used={used} remaining={result.remaining}")
        return result
