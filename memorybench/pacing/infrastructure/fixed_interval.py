"""FixedIntervalPacer — enforces a minimum spacing between outbound calls."""

import asyncio
import time
from collections.abc import Awaitable, Callable


class FixedIntervalPacer:
    """Sleeps just long enough that consecutive wait() calls are interval_seconds apart.

    The first call never sleeps. Time spent doing work between calls counts
    towards the interval. Satisfies the Pacer protocol structurally.
    """

    def __init__(
        self,
        interval_seconds: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if interval_seconds < 0:
            raise ValueError("interval_seconds must be >= 0")
        self._interval = interval_seconds
        self._clock = clock
        self._sleep = sleep
        self._last_release: float | None = None

    @property
    def interval_seconds(self) -> float:
        return self._interval

    async def wait(self) -> None:
        if self._last_release is not None:
            remaining = self._interval - (self._clock() - self._last_release)
            if remaining > 0:
                await self._sleep(remaining)
        self._last_release = self._clock()
