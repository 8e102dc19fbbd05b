"""Paced, retried provider calls shared by the pipeline phases."""

import asyncio
from collections.abc import Awaitable, Callable

from memorybench.pacing.domain.pacer import Pacer
from memorybench.retry.application.retry import Sleep, run_with_retry
from memorybench.retry.domain.observer import RetryObserver
from memorybench.retry.domain.policy import RetryOutcome, RetryPolicy

FAILURE_PREVIEW_CHARS = 80


def truncate_reason(reason: str) -> str:
    return reason[:FAILURE_PREVIEW_CHARS]


class PacedCaller:
    """Runs provider operations one at a time, spaced by the pacer and retried by policy."""

    def __init__(
        self,
        pacer: Pacer,
        retry_policy: RetryPolicy,
        retry_observer: RetryObserver,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._pacer = pacer
        self._retry_policy = retry_policy
        self._retry_observer = retry_observer
        self._sleep = sleep

    async def call[T](
        self, operation: Callable[[], Awaitable[T]], operation_name: str
    ) -> RetryOutcome[T]:
        async def paced() -> T:
            await self._pacer.wait()
            return await operation()

        return await run_with_retry(
            operation=paced,
            policy=self._retry_policy,
            observer=self._retry_observer,
            operation_name=operation_name,
            sleep=self._sleep,
        )
