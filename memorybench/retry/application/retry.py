"""run_with_retry — generic retry wrapper returning a RetryOutcome instead of raising."""

import asyncio
from collections.abc import Awaitable, Callable

from memorybench.core.errors import MemoryBenchError
from memorybench.retry.domain.observer import RetryObserver
from memorybench.retry.domain.policy import Failed, RetryOutcome, RetryPolicy, Succeeded

type Sleep = Callable[[float], Awaitable[None]]


async def run_with_retry[T](
    operation: Callable[[], Awaitable[T]],
    policy: RetryPolicy,
    observer: RetryObserver,
    operation_name: str,
    sleep: Sleep = asyncio.sleep,
) -> RetryOutcome[T]:
    """Call operation until it succeeds, fails fatally, or attempts run out.

    Only MemoryBenchError is treated as an expected failure: retriable errors
    are retried after the policy's delay, non-retriable errors stop the loop at
    once. Any other exception is a bug and propagates unchanged.
    """
    for attempt in range(1, policy.max_attempts + 1):
        try:
            value = await operation()
        except MemoryBenchError as exc:
            reason = str(exc)
            if not exc.retriable or attempt == policy.max_attempts:
                observer.retry_failed(
                    operation=operation_name,
                    attempts=attempt,
                    reason=reason,
                    retriable=exc.retriable,
                )
                return Failed(operation=operation_name, error=exc, attempts=attempt)

            delay = policy.delay_for(attempt=attempt, reason=reason)
            observer.retry_scheduled(
                operation=operation_name,
                attempt=attempt,
                reason=reason,
                delay_seconds=delay,
            )
            await sleep(delay)
            continue

        return Succeeded(value=value, attempts=attempt)

    # max_attempts >= 1 guarantees the loop returns.
    raise AssertionError("unreachable")
