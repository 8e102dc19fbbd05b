"""RetryPolicy and RetryOutcome — value objects describing bounded exponential backoff."""

from dataclasses import dataclass

from pydantic import BaseModel, Field

from memorybench.core.errors import MemoryBenchError
from memorybench.retry.domain.wait import looks_rate_limited, suggested_wait_seconds


class RetryPolicy(BaseModel, frozen=True):
    """How many times to attempt an operation and how long to wait in between.

    Delays grow geometrically from initial_backoff_seconds by backoff_multiplier
    and are capped at max_backoff_seconds. When a rate-limit error names a wait
    ("try again in 12s"), that wait plus one second is used instead, under the
    same cap. Durations in other errors ("timed out after 600 seconds") are
    not waits.
    """

    max_attempts: int = Field(default=5, ge=1)
    initial_backoff_seconds: float = Field(default=1.0, ge=0)
    backoff_multiplier: float = Field(default=2.0, ge=1)
    max_backoff_seconds: float = Field(default=60.0, ge=0)

    def backoff_for(self, attempt: int) -> float:
        """Return the exponential delay to wait after the given failed attempt (1-based)."""
        delay = self.initial_backoff_seconds * self.backoff_multiplier ** (attempt - 1)
        return min(delay, self.max_backoff_seconds)

    def delay_for(self, attempt: int, reason: str) -> float:
        """Return the delay after a failed attempt, honoring a rate limiter's suggested wait."""
        suggested = suggested_wait_seconds(reason) if looks_rate_limited(reason) else None
        if suggested is not None:
            return min(suggested + 1.0, self.max_backoff_seconds)
        return self.backoff_for(attempt)


@dataclass(frozen=True)
class Succeeded[T]:
    value: T
    attempts: int


@dataclass(frozen=True)
class Failed:
    """The operation did not succeed.

    error.retriable is True when retries were exhausted, False when the first
    non-retriable error stopped the loop.
    """

    operation: str
    error: MemoryBenchError
    attempts: int


type RetryOutcome[T] = Succeeded[T] | Failed
