"""Checkpoint — durable per-phase progress record of one run."""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field

from memorybench.checkpoint.domain.errors import CheckpointRegressionError
from memorybench.core.models import CAMEL_FROZEN


def _now() -> datetime:
    return datetime.now(UTC)


class FailureEntry(BaseModel):
    model_config = CAMEL_FROZEN

    item_id: str
    error: str


class Checkpoint(BaseModel):
    """Progress of one phase of one run.

    Sequential phases (ingest, search) move forward one index at a time with
    advance(). Phases keyed by item identity (evaluation) use mark_processed()
    and record_failure(), which may leave gaps; should_skip() answers whether
    an item is already done. In both cases last_processed_index never
    decreases.

    Instances are immutable; every update returns a new Checkpoint.
    """

    model_config = CAMEL_FROZEN

    run_id: str
    provider_name: str
    phase: str
    last_processed_index: int = Field(default=-1, ge=-1)
    processed_ids: list[str] = Field(default_factory=list)
    accumulated_results: list[dict[str, Any]] = Field(default_factory=list)
    failures: list[FailureEntry] = Field(default_factory=list)
    counters: dict[str, int] = Field(default_factory=dict)
    timestamp: datetime = Field(default_factory=_now)

    @classmethod
    def start(cls, run_id: str, provider_name: str, phase: str) -> "Checkpoint":
        return cls(run_id=run_id, provider_name=provider_name, phase=phase)

    @property
    def next_index(self) -> int:
        return self.last_processed_index + 1

    def is_complete(self, total: int) -> bool:
        return self.last_processed_index >= total - 1

    def advance(
        self,
        index: int,
        item_id: str,
        result: dict[str, Any] | None = None,
        failure: str | None = None,
        counters: dict[str, int] | None = None,
    ) -> "Checkpoint":
        """Record index as processed; it must be exactly last_processed_index + 1.

        Raises:
            CheckpointRegressionError: if index is not the next index.
        """
        if index != self.next_index:
            raise CheckpointRegressionError(
                phase=self.phase,
                last_processed_index=self.last_processed_index,
                index=index,
            )
        failures = list(self.failures)
        if failure is not None:
            failures.append(FailureEntry(item_id=item_id, error=failure))
        return self.model_copy(
            update={
                "last_processed_index": index,
                "processed_ids": [*self.processed_ids, item_id],
                "accumulated_results": (
                    [*self.accumulated_results, result]
                    if result is not None
                    else self.accumulated_results
                ),
                "failures": failures,
                "counters": _bump(self.counters, counters),
                "timestamp": _now(),
            }
        )

    def mark_processed(
        self, index: int, item_id: str, result: dict[str, Any]
    ) -> "Checkpoint":
        """Record item_id as done with result, clearing any earlier failure for it."""
        return self.model_copy(
            update={
                "last_processed_index": max(self.last_processed_index, index),
                "processed_ids": [*self.processed_ids, item_id],
                "accumulated_results": [*self.accumulated_results, result],
                "failures": [f for f in self.failures if f.item_id != item_id],
                "timestamp": _now(),
            }
        )

    def record_failure(self, index: int, item_id: str, error: str) -> "Checkpoint":
        """Record that item_id failed; it stays unprocessed so a resume retries it."""
        failures = [f for f in self.failures if f.item_id != item_id]
        failures.append(FailureEntry(item_id=item_id, error=error))
        return self.model_copy(
            update={
                "last_processed_index": max(self.last_processed_index, index),
                "failures": failures,
                "timestamp": _now(),
            }
        )


def should_skip(checkpoint: Checkpoint | None, item_id: str) -> bool:
    """Return True when checkpoint already records item_id as processed."""
    return checkpoint is not None and item_id in checkpoint.processed_ids


def _bump(current: dict[str, int], increments: dict[str, int] | None) -> dict[str, int]:
    if not increments:
        return current
    merged = dict(current)
    for key, value in increments.items():
        merged[key] = merged.get(key, 0) + value
    return merged
