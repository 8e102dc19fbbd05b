"""SearchPhase — retrieves results for every item from its container."""

import time
from datetime import UTC, datetime
from functools import partial

from memorybench.checkpoint.domain.cadence import SaveCadence
from memorybench.checkpoint.domain.checkpoint import Checkpoint
from memorybench.checkpoint.domain.store import CheckpointStore
from memorybench.dataset.domain.item import DatasetItem
from memorybench.pipeline.application.calls import PacedCaller, truncate_reason
from memorybench.pipeline.domain.container import container_tag
from memorybench.pipeline.domain.evidence import evidence_retrieval
from memorybench.pipeline.domain.needle import retrieved_needle
from memorybench.pipeline.domain.observer import PipelineObserver
from memorybench.pipeline.domain.records import SearchRecord
from memorybench.pipeline.domain.state import Phase
from memorybench.provider.domain.provider import MemoryProvider, SearchOptions
from memorybench.retry.domain.policy import Failed


def search_records(checkpoint: Checkpoint) -> list[SearchRecord]:
    return [SearchRecord.model_validate(raw) for raw in checkpoint.accumulated_results]


class SearchPhase:
    """Searches items in order, resuming after the last checkpointed item.

    A search that still fails after retries does not stop the phase: the item
    is recorded with its error and no results, and evaluation later counts it
    as a failed answer.
    """

    def __init__(
        self,
        provider: MemoryProvider,
        store: CheckpointStore,
        caller: PacedCaller,
        observer: PipelineObserver,
        options: SearchOptions,
        checkpoint_every: int,
    ) -> None:
        self._provider = provider
        self._store = store
        self._caller = caller
        self._observer = observer
        self._options = options
        self._checkpoint_every = checkpoint_every

    async def run(self, run_id: str, items: list[DatasetItem]) -> list[SearchRecord]:
        checkpoint = self._store.load(run_id, Phase.SEARCH) or Checkpoint.start(
            run_id=run_id, provider_name=self._provider.name, phase=Phase.SEARCH.value
        )
        total = len(items)
        self._observer.phase_started(
            run_id=run_id,
            phase=Phase.SEARCH,
            total=total,
            resume_from=checkpoint.next_index,
        )
        started_at = time.monotonic()
        cadence = SaveCadence(self._checkpoint_every)
        processed = 0
        failed = 0

        for index in range(checkpoint.next_index, total):
            item = items[index]
            record = await self._search(run_id=run_id, item=item)
            if record.error is not None:
                failed += 1
                self._observer.item_failed(
                    run_id=run_id,
                    phase=Phase.SEARCH,
                    item_id=item.item_id,
                    reason=truncate_reason(record.error),
                )
            checkpoint = checkpoint.advance(
                index=index,
                item_id=item.item_id,
                result=record.model_dump(mode="json", by_alias=True),
                failure=record.error,
                counters={"failed" if record.error else "results": 1},
            )
            processed += 1
            if cadence.record():
                self._store.save(checkpoint)
            self._observer.phase_progress(
                run_id=run_id, phase=Phase.SEARCH, completed=index + 1, total=total
            )

        self._store.save(checkpoint)
        cadence.flushed()
        self._observer.phase_completed(
            run_id=run_id,
            phase=Phase.SEARCH,
            processed=processed,
            failed=failed,
            elapsed_seconds=time.monotonic() - started_at,
        )
        return search_records(checkpoint)

    async def _search(self, run_id: str, item: DatasetItem) -> SearchRecord:
        tag = container_tag(item.container_key, run_id)
        outcome = await self._caller.call(
            partial(self._provider.search, item.question, tag, self._options),
            "search memories",
        )
        searched_at = datetime.now(UTC)
        if isinstance(outcome, Failed):
            return SearchRecord(
                item_id=item.item_id,
                container_tag=tag,
                error=str(outcome.error),
                searched_at=searched_at,
            )

        results = outcome.value
        return SearchRecord(
            item_id=item.item_id,
            container_tag=tag,
            results=results,
            retrieved_needle=(
                retrieved_needle(item.needle, results) if item.needle else None
            ),
            retrieval=(
                evidence_retrieval(item.evidence_ids, results)
                if item.evidence_ids
                else None
            ),
            searched_at=searched_at,
        )
