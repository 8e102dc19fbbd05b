"""IngestPhase — loads every ingest unit's documents into its provider container."""

import time
from datetime import UTC, datetime
from functools import partial

from memorybench.checkpoint.domain.cadence import SaveCadence
from memorybench.checkpoint.domain.checkpoint import Checkpoint
from memorybench.checkpoint.domain.store import CheckpointStore
from memorybench.dataset.domain.item import SourceDocument
from memorybench.pipeline.application.calls import PacedCaller, truncate_reason
from memorybench.pipeline.domain.container import IngestUnit
from memorybench.pipeline.domain.errors import IngestAbortedError
from memorybench.pipeline.domain.observer import PipelineObserver
from memorybench.pipeline.domain.records import IngestRecord
from memorybench.pipeline.domain.state import Phase
from memorybench.provider.domain.provider import IngestOptions, MemoryProvider
from memorybench.retry.domain.policy import Failed


def ingest_options(document: SourceDocument) -> IngestOptions:
    metadata = dict(document.metadata)
    if document.date:
        metadata["documentDate"] = document.date
    return IngestOptions(metadata=metadata)


class IngestPhase:
    """Ingests units in order, resuming after the last checkpointed unit.

    A unit counts as processed only once all of its documents are ingested. If
    a provider call still fails after retries, the checkpoint is saved and the
    run aborts with IngestAbortedError; the next run with the same run id
    starts again at that unit.
    """

    def __init__(
        self,
        provider: MemoryProvider,
        store: CheckpointStore,
        caller: PacedCaller,
        observer: PipelineObserver,
        checkpoint_every: int,
    ) -> None:
        self._provider = provider
        self._store = store
        self._caller = caller
        self._observer = observer
        self._checkpoint_every = checkpoint_every

    async def run(self, run_id: str, units: list[IngestUnit]) -> Checkpoint:
        checkpoint = self._store.load(run_id, Phase.INGEST) or Checkpoint.start(
            run_id=run_id, provider_name=self._provider.name, phase=Phase.INGEST.value
        )
        total = len(units)
        self._observer.phase_started(
            run_id=run_id,
            phase=Phase.INGEST,
            total=total,
            resume_from=checkpoint.next_index,
        )
        started_at = time.monotonic()
        cadence = SaveCadence(self._checkpoint_every)
        processed = 0

        for index in range(checkpoint.next_index, total):
            unit = units[index]
            try:
                await self._ingest_unit(unit)
            except IngestAbortedError as exc:
                self._observer.item_failed(
                    run_id=run_id,
                    phase=Phase.INGEST,
                    item_id=unit.container_key,
                    reason=truncate_reason(str(exc)),
                )
                self._store.save(checkpoint)
                raise

            record = IngestRecord(
                container_key=unit.container_key,
                container_tag=unit.container_tag,
                documents=len(unit.documents),
                ingested_at=datetime.now(UTC),
            )
            checkpoint = checkpoint.advance(
                index=index,
                item_id=unit.container_tag,
                result=record.model_dump(mode="json", by_alias=True),
                counters={"documents": len(unit.documents)},
            )
            processed += 1
            if cadence.record():
                self._store.save(checkpoint)
            self._observer.phase_progress(
                run_id=run_id, phase=Phase.INGEST, completed=index + 1, total=total
            )

        self._store.save(checkpoint)
        cadence.flushed()
        self._observer.phase_completed(
            run_id=run_id,
            phase=Phase.INGEST,
            processed=processed,
            failed=0,
            elapsed_seconds=time.monotonic() - started_at,
        )
        return checkpoint

    async def _ingest_unit(self, unit: IngestUnit) -> None:
        tag = unit.container_tag
        outcome = await self._caller.call(
            partial(self._provider.prepare_container, tag), "prepare container"
        )
        if isinstance(outcome, Failed):
            raise IngestAbortedError(container_tag=tag, reason=str(outcome.error))

        for document in unit.documents:
            options = ingest_options(document)
            outcome = await self._caller.call(
                partial(self._provider.ingest, document.content, tag, options),
                "ingest document",
            )
            if isinstance(outcome, Failed):
                raise IngestAbortedError(container_tag=tag, reason=str(outcome.error))
