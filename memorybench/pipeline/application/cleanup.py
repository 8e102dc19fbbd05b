"""ContainerCleanup — deletes the provider containers a run ingested."""

from functools import partial

from memorybench.checkpoint.domain.store import CheckpointStore
from memorybench.pipeline.application.calls import PacedCaller, truncate_reason
from memorybench.pipeline.domain.errors import PrerequisitePhaseIncompleteError
from memorybench.pipeline.domain.observer import PipelineObserver
from memorybench.pipeline.domain.records import IngestRecord
from memorybench.pipeline.domain.state import Phase
from memorybench.provider.domain.provider import MemoryProvider
from memorybench.retry.domain.policy import Failed

CLEANUP_PHASE = "cleanup"


class ContainerCleanup:
    def __init__(
        self,
        provider: MemoryProvider,
        store: CheckpointStore,
        caller: PacedCaller,
        observer: PipelineObserver,
    ) -> None:
        self._provider = provider
        self._store = store
        self._caller = caller
        self._observer = observer

    async def run(self, run_id: str) -> list[str]:
        """Delete every container recorded in the run's ingest checkpoint.

        A container that cannot be deleted is reported and skipped. Returns
        the tags that were deleted.

        Raises:
            PrerequisitePhaseIncompleteError: if the run has no ingest checkpoint.
        """
        checkpoint = self._store.load(run_id, Phase.INGEST)
        if checkpoint is None:
            raise PrerequisitePhaseIncompleteError(
                phase=CLEANUP_PHASE,
                prerequisite=Phase.INGEST,
                detail=f"no ingest checkpoint for run {run_id!r}",
            )
        tags = [
            IngestRecord.model_validate(raw).container_tag
            for raw in checkpoint.accumulated_results
        ]

        deleted: list[str] = []
        await self._provider.initialize()
        try:
            for tag in tags:
                outcome = await self._caller.call(
                    partial(self._provider.delete_container, tag), "delete container"
                )
                if isinstance(outcome, Failed):
                    self._observer.item_failed(
                        run_id=run_id,
                        phase=CLEANUP_PHASE,
                        item_id=tag,
                        reason=truncate_reason(str(outcome.error)),
                    )
                    continue
                deleted.append(tag)
        finally:
            await self._provider.close()

        self._observer.container_cleanup_completed(
            run_id=run_id, deleted=len(deleted), failed=len(tags) - len(deleted)
        )
        return deleted
