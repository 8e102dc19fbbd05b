"""CompositePipelineObserver — fans out all events to a list of observers."""

from pathlib import Path

from memorybench.pipeline.domain.observer import PipelineObserver


class CompositePipelineObserver:
    """Delegates every observer event to each observer in order.

    Does NOT inherit from PipelineObserver (structural typing via Protocol).
    """

    def __init__(self, observers: list[PipelineObserver]) -> None:
        self._observers = observers

    def run_started(
        self, run_id: str, benchmark: str, provider: str, total_items: int
    ) -> None:
        for obs in self._observers:
            obs.run_started(
                run_id=run_id,
                benchmark=benchmark,
                provider=provider,
                total_items=total_items,
            )

    def phase_started(
        self, run_id: str, phase: str, total: int, resume_from: int
    ) -> None:
        for obs in self._observers:
            obs.phase_started(
                run_id=run_id, phase=phase, total=total, resume_from=resume_from
            )

    def phase_skipped(self, run_id: str, phase: str) -> None:
        for obs in self._observers:
            obs.phase_skipped(run_id=run_id, phase=phase)

    def phase_progress(
        self, run_id: str, phase: str, completed: int, total: int
    ) -> None:
        for obs in self._observers:
            obs.phase_progress(
                run_id=run_id, phase=phase, completed=completed, total=total
            )

    def phase_completed(
        self,
        run_id: str,
        phase: str,
        processed: int,
        failed: int,
        elapsed_seconds: float,
    ) -> None:
        for obs in self._observers:
            obs.phase_completed(
                run_id=run_id,
                phase=phase,
                processed=processed,
                failed=failed,
                elapsed_seconds=elapsed_seconds,
            )

    def item_failed(self, run_id: str, phase: str, item_id: str, reason: str) -> None:
        for obs in self._observers:
            obs.item_failed(run_id=run_id, phase=phase, item_id=item_id, reason=reason)

    def report_written(
        self,
        run_id: str,
        answering_model: str,
        judge_model: str,
        accuracy: float,
        path: Path,
    ) -> None:
        for obs in self._observers:
            obs.report_written(
                run_id=run_id,
                answering_model=answering_model,
                judge_model=judge_model,
                accuracy=accuracy,
                path=path,
            )

    def run_completed(
        self, run_id: str, reports: int, elapsed_seconds: float
    ) -> None:
        for obs in self._observers:
            obs.run_completed(
                run_id=run_id, reports=reports, elapsed_seconds=elapsed_seconds
            )

    def run_failed(self, run_id: str, reason: str) -> None:
        for obs in self._observers:
            obs.run_failed(run_id=run_id, reason=reason)

    def container_cleanup_completed(
        self, run_id: str, deleted: int, failed: int
    ) -> None:
        for obs in self._observers:
            obs.container_cleanup_completed(run_id=run_id, deleted=deleted, failed=failed)
