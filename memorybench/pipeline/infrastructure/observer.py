"""StructlogPipelineObserver — production observer that delegates to structlog."""

from pathlib import Path

import structlog


class StructlogPipelineObserver:
    """Logs pipeline events to structlog.

    Does NOT inherit from PipelineObserver (structural typing via Protocol).
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def run_started(
        self, run_id: str, benchmark: str, provider: str, total_items: int
    ) -> None:
        self._log.info(
            "pipeline.run_started",
            run_id=run_id,
            benchmark=benchmark,
            provider=provider,
            total_items=total_items,
        )

    def phase_started(
        self, run_id: str, phase: str, total: int, resume_from: int
    ) -> None:
        self._log.info(
            "pipeline.phase_started",
            run_id=run_id,
            phase=str(phase),
            total=total,
            resume_from=resume_from,
        )

    def phase_skipped(self, run_id: str, phase: str) -> None:
        self._log.info("pipeline.phase_skipped", run_id=run_id, phase=str(phase))

    def phase_progress(
        self, run_id: str, phase: str, completed: int, total: int
    ) -> None:
        self._log.debug(
            "pipeline.phase_progress",
            run_id=run_id,
            phase=str(phase),
            completed=completed,
            total=total,
            percent=round(100.0 * completed / total, 1) if total else 0.0,
        )

    def phase_completed(
        self,
        run_id: str,
        phase: str,
        processed: int,
        failed: int,
        elapsed_seconds: float,
    ) -> None:
        self._log.info(
            "pipeline.phase_completed",
            run_id=run_id,
            phase=str(phase),
            processed=processed,
            failed=failed,
            elapsed_seconds=round(elapsed_seconds, 2),
        )

    def item_failed(self, run_id: str, phase: str, item_id: str, reason: str) -> None:
        self._log.warning(
            "pipeline.item_failed",
            run_id=run_id,
            phase=str(phase),
            item_id=item_id,
            reason=reason,
        )

    def report_written(
        self,
        run_id: str,
        answering_model: str,
        judge_model: str,
        accuracy: float,
        path: Path,
    ) -> None:
        self._log.info(
            "pipeline.report_written",
            run_id=run_id,
            answering_model=answering_model,
            judge_model=judge_model,
            accuracy=accuracy,
            path=str(path),
        )

    def run_completed(
        self, run_id: str, reports: int, elapsed_seconds: float
    ) -> None:
        self._log.info(
            "pipeline.run_completed",
            run_id=run_id,
            reports=reports,
            elapsed_seconds=round(elapsed_seconds, 2),
        )

    def run_failed(self, run_id: str, reason: str) -> None:
        self._log.error("pipeline.run_failed", run_id=run_id, reason=reason)

    def container_cleanup_completed(
        self, run_id: str, deleted: int, failed: int
    ) -> None:
        self._log.info(
            "pipeline.cleanup_completed", run_id=run_id, deleted=deleted, failed=failed
        )
