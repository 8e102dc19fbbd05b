"""Observer port for the phase pipeline — defines events in domain language."""

from pathlib import Path
from typing import Protocol


class PipelineObserver(Protocol):
    def run_started(
        self, run_id: str, benchmark: str, provider: str, total_items: int
    ) -> None: ...

    def phase_started(
        self, run_id: str, phase: str, total: int, resume_from: int
    ) -> None: ...

    def phase_skipped(self, run_id: str, phase: str) -> None: ...

    def phase_progress(
        self, run_id: str, phase: str, completed: int, total: int
    ) -> None: ...

    def phase_completed(
        self,
        run_id: str,
        phase: str,
        processed: int,
        failed: int,
        elapsed_seconds: float,
    ) -> None: ...

    def item_failed(self, run_id: str, phase: str, item_id: str, reason: str) -> None: ...

    def report_written(
        self,
        run_id: str,
        answering_model: str,
        judge_model: str,
        accuracy: float,
        path: Path,
    ) -> None: ...

    def run_completed(
        self, run_id: str, reports: int, elapsed_seconds: float
    ) -> None: ...

    def run_failed(self, run_id: str, reason: str) -> None: ...

    def container_cleanup_completed(
        self, run_id: str, deleted: int, failed: int
    ) -> None: ...
