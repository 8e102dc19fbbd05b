"""ProgressPipelineObserver — renders one Rich progress bar per phase to stderr."""

from pathlib import Path

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
    TimeRemainingColumn,
)

# Rich markup colours cycled across phase rows.
_PHASE_COLORS: list[str] = ["cyan", "green", "yellow", "magenta", "blue"]


def _make_progress(console: Console) -> Progress:
    return Progress(
        TextColumn("{task.description}"),
        BarColumn(bar_width=40, complete_style="bright_green"),
        MofNCompleteColumn(),
        TextColumn("{task.fields[failed]}"),
        TimeElapsedColumn(),
        TextColumn("eta"),
        TimeRemainingColumn(),
        console=console,
        refresh_per_second=10,
        transient=False,
    )


class ProgressPipelineObserver:
    """Adds a row per phase when it starts and advances it on progress events.

    Rows of resumed phases start at the resume position. Only run_started,
    phase_started, phase_progress, item_failed and run_completed produce
    output; all other events are no-ops.

    Pass ``disabled=True`` to suppress all terminal output (useful in tests).

    Does NOT inherit from PipelineObserver (structural typing via Protocol).
    """

    def __init__(self, disabled: bool = False) -> None:
        self._disabled = disabled
        self._progress: Progress | None = None
        self._task_ids: dict[str, TaskID] = {}
        self._failed: dict[str, int] = {}

    def _failed_label(self, phase: str) -> str:
        count = self._failed.get(phase, 0)
        return f"[red]{count} failed[/red]" if count else ""

    def run_started(
        self, run_id: str, benchmark: str, provider: str, total_items: int
    ) -> None:
        self._task_ids = {}
        self._failed = {}
        if self._disabled:
            return
        self._progress = _make_progress(console=Console(stderr=True))
        self._progress.start()

    def phase_started(
        self, run_id: str, phase: str, total: int, resume_from: int
    ) -> None:
        self._failed[phase] = 0
        if self._progress is None:
            return
        color = _PHASE_COLORS[len(self._task_ids) % len(_PHASE_COLORS)]
        self._task_ids[phase] = self._progress.add_task(
            description=f"[{color}]{phase}[/{color}]",
            total=float(total),
            completed=float(resume_from),
            failed="",
        )

    def phase_skipped(self, run_id: str, phase: str) -> None:
        pass

    def phase_progress(
        self, run_id: str, phase: str, completed: int, total: int
    ) -> None:
        if self._progress is None or phase not in self._task_ids:
            return
        self._progress.update(
            self._task_ids[phase],
            completed=float(completed),
            failed=self._failed_label(phase),
        )

    def phase_completed(
        self,
        run_id: str,
        phase: str,
        processed: int,
        failed: int,
        elapsed_seconds: float,
    ) -> None:
        pass

    def item_failed(self, run_id: str, phase: str, item_id: str, reason: str) -> None:
        self._failed[phase] = self._failed.get(phase, 0) + 1

    def report_written(
        self,
        run_id: str,
        answering_model: str,
        judge_model: str,
        accuracy: float,
        path: Path,
    ) -> None:
        pass

    def run_completed(
        self, run_id: str, reports: int, elapsed_seconds: float
    ) -> None:
        if self._progress is not None:
            self._progress.stop()
        self._progress = None
        self._task_ids = {}

    def run_failed(self, run_id: str, reason: str) -> None:
        self.run_completed(run_id=run_id, reports=0, elapsed_seconds=0.0)

    def container_cleanup_completed(
        self, run_id: str, deleted: int, failed: int
    ) -> None:
        pass
