"""JsonReportWriter — writes Report aggregates under the run's reports directory."""

from pathlib import Path

from memorybench.metrics.domain.naming import report_filename
from memorybench.metrics.domain.report import Report
from memorybench.metrics.infrastructure.errors import ReportWriteError


def report_path(root: Path, run_id: str, answering_model: str, judge_model: str) -> Path:
    return root / run_id / "reports" / report_filename(answering_model, judge_model)


class JsonReportWriter:
    def __init__(self, root: Path) -> None:
        self._root = root

    def write(self, report: Report) -> Path:
        """Write report as camelCase JSON and return its path.

        Raises:
            ReportWriteError: if the directory or file cannot be written.
        """
        metadata = report.metadata
        path = report_path(
            self._root,
            metadata.run_id,
            metadata.answering_model,
            metadata.judge_model,
        )
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(
                report.model_dump_json(by_alias=True, indent=2), encoding="utf-8"
            )
        except OSError as exc:
            raise ReportWriteError(path=path, reason=str(exc)) from exc
        return path
