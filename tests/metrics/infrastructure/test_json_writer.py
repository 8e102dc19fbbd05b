"""Tests for JsonReportWriter."""

import json
from datetime import UTC, datetime
from pathlib import Path

import pytest

from memorybench.metrics.domain.report import Report, ReportMetadata, ReportSummary
from memorybench.metrics.infrastructure.errors import ReportWriteError
from memorybench.metrics.infrastructure.json_writer import JsonReportWriter, report_path


def _make_report(answering_model: str = "openai/gpt-4o") -> Report:
    return Report(
        metadata=ReportMetadata(
            run_id="run-1",
            benchmark="locomo",
            provider_name="fake",
            answering_model=answering_model,
            judge_model="gpt-4o-mini",
            evaluated_at=datetime(2024, 1, 1, tzinfo=UTC),
        ),
        summary=ReportSummary(total=10, correct=7, accuracy=70.0, macro_accuracy=70.0),
    )


class TestJsonReportWriter:
    def test_writes_under_run_reports_directory(self, tmp_path: Path) -> None:
        path = JsonReportWriter(tmp_path).write(_make_report())

        assert path == tmp_path / "run-1" / "reports" / "eval-answer_openai-gpt-4o-judge_gpt-4o-mini.json"
        assert path == report_path(tmp_path, "run-1", "openai/gpt-4o", "gpt-4o-mini")
        assert path.exists()

    def test_file_is_camel_case_json(self, tmp_path: Path) -> None:
        path = JsonReportWriter(tmp_path).write(_make_report())

        data = json.loads(path.read_text())

        assert data["metadata"]["runId"] == "run-1"
        assert data["summary"]["macroAccuracy"] == 70.0
        assert data["byCategory"] == []
        assert Report.model_validate(data) == _make_report()

    def test_unwritable_root_raises(self, tmp_path: Path) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("x")

        with pytest.raises(ReportWriteError):
            JsonReportWriter(blocker).write(_make_report())
