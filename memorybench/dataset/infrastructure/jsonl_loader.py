"""JSONL dataset loader — reads a generic benchmark file, one question per line."""

import json
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from memorybench.config.domain.benchmark import BenchmarkConfig
from memorybench.dataset.domain.item import DatasetItem, SourceDocument
from memorybench.dataset.domain.observer import DatasetObserver
from memorybench.dataset.domain.selection import select_items
from memorybench.dataset.infrastructure.errors import DatasetLoadError

BENCHMARK_NAME = "jsonl"


class _JsonlRecord(BaseModel, frozen=True):
    id: str = Field(min_length=1)
    question: str
    answer: str
    category: str | None = None
    question_date: str | None = None
    container_id: str | None = None
    documents: list[SourceDocument] = Field(default_factory=list)
    evidence_ids: list[str] = Field(default_factory=list)


class JsonlDatasetLoader:
    """Loads a JSONL file whose lines each describe one question and its documents."""

    def __init__(self, observer: DatasetObserver) -> None:
        self._observer = observer

    def load(self, config: BenchmarkConfig) -> list[DatasetItem]:
        """
        Load all items from the JSONL file described by config.

        Collects ALL per-line errors before raising a single DatasetLoadError
        listing every issue found.

        Raises:
            DatasetLoadError: if the file is not found or any line is invalid.
        """
        path_str = str(config.path)
        self._observer.dataset_loading_started(benchmark=BENCHMARK_NAME, path=path_str)

        try:
            lines = self._read_lines(path=config.path)
        except FileNotFoundError as exc:
            reason = f"file not found: {path_str}"
            self._observer.dataset_loading_failed(
                benchmark=BENCHMARK_NAME, path=path_str, reason=reason
            )
            raise DatasetLoadError(reason=reason) from exc

        items, errors = self._parse_lines(lines=lines)
        if errors:
            reason = "; ".join(errors)
            self._observer.dataset_loading_failed(
                benchmark=BENCHMARK_NAME, path=path_str, reason=reason
            )
            raise DatasetLoadError(reason=reason)

        selected = select_items(
            items=items, limit=config.limit, categories=config.categories
        )
        self._observer.dataset_loading_completed(
            benchmark=BENCHMARK_NAME, path=path_str, total_items=len(selected)
        )
        return selected

    def _read_lines(self, path: Path) -> list[tuple[int, str]]:
        """Return (line_number, text) for every non-empty line."""
        with open(path, encoding="utf-8") as fh:
            return [(number, line) for number, line in enumerate(fh, 1) if line.strip()]

    def _parse_lines(
        self, lines: list[tuple[int, str]]
    ) -> tuple[list[DatasetItem], list[str]]:
        items: list[DatasetItem] = []
        errors: list[str] = []
        seen: set[str] = set()

        for number, line in lines:
            try:
                record = _JsonlRecord.model_validate(json.loads(line))
            except json.JSONDecodeError as exc:
                errors.append(f"line {number}: invalid JSON ({exc.msg})")
                continue
            except ValidationError as exc:
                fields = ", ".join(
                    ".".join(str(part) for part in error["loc"]) for error in exc.errors()
                )
                errors.append(f"line {number}: invalid fields: {fields}")
                continue

            if record.id in seen:
                errors.append(f"line {number}: duplicate id '{record.id}'")
                continue
            seen.add(record.id)
            items.append(
                DatasetItem(
                    item_id=record.id,
                    question=record.question,
                    answer=record.answer,
                    category=record.category,
                    question_date=record.question_date,
                    container_id=record.container_id,
                    documents=record.documents,
                    evidence_ids=record.evidence_ids,
                )
            )

        return items, errors
