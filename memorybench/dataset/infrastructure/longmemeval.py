"""LongMemEval loader — one item per question, one document per haystack session."""

import json
from typing import Any

from memorybench.config.domain.benchmark import BenchmarkConfig
from memorybench.dataset.domain.item import DatasetItem, SourceDocument
from memorybench.dataset.domain.observer import DatasetObserver
from memorybench.dataset.domain.selection import select_items
from memorybench.dataset.infrastructure.errors import DatasetLoadError
from memorybench.dataset.infrastructure.files import read_json_list

BENCHMARK_NAME = "longmemeval"

_REQUIRED_KEYS = (
    "question_id",
    "question_type",
    "question",
    "answer",
    "haystack_dates",
    "haystack_sessions",
)


class LongMemEvalLoader:
    """Loads a LongMemEval JSON file (e.g. longmemeval_s.json).

    Each session is rendered with its date header and the turns serialized as
    JSON, with angle brackets escaped so providers that parse markup leave the
    text alone.
    When the record lists haystack_session_ids each document carries its
    session id, and answer_session_ids become the item's evidence ids.
    """

    def __init__(self, observer: DatasetObserver) -> None:
        self._observer = observer

    def load(self, config: BenchmarkConfig) -> list[DatasetItem]:
        path = str(config.path)
        self._observer.dataset_loading_started(benchmark=BENCHMARK_NAME, path=path)
        try:
            records = read_json_list(config.path)
            items = [
                _parse_record(record=record, index=index)
                for index, record in enumerate(records)
            ]
        except DatasetLoadError as exc:
            self._observer.dataset_loading_failed(
                benchmark=BENCHMARK_NAME, path=path, reason=str(exc)
            )
            raise

        selected = select_items(
            items=items, limit=config.limit, categories=config.categories
        )
        self._observer.dataset_loading_completed(
            benchmark=BENCHMARK_NAME, path=path, total_items=len(selected)
        )
        return selected


def render_session(date: str, turns: list[Any]) -> str:
    session_json = json.dumps(turns).replace("<", "\\<").replace(">", "\\>")
    return (
        f"Here is the date the following session took place: {json.dumps(date)}\n\n"
        f"Here is the session as a stringified JSON:\n{session_json}"
    )


def _parse_record(record: Any, index: int) -> DatasetItem:
    if not isinstance(record, dict):
        raise DatasetLoadError(reason=f"record {index}: expected an object")
    missing = [key for key in _REQUIRED_KEYS if key not in record]
    if missing:
        raise DatasetLoadError(
            reason=f"record {index}: missing keys: {', '.join(missing)}"
        )

    dates: list[str] = record["haystack_dates"]
    sessions: list[list[Any]] = record["haystack_sessions"]
    session_ids: list[Any] = record.get("haystack_session_ids") or []
    documents: list[SourceDocument] = []
    for session_index, (date, turns) in enumerate(zip(dates, sessions)):
        metadata: dict[str, str | int | float | bool] = {"session_index": session_index}
        if session_index < len(session_ids):
            metadata["sessionId"] = str(session_ids[session_index])
        documents.append(
            SourceDocument(
                content=render_session(date=date, turns=turns),
                date=date,
                metadata=metadata,
            )
        )

    return DatasetItem(
        item_id=str(record["question_id"]),
        question=str(record["question"]),
        answer=str(record["answer"]),
        category=str(record["question_type"]),
        question_date=record.get("question_date"),
        documents=documents,
        evidence_ids=[str(session) for session in record.get("answer_session_ids") or []],
    )
