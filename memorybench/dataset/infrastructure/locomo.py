"""LoCoMo loader — one item per QA pair, all pairs of a sample share its conversation."""

import re
from typing import Any

from memorybench.config.domain.benchmark import BenchmarkConfig
from memorybench.dataset.domain.item import DatasetItem, SourceDocument
from memorybench.dataset.domain.observer import DatasetObserver
from memorybench.dataset.domain.selection import select_items
from memorybench.dataset.infrastructure.errors import DatasetLoadError
from memorybench.dataset.infrastructure.files import read_json_list

BENCHMARK_NAME = "locomo"

CATEGORY_NAMES: dict[int, str] = {
    1: "multi-hop",
    2: "temporal",
    3: "open-domain",
    4: "single-hop",
    5: "adversarial",
}

_SESSION_KEY = re.compile(r"^session_(\d+)$")
# Dialog ids look like "D3:12", session 3 turn 12.
_EVIDENCE_SESSION = re.compile(r"\bD(\d+):")


class LoCoMoLoader:
    """Loads the LoCoMo conversation file (locomo10.json)."""

    def __init__(self, observer: DatasetObserver) -> None:
        self._observer = observer

    def load(self, config: BenchmarkConfig) -> list[DatasetItem]:
        path = str(config.path)
        self._observer.dataset_loading_started(benchmark=BENCHMARK_NAME, path=path)
        try:
            samples = read_json_list(config.path)
            items: list[DatasetItem] = []
            for index, sample in enumerate(samples):
                items.extend(_parse_sample(sample=sample, index=index))
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


def render_session(
    date_time: str, speaker_a: str, speaker_b: str, turns: list[dict[str, Any]]
) -> str:
    lines = [
        f"Session Date/Time: {date_time}",
        "",
        f"Participants: {speaker_a} and {speaker_b}",
        "",
        "Conversation:",
    ]
    for turn in turns:
        line = f"{turn.get('speaker', '')}: {turn.get('text', '')}"
        caption = turn.get("blip_caption")
        if caption:
            line += f" [shared image: {caption}]"
        lines.append(line)
    return "\n".join(lines) + "\n"


def session_id(number: int) -> str:
    return f"D{number}"


def evidence_sessions(evidence: Any) -> list[str]:
    """Session ids cited by a QA pair's dialog-level evidence, first-seen order."""
    if not isinstance(evidence, list):
        return []
    found: dict[str, None] = {}
    for entry in evidence:
        for match in _EVIDENCE_SESSION.finditer(str(entry)):
            found.setdefault(session_id(int(match.group(1))), None)
    return list(found)


def _session_documents(conversation: dict[str, Any]) -> list[SourceDocument]:
    numbered = sorted(
        (int(match.group(1)), key)
        for key in conversation
        if (match := _SESSION_KEY.match(key))
    )
    speaker_a = str(conversation.get("speaker_a", "Speaker A"))
    speaker_b = str(conversation.get("speaker_b", "Speaker B"))

    documents: list[SourceDocument] = []
    for number, key in numbered:
        turns = conversation[key]
        if not turns:
            continue
        date_time = str(conversation.get(f"{key}_date_time", ""))
        documents.append(
            SourceDocument(
                content=render_session(
                    date_time=date_time,
                    speaker_a=speaker_a,
                    speaker_b=speaker_b,
                    turns=turns,
                ),
                date=date_time or None,
                metadata={"session": number, "sessionId": session_id(number)},
            )
        )
    return documents


def _parse_sample(sample: Any, index: int) -> list[DatasetItem]:
    if not isinstance(sample, dict) or "sample_id" not in sample:
        raise DatasetLoadError(reason=f"sample {index}: missing sample_id")
    sample_id = str(sample["sample_id"])
    conversation = sample.get("conversation")
    if not isinstance(conversation, dict):
        raise DatasetLoadError(reason=f"sample {sample_id}: missing conversation")

    documents = _session_documents(conversation)
    items: list[DatasetItem] = []
    for qa_index, qa in enumerate(sample.get("qa", [])):
        answer = qa.get("answer")
        if answer is None:
            answer = qa.get("adversarial_answer", "")
        category = qa.get("category")
        items.append(
            DatasetItem(
                item_id=f"{sample_id}-q{qa_index}",
                question=str(qa.get("question", "")),
                answer=str(answer),
                category=CATEGORY_NAMES.get(category, str(category)),
                container_id=sample_id,
                documents=documents,
                evidence_ids=evidence_sessions(qa.get("evidence")),
            )
        )
    return items
