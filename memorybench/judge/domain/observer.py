"""Observer port for the judge domain — defines events in domain language."""

from typing import Protocol


class JudgeObserver(Protocol):
    def judge_started(self, item_id: str, model: str, rubric: str) -> None: ...

    def judge_completed(self, item_id: str, correct: bool, method: str) -> None: ...

    def judge_verdict_fallback(self, item_id: str, method: str, raw_preview: str) -> None: ...

    def judge_failed(self, item_id: str, reason: str) -> None: ...
