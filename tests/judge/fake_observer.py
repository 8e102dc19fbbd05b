"""Fake JudgeObserver for use in tests — records events without mocking."""

from dataclasses import dataclass


@dataclass(frozen=True)
class JudgeStartedEvent:
    item_id: str
    model: str
    rubric: str


@dataclass(frozen=True)
class VerdictFallbackEvent:
    item_id: str
    method: str
    raw_preview: str


class FakeJudgeObserver:
    def __init__(self) -> None:
        self.started: list[JudgeStartedEvent] = []
        self.completed: list[dict[str, str | bool]] = []
        self.fallbacks: list[VerdictFallbackEvent] = []
        self.failed: list[str] = []

    def judge_started(self, item_id: str, model: str, rubric: str) -> None:
        self.started.append(JudgeStartedEvent(item_id=item_id, model=model, rubric=rubric))

    def judge_completed(self, item_id: str, correct: bool, method: str) -> None:
        self.completed.append({"item_id": item_id, "correct": correct, "method": method})

    def judge_verdict_fallback(self, item_id: str, method: str, raw_preview: str) -> None:
        self.fallbacks.append(
            VerdictFallbackEvent(item_id=item_id, method=method, raw_preview=raw_preview)
        )

    def judge_failed(self, item_id: str, reason: str) -> None:
        self.failed.append(reason)
