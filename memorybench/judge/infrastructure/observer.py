"""StructlogJudgeObserver — production observer that delegates to structlog."""

import structlog


class StructlogJudgeObserver:
    """Logs judge domain events to structlog.

    Does NOT inherit from JudgeObserver (structural typing via Protocol).
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def judge_started(self, item_id: str, model: str, rubric: str) -> None:
        self._log.debug("judge.started", item_id=item_id, model=model, rubric=rubric)

    def judge_completed(self, item_id: str, correct: bool, method: str) -> None:
        self._log.debug(
            "judge.completed", item_id=item_id, correct=correct, method=method
        )

    def judge_verdict_fallback(self, item_id: str, method: str, raw_preview: str) -> None:
        self._log.warning(
            "judge.verdict_fallback",
            item_id=item_id,
            method=method,
            raw_preview=raw_preview,
        )

    def judge_failed(self, item_id: str, reason: str) -> None:
        self._log.error("judge.failed", item_id=item_id, reason=reason)
