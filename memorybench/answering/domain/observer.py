"""Observer port for the answering domain — defines events in domain language."""

from typing import Protocol


class AnsweringObserver(Protocol):
    def answering_overflow_detected(
        self, item_id: str, context_chars: int, budget_chars: int, parts: int
    ) -> None: ...

    def answering_part_extracted(
        self, item_id: str, part_number: int, total_parts: int, relevant: bool
    ) -> None: ...

    def answering_synthesis_started(self, item_id: str, informative_parts: int) -> None: ...

    def answering_failed(self, item_id: str, reason: str) -> None: ...
