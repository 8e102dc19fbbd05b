"""Structlog implementation of the AnsweringObserver port."""

import structlog


class StructlogAnsweringObserver:
    """Delegates answering events to structlog.

    Satisfies the AnsweringObserver protocol structurally.
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def answering_overflow_detected(
        self, item_id: str, context_chars: int, budget_chars: int, parts: int
    ) -> None:
        self._log.info(
            "answering.overflow_detected",
            item_id=item_id,
            context_chars=context_chars,
            budget_chars=budget_chars,
            parts=parts,
        )

    def answering_part_extracted(
        self, item_id: str, part_number: int, total_parts: int, relevant: bool
    ) -> None:
        self._log.debug(
            "answering.part_extracted",
            item_id=item_id,
            part_number=part_number,
            total_parts=total_parts,
            relevant=relevant,
        )

    def answering_synthesis_started(self, item_id: str, informative_parts: int) -> None:
        self._log.info(
            "answering.synthesis_started",
            item_id=item_id,
            informative_parts=informative_parts,
        )

    def answering_failed(self, item_id: str, reason: str) -> None:
        self._log.warning("answering.failed", item_id=item_id, reason=reason)
