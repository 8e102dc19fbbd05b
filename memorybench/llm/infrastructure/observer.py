"""Structlog implementation of the ModelObserver port."""

import structlog


class StructlogModelObserver:
    """Delegates language model events to structlog.

    Satisfies the ModelObserver protocol structurally.
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def model_call_started(self, model: str, prompt_chars: int) -> None:
        self._log.debug("model.call_started", model=model, prompt_chars=prompt_chars)

    def model_call_completed(
        self, model: str, duration_ms: int, response_chars: int
    ) -> None:
        self._log.debug(
            "model.call_completed",
            model=model,
            duration_ms=duration_ms,
            response_chars=response_chars,
        )

    def model_call_failed(self, model: str, reason: str, retriable: bool) -> None:
        self._log.warning(
            "model.call_failed", model=model, reason=reason, retriable=retriable
        )
