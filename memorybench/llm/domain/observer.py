"""Observer port for language model calls — defines events in domain language."""

from typing import Protocol


class ModelObserver(Protocol):
    def model_call_started(self, model: str, prompt_chars: int) -> None: ...

    def model_call_completed(
        self, model: str, duration_ms: int, response_chars: int
    ) -> None: ...

    def model_call_failed(self, model: str, reason: str, retriable: bool) -> None: ...
