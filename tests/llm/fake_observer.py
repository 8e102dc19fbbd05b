"""Fake ModelObserver for use in tests — records events without mocking."""


class FakeModelObserver:
    def __init__(self) -> None:
        self.started: list[str] = []
        self.completed: list[str] = []
        self.failed: list[dict[str, str | bool]] = []

    def model_call_started(self, model: str, prompt_chars: int) -> None:
        self.started.append(model)

    def model_call_completed(
        self, model: str, duration_ms: int, response_chars: int
    ) -> None:
        self.completed.append(model)

    def model_call_failed(self, model: str, reason: str, retriable: bool) -> None:
        self.failed.append({"model": model, "reason": reason, "retriable": retriable})
