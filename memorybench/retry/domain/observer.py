"""Observer port for the retry domain — defines events in domain language."""

from typing import Protocol


class RetryObserver(Protocol):
    def retry_scheduled(
        self, operation: str, attempt: int, reason: str, delay_seconds: float
    ) -> None: ...

    def retry_failed(
        self, operation: str, attempts: int, reason: str, retriable: bool
    ) -> None: ...
