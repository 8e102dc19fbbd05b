"""Structlog implementation of the RetryObserver port."""

import structlog


class StructlogRetryObserver:
    """Logs retry events to structlog.

    Satisfies the RetryObserver protocol structurally.
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def retry_scheduled(
        self, operation: str, attempt: int, reason: str, delay_seconds: float
    ) -> None:
        self._log.warning(
            "retry.scheduled",
            operation=operation,
            attempt=attempt,
            reason=reason,
            delay_seconds=round(delay_seconds, 2),
        )

    def retry_failed(
        self, operation: str, attempts: int, reason: str, retriable: bool
    ) -> None:
        self._log.error(
            "retry.failed",
            operation=operation,
            attempts=attempts,
            reason=reason,
            exhausted=retriable,
        )
