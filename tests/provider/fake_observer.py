"""Fake ProviderObserver for use in tests — records events without mocking."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RequestCompletedEvent:
    provider: str
    method: str
    path: str
    status: int


@dataclass(frozen=True)
class RequestFailedEvent:
    provider: str
    method: str
    path: str
    status: int
    reason: str


class FakeProviderObserver:
    def __init__(self) -> None:
        self.initialized: list[str] = []
        self.completed: list[RequestCompletedEvent] = []
        self.failed: list[RequestFailedEvent] = []
        self.deleted: list[str] = []

    def provider_initialized(self, provider: str, base_url: str) -> None:
        self.initialized.append(provider)

    def provider_request_completed(
        self, provider: str, method: str, path: str, status: int, duration_ms: int
    ) -> None:
        self.completed.append(
            RequestCompletedEvent(provider=provider, method=method, path=path, status=status)
        )

    def provider_request_failed(
        self, provider: str, method: str, path: str, status: int, reason: str
    ) -> None:
        self.failed.append(
            RequestFailedEvent(
                provider=provider, method=method, path=path, status=status, reason=reason
            )
        )

    def provider_container_deleted(self, provider: str, container_tag: str) -> None:
        self.deleted.append(container_tag)
