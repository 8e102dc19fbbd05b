"""Observer port for provider adapters — defines events in domain language."""

from typing import Protocol


class ProviderObserver(Protocol):
    def provider_initialized(self, provider: str, base_url: str) -> None: ...

    def provider_request_completed(
        self, provider: str, method: str, path: str, status: int, duration_ms: int
    ) -> None: ...

    def provider_request_failed(
        self, provider: str, method: str, path: str, status: int, reason: str
    ) -> None: ...

    def provider_container_deleted(self, provider: str, container_tag: str) -> None: ...
