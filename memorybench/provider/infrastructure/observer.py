"""StructlogProviderObserver — production observer that delegates to structlog."""

import structlog


class StructlogProviderObserver:
    """Logs provider adapter events to structlog.

    Satisfies the ProviderObserver protocol structurally.
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def provider_initialized(self, provider: str, base_url: str) -> None:
        self._log.info("provider.initialized", provider=provider, base_url=base_url)

    def provider_request_completed(
        self, provider: str, method: str, path: str, status: int, duration_ms: int
    ) -> None:
        self._log.debug(
            "provider.request_completed",
            provider=provider,
            method=method,
            path=path,
            status=status,
            duration_ms=duration_ms,
        )

    def provider_request_failed(
        self, provider: str, method: str, path: str, status: int, reason: str
    ) -> None:
        self._log.warning(
            "provider.request_failed",
            provider=provider,
            method=method,
            path=path,
            status=status,
            reason=reason,
        )

    def provider_container_deleted(self, provider: str, container_tag: str) -> None:
        self._log.info(
            "provider.container_deleted", provider=provider, container_tag=container_tag
        )
