"""Error types raised by provider adapters."""

from memorybench.config.infrastructure.errors import ConfigError
from memorybench.core.errors import MemoryBenchError

_RETRIABLE_STATUSES = frozenset({0, 408, 429})
_MAX_BODY_CHARS = 500


def is_retriable_status(status: int) -> bool:
    """Transport failures (status 0), timeouts, throttling and 5xx are worth retrying."""
    return status in _RETRIABLE_STATUSES or status >= 500


class ProviderError(MemoryBenchError):
    """Raised when a provider call returns a non-2xx status or cannot be sent.

    status is 0 when no HTTP response was received.
    """

    def __init__(self, provider: str, operation: str, status: int, body: str) -> None:
        self.provider = provider
        self.operation = operation
        self.status = status
        self.body = body
        super().__init__(
            f"Failed to {operation} on {provider}: HTTP {status}: {body[:_MAX_BODY_CHARS]}",
            retriable=is_retriable_status(status),
        )


class MissingCredentialError(ConfigError):
    """Raised by initialize() when the provider's API key is not configured."""

    def __init__(self, provider: str, env_var: str) -> None:
        self.provider = provider
        self.env_var = env_var
        super().__init__(
            f"Failed to initialize provider '{provider}': missing API key"
            f" (set provider.api_key or {env_var})"
        )


class ProviderNotSupportedError(ConfigError):
    """Raised when no adapter is registered under the requested provider name."""

    def __init__(self, provider: str, supported: list[str]) -> None:
        self.provider = provider
        super().__init__(
            f"Failed to create provider: unknown provider '{provider}'"
            f" (supported: {', '.join(supported)})"
        )
