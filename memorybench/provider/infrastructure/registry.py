"""create_provider — builds the MemoryProvider adapter named in ProviderConfig."""

from collections.abc import Callable

import httpx

from memorybench.config.domain.provider import ProviderConfig
from memorybench.provider.domain.observer import ProviderObserver
from memorybench.provider.domain.provider import MemoryProvider
from memorybench.provider.infrastructure.errors import ProviderNotSupportedError
from memorybench.provider.infrastructure.fullcontext import FullContextProvider
from memorybench.provider.infrastructure.mem0 import Mem0Provider
from memorybench.provider.infrastructure.supermemory import SupermemoryProvider
from memorybench.provider.infrastructure.zep import ZepProvider

type HttpProviderClass = Callable[..., MemoryProvider]

_HTTP_PROVIDERS: dict[str, HttpProviderClass] = {
    "supermemory": SupermemoryProvider,
    "mem0": Mem0Provider,
    "zep": ZepProvider,
}


def supported_providers() -> list[str]:
    return sorted([*_HTTP_PROVIDERS, FullContextProvider.name])


def create_provider(
    config: ProviderConfig,
    observer: ProviderObserver,
    transport: httpx.AsyncBaseTransport | None = None,
) -> MemoryProvider:
    """Return a new adapter instance for config.name.

    The adapter is not initialized; callers await initialize() before use.

    Raises:
        ProviderNotSupportedError: if config.name is not a known provider.
    """
    name = config.name.lower()
    if name == FullContextProvider.name:
        return FullContextProvider(observer=observer)

    provider_class = _HTTP_PROVIDERS.get(name)
    if provider_class is None:
        raise ProviderNotSupportedError(
            provider=config.name, supported=supported_providers()
        )
    return provider_class(
        observer=observer,
        api_key=config.api_key,
        base_url=config.base_url,
        timeout_seconds=config.timeout_seconds,
        transport=transport,
    )
