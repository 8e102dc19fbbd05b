"""JsonHttpClient — the thin httpx wrapper shared by HTTP provider adapters."""

import time
from collections.abc import Callable
from typing import Any

import httpx

from memorybench.provider.domain.observer import ProviderObserver
from memorybench.provider.infrastructure.errors import ProviderError


class JsonHttpClient:
    """Sends JSON requests to one provider and maps failures to ProviderError.

    A transport can be injected (httpx.MockTransport in tests). No retries are
    attempted here.
    """

    def __init__(
        self,
        provider: str,
        base_url: str,
        headers: dict[str, str],
        timeout_seconds: float,
        observer: ProviderObserver,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._provider = provider
        self._observer = observer
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers={"Content-Type": "application/json", **headers},
            timeout=timeout_seconds,
            transport=transport,
        )

    async def request(
        self,
        method: str,
        path: str,
        operation: str,
        json: Any = None,
        params: dict[str, str] | None = None,
        accept_statuses: tuple[int, ...] = (),
    ) -> httpx.Response:
        """Send one request; return the response on 2xx or a status in accept_statuses.

        Raises:
            ProviderError: on any other status, or status 0 when the request
                could not be sent or timed out.
        """
        started = time.monotonic()
        try:
            response = await self._client.request(method, path, json=json, params=params)
        except httpx.HTTPError as exc:
            reason = f"{type(exc).__name__}: {exc}"
            self._observer.provider_request_failed(
                provider=self._provider, method=method, path=path, status=0, reason=reason
            )
            raise ProviderError(
                provider=self._provider, operation=operation, status=0, body=reason
            ) from exc

        if response.is_success or response.status_code in accept_statuses:
            self._observer.provider_request_completed(
                provider=self._provider,
                method=method,
                path=path,
                status=response.status_code,
                duration_ms=int((time.monotonic() - started) * 1000),
            )
            return response

        self._observer.provider_request_failed(
            provider=self._provider,
            method=method,
            path=path,
            status=response.status_code,
            reason=response.text[:200],
        )
        raise ProviderError(
            provider=self._provider,
            operation=operation,
            status=response.status_code,
            body=response.text,
        )

    async def aclose(self) -> None:
        await self._client.aclose()


def decode_json(response: httpx.Response, provider: str, operation: str) -> Any:
    """Return the parsed body, raising a non-retriable ProviderError when it is not JSON."""
    try:
        return response.json()
    except ValueError as exc:
        raise ProviderError(
            provider=provider,
            operation=operation,
            status=response.status_code,
            body=f"response is not valid JSON: {response.text[:200]}",
        ) from exc


def unwrap_results(body: Any, keys: tuple[str, ...] = ("results", "memories")) -> list[Any]:
    """Return the result list whether body is a bare array or wraps it under one of keys."""
    if isinstance(body, list):
        return body
    if isinstance(body, dict):
        for key in keys:
            if isinstance(body.get(key), list):
                return body[key]
    return []


def decode_mapped[T](
    response: httpx.Response,
    provider: str,
    operation: str,
    mapper: Callable[[Any], T],
) -> T:
    """Decode the JSON body and map it with mapper.

    Raises:
        ProviderError: non-retriable, when the body is not JSON or mapper
            cannot make sense of its shape.
    """
    body = decode_json(response, provider=provider, operation=operation)
    try:
        return mapper(body)
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise ProviderError(
            provider=provider,
            operation=operation,
            status=response.status_code,
            body=f"unexpected response shape: {type(exc).__name__}: {exc}",
        ) from exc
