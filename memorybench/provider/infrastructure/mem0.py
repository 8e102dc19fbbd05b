"""Mem0 adapter — message-style ingest keyed by user_id, memory search."""

import os
from typing import Any

import httpx

from memorybench.provider.domain.observer import ProviderObserver
from memorybench.provider.domain.provider import IngestOptions, SearchOptions
from memorybench.provider.domain.search_result import SearchResult, temporal_context_from
from memorybench.provider.infrastructure.errors import MissingCredentialError
from memorybench.provider.infrastructure.http import (
    JsonHttpClient,
    decode_mapped,
    unwrap_results,
)

API_KEY_ENV = "MEM0_API_KEY"
BASE_URL_ENV = "MEM0_API_URL"
DEFAULT_BASE_URL = "https://api.mem0.ai/v1"


class Mem0Provider:
    """Satisfies the MemoryProvider protocol structurally.

    The container tag is used as Mem0's user_id. Search responses come back
    either as a bare array or wrapped under "results" or "memories", and the
    text field is named "memory", "text" or "content" depending on version.
    """

    name = "mem0"
    persistent = True

    def __init__(
        self,
        observer: ProviderObserver,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout_seconds: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._observer = observer
        self._api_key = api_key or os.environ.get(API_KEY_ENV, "")
        self._base_url = (base_url or os.environ.get(BASE_URL_ENV, DEFAULT_BASE_URL)).rstrip("/")
        self._http = JsonHttpClient(
            provider=self.name,
            base_url=self._base_url,
            headers={"Authorization": f"Token {self._api_key}"},
            timeout_seconds=timeout_seconds,
            observer=observer,
            transport=transport,
        )

    async def initialize(self) -> None:
        if not self._api_key:
            raise MissingCredentialError(provider=self.name, env_var=API_KEY_ENV)
        self._observer.provider_initialized(provider=self.name, base_url=self._base_url)

    async def ingest(
        self, content: str, container_tag: str, options: IngestOptions
    ) -> None:
        await self._http.request(
            "POST",
            "/memories/",
            operation="add memory",
            json={
                "messages": [{"role": "user", "content": content}],
                "user_id": container_tag,
                "metadata": options.metadata,
            },
        )

    async def search(
        self, query: str, container_tag: str, options: SearchOptions
    ) -> list[SearchResult]:
        response = await self._http.request(
            "POST",
            "/memories/search/",
            operation="search memories",
            json={"query": query, "user_id": container_tag, "limit": options.limit},
        )
        results = decode_mapped(
            response, provider=self.name, operation="search memories", mapper=_search_results
        )
        return results[: options.limit]

    async def prepare_container(self, container_tag: str) -> None:
        # Mem0 users are created on first write.
        return None

    async def delete_container(self, container_tag: str) -> None:
        await self._http.request(
            "DELETE",
            "/memories/",
            operation="delete memories",
            params={"user_id": container_tag},
        )
        self._observer.provider_container_deleted(
            provider=self.name, container_tag=container_tag
        )

    async def close(self) -> None:
        await self._http.aclose()


def _search_results(body: Any) -> list[SearchResult]:
    return [_to_search_result(raw) for raw in unwrap_results(body)]


def _to_search_result(raw: dict[str, Any]) -> SearchResult:
    metadata = raw.get("metadata") or {}
    return SearchResult(
        id=str(raw.get("id") or raw.get("memory_id") or ""),
        content=str(raw.get("memory") or raw.get("text") or raw.get("content") or ""),
        score=float(raw.get("score") or raw.get("relevance") or 0.0),
        metadata=metadata,
        temporal_context=temporal_context_from(metadata),
    )
