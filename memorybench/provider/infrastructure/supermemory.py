"""Supermemory adapter — documents API for ingest, v4 search with chunks."""

import os
from typing import Any

import httpx

from memorybench.provider.domain.observer import ProviderObserver
from memorybench.provider.domain.provider import IngestOptions, SearchOptions
from memorybench.provider.domain.search_result import (
    Chunk,
    SearchResult,
    temporal_context_from,
)
from memorybench.provider.infrastructure.errors import MissingCredentialError
from memorybench.provider.infrastructure.http import (
    JsonHttpClient,
    decode_mapped,
    unwrap_results,
)

API_KEY_ENV = "SUPERMEMORY_API_KEY"
BASE_URL_ENV = "SUPERMEMORY_API_URL"
DEFAULT_BASE_URL = "https://api.supermemory.ai"


class SupermemoryProvider:
    """Satisfies the MemoryProvider protocol structurally."""

    name = "supermemory"
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
        self._base_url = base_url or os.environ.get(BASE_URL_ENV, DEFAULT_BASE_URL)
        self._http = JsonHttpClient(
            provider=self.name,
            base_url=self._base_url,
            headers={"Authorization": f"Bearer {self._api_key}"},
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
            "/v3/documents",
            operation="ingest document",
            json={
                "content": content,
                "containerTags": [container_tag],
                "metadata": options.metadata,
            },
        )

    async def search(
        self, query: str, container_tag: str, options: SearchOptions
    ) -> list[SearchResult]:
        response = await self._http.request(
            "POST",
            "/v4/search",
            operation="search memories",
            json={
                "q": query,
                "limit": options.limit,
                "threshold": options.threshold,
                "containerTag": container_tag,
                "include": {"chunks": True},
            },
        )
        return decode_mapped(
            response, provider=self.name, operation="search memories", mapper=_search_results
        )

    async def prepare_container(self, container_tag: str) -> None:
        # Containers are created implicitly by the first tagged document.
        return None

    async def delete_container(self, container_tag: str) -> None:
        await self._http.request(
            "DELETE",
            "/v3/documents/bulk",
            operation="delete container",
            json={"containerTags": [container_tag]},
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
    chunks = [
        Chunk(
            content=str(chunk.get("content", "")),
            position=int(chunk.get("position", 0) or 0),
            score=chunk.get("score"),
        )
        for chunk in raw.get("chunks") or []
    ]
    return SearchResult(
        id=str(raw.get("id", "")),
        content=str(raw.get("memory") or raw.get("content") or ""),
        score=float(raw.get("similarity") or raw.get("score") or 0.0),
        metadata=metadata,
        chunks=chunks,
        temporal_context=temporal_context_from(metadata),
    )
