"""Zep adapter — users hold sessions, graph search runs over facts extracted from them."""

import os
from typing import Any

import httpx

from memorybench.provider.domain.observer import ProviderObserver
from memorybench.provider.domain.provider import IngestOptions, SearchOptions
from memorybench.provider.domain.search_result import SearchResult
from memorybench.provider.infrastructure.errors import (
    MissingCredentialError,
    ProviderError,
)
from memorybench.provider.infrastructure.http import (
    JsonHttpClient,
    decode_mapped,
    unwrap_results,
)

API_KEY_ENV = "ZEP_API_KEY"
BASE_URL_ENV = "ZEP_API_URL"
DEFAULT_BASE_URL = "https://api.getzep.com"

# Zep rejects longer message bodies.
MAX_MESSAGE_CHARS = 4000


def split_message(content: str, size: int = MAX_MESSAGE_CHARS) -> list[str]:
    if len(content) <= size:
        return [content]
    return [content[start : start + size] for start in range(0, len(content), size)]


def session_id_for(container_tag: str) -> str:
    return f"{container_tag}-session"


class ZepProvider:
    """Satisfies the MemoryProvider protocol structurally.

    The container tag is the Zep user id and owns a single session. Search
    prefers graph facts; when graph search fails or finds nothing, the
    session's memory is used instead, in order: context block, facts,
    messages, summary.
    """

    name = "zep"
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
            headers={"Authorization": f"Api-Key {self._api_key}"},
            timeout_seconds=timeout_seconds,
            observer=observer,
            transport=transport,
        )

    async def initialize(self) -> None:
        if not self._api_key:
            raise MissingCredentialError(provider=self.name, env_var=API_KEY_ENV)
        self._observer.provider_initialized(provider=self.name, base_url=self._base_url)

    async def prepare_container(self, container_tag: str) -> None:
        """Create the user and its session unless they already exist."""
        session_id = session_id_for(container_tag)
        user = await self._http.request(
            "GET",
            f"/api/v2/users/{container_tag}",
            operation="look up user",
            accept_statuses=(404,),
        )
        if user.status_code == 404:
            await self._http.request(
                "POST",
                "/api/v2/users",
                operation="create user",
                json={"user_id": container_tag, "metadata": {"source": "memorybench"}},
                accept_statuses=(409,),
            )

        session = await self._http.request(
            "GET",
            f"/api/v2/sessions/{session_id}",
            operation="look up session",
            accept_statuses=(404,),
        )
        if session.status_code == 404:
            await self._http.request(
                "POST",
                "/api/v2/sessions",
                operation="create session",
                json={
                    "session_id": session_id,
                    "user_id": container_tag,
                    "metadata": {"source": "memorybench"},
                },
                accept_statuses=(409,),
            )

    async def ingest(
        self, content: str, container_tag: str, options: IngestOptions
    ) -> None:
        session_id = session_id_for(container_tag)
        parts = split_message(content)
        for index, part in enumerate(parts):
            await self._http.request(
                "POST",
                f"/api/v2/sessions/{session_id}/memory",
                operation="add session memory",
                json={
                    "messages": [
                        {
                            "role_type": "user",
                            "content": part,
                            "metadata": {
                                **options.metadata,
                                "chunk_index": index,
                                "total_chunks": len(parts),
                            },
                        }
                    ]
                },
            )

    async def search(
        self, query: str, container_tag: str, options: SearchOptions
    ) -> list[SearchResult]:
        try:
            results = await self._graph_search(query, container_tag, options.limit)
        except ProviderError:
            results = []
        if not results:
            results = await self._session_memory(container_tag)
        return results[: options.limit]

    async def delete_container(self, container_tag: str) -> None:
        await self._http.request(
            "DELETE",
            f"/api/v2/sessions/{session_id_for(container_tag)}",
            operation="delete session",
            accept_statuses=(404,),
        )
        await self._http.request(
            "DELETE",
            f"/api/v2/users/{container_tag}",
            operation="delete user",
            accept_statuses=(404,),
        )
        self._observer.provider_container_deleted(
            provider=self.name, container_tag=container_tag
        )

    async def close(self) -> None:
        await self._http.aclose()

    async def _graph_search(
        self, query: str, user_id: str, limit: int
    ) -> list[SearchResult]:
        response = await self._http.request(
            "POST",
            "/api/v2/graph/search",
            operation="search graph",
            json={"user_id": user_id, "query": query, "limit": limit},
        )
        return decode_mapped(
            response, provider=self.name, operation="search graph", mapper=_graph_results
        )

    async def _session_memory(self, container_tag: str) -> list[SearchResult]:
        response = await self._http.request(
            "GET",
            f"/api/v2/sessions/{session_id_for(container_tag)}/memory",
            operation="read session memory",
        )
        return decode_mapped(
            response,
            provider=self.name,
            operation="read session memory",
            mapper=_session_results,
        )


def _graph_results(body: Any) -> list[SearchResult]:
    results: list[SearchResult] = []
    for edge in unwrap_results(body, keys=("edges",)):
        fact = str(edge.get("fact") or "").strip()
        if fact:
            results.append(
                SearchResult(
                    id=str(edge.get("uuid") or edge.get("id") or ""),
                    content=fact,
                    score=float(edge.get("score") or edge.get("weight") or 0.0),
                    metadata=edge.get("metadata") or {},
                )
            )
    return results


def _session_results(body: dict[str, Any]) -> list[SearchResult]:
    context = body.get("context")
    if isinstance(context, str) and context.strip():
        return [SearchResult(id="context", content=context, score=1.0)]

    facts = []
    for fact in body.get("facts") or []:
        if isinstance(fact, str):
            content, fact_id, metadata = fact, "", {}
        else:
            content = str(fact.get("content") or fact.get("fact") or "")
            fact_id = str(fact.get("uuid") or "")
            metadata = fact.get("metadata") or {}
        if content.strip():
            facts.append(
                SearchResult(id=fact_id, content=content, score=1.0, metadata=metadata)
            )
    if facts:
        return facts

    messages = [
        SearchResult(
            id=str(message.get("uuid") or ""),
            content=str(message["content"]),
            score=1.0,
            metadata=message.get("metadata") or {},
        )
        for message in body.get("messages") or []
        if str(message.get("content") or "").strip()
    ]
    if messages:
        return messages

    summary = body.get("summary")
    summary_text = summary if isinstance(summary, str) else (summary or {}).get("content", "")
    if summary_text and summary_text.strip():
        return [SearchResult(id="summary", content=summary_text, score=1.0)]
    return []
