"""MemoryProvider Protocol — the capability surface every backend adapter offers."""

from typing import Protocol

from pydantic import BaseModel, Field

from memorybench.provider.domain.search_result import SearchResult


class IngestOptions(BaseModel, frozen=True):
    metadata: dict[str, str | int | float | bool] = Field(default_factory=dict)


class SearchOptions(BaseModel, frozen=True):
    limit: int = Field(default=10, ge=1)
    threshold: float = Field(default=0.3, ge=0.0, le=1.0)


class MemoryProvider(Protocol):
    """Structural interface satisfied by every provider adapter.

    Adapters translate between this contract and one backend's wire format.
    They never retry: a failed call raises ProviderError and the caller
    decides whether to try again.

    persistent is False for providers whose stored documents do not outlive
    the process, so a later process cannot search what an earlier one ingested.
    """

    name: str
    persistent: bool

    async def initialize(self) -> None:
        """Fail with MissingCredentialError if a required credential is absent."""
        ...

    async def ingest(
        self, content: str, container_tag: str, options: IngestOptions
    ) -> None: ...

    async def search(
        self, query: str, container_tag: str, options: SearchOptions
    ) -> list[SearchResult]: ...

    async def prepare_container(self, container_tag: str) -> None: ...

    async def delete_container(self, container_tag: str) -> None: ...

    async def close(self) -> None: ...
