"""FullContext baseline — keeps every ingested document in memory and returns all of it."""

from collections import defaultdict

from memorybench.provider.domain.observer import ProviderObserver
from memorybench.provider.domain.provider import IngestOptions, SearchOptions
from memorybench.provider.domain.search_result import SearchResult


class FullContextProvider:
    """No retrieval at all: search returns every document of the container with score 1.0.

    Useful as an upper-bound baseline and for offline runs. The threshold is
    ignored; limit still caps the result count. State lives only as long as
    the process.
    """

    name = "fullcontext"
    persistent = False

    def __init__(self, observer: ProviderObserver) -> None:
        self._observer = observer
        self._stores: dict[str, list[tuple[str, dict[str, str | int | float | bool]]]] = (
            defaultdict(list)
        )

    async def initialize(self) -> None:
        self._observer.provider_initialized(provider=self.name, base_url="memory://")

    async def ingest(
        self, content: str, container_tag: str, options: IngestOptions
    ) -> None:
        self._stores[container_tag].append((content, dict(options.metadata)))

    async def search(
        self, query: str, container_tag: str, options: SearchOptions
    ) -> list[SearchResult]:
        documents = self._stores.get(container_tag, [])
        return [
            SearchResult(
                id=f"{container_tag}-{index}",
                content=content,
                score=1.0,
                metadata=metadata,
            )
            for index, (content, metadata) in enumerate(documents[: options.limit])
        ]

    async def prepare_container(self, container_tag: str) -> None:
        return None

    async def delete_container(self, container_tag: str) -> None:
        self._stores.pop(container_tag, None)
        self._observer.provider_container_deleted(
            provider=self.name, container_tag=container_tag
        )

    async def close(self) -> None:
        self._stores.clear()
