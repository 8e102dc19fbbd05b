"""Records persisted in phase checkpoints."""

from datetime import datetime

from pydantic import BaseModel, Field

from memorybench.core.models import CAMEL_FROZEN
from memorybench.metrics.domain.retrieval import RetrievalMetrics
from memorybench.provider.domain.search_result import SearchResult


class IngestRecord(BaseModel):
    model_config = CAMEL_FROZEN

    container_key: str
    container_tag: str
    documents: int
    ingested_at: datetime


class SearchRecord(BaseModel):
    """Results retrieved for one item.

    error is set when the search failed after retries; results is then empty
    and the evaluation phase records the item as failed. retrieval is set only
    for items that name their evidence documents.
    """

    model_config = CAMEL_FROZEN

    item_id: str
    container_tag: str
    results: list[SearchResult] = Field(default_factory=list)
    error: str | None = None
    retrieved_needle: bool | None = None
    retrieval: RetrievalMetrics | None = None
    searched_at: datetime
