"""DatasetItem — immutable benchmark question with the documents it is asked against."""

from pydantic import BaseModel, Field


class SourceDocument(BaseModel, frozen=True):
    content: str
    date: str | None = None
    metadata: dict[str, str | int | float | bool] = Field(default_factory=dict)


class DatasetItem(BaseModel, frozen=True):
    """One benchmark question.

    Items whose questions are asked against the same conversation share a
    container_id and are ingested once. evidence_ids name the documents that
    hold the answer, matched against each document's sessionId metadata.
    context_length and needle are only set by long-context benchmarks.
    """

    item_id: str = Field(min_length=1)
    question: str
    answer: str
    category: str | None = None
    question_date: str | None = None
    container_id: str | None = None
    documents: list[SourceDocument] = Field(default_factory=list)
    evidence_ids: list[str] = Field(default_factory=list)
    context_length: int | None = None
    needle: str | None = None

    @property
    def container_key(self) -> str:
        return self.container_id or self.item_id
