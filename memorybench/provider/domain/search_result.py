"""Canonical SearchResult — the single shape every provider's search output is mapped to."""

from typing import Any

from pydantic import BaseModel, Field

from memorybench.core.models import CAMEL_FROZEN


class Chunk(BaseModel):
    """A raw passage the provider extracted a memory from."""

    model_config = CAMEL_FROZEN

    content: str
    position: int = 0
    score: float | None = None


class TemporalContext(BaseModel):
    model_config = CAMEL_FROZEN

    document_date: str | None = None
    event_dates: list[str] = Field(default_factory=list)


class SearchResult(BaseModel):
    model_config = CAMEL_FROZEN

    id: str
    content: str
    score: float = 0.0
    metadata: dict[str, Any] = Field(default_factory=dict)
    chunks: list[Chunk] = Field(default_factory=list)
    temporal_context: TemporalContext | None = None


def temporal_context_from(metadata: dict[str, Any]) -> TemporalContext | None:
    """Read documentDate / eventDate from metadata, nested under temporalContext or not."""
    source = metadata.get("temporalContext")
    if not isinstance(source, dict):
        source = metadata
    document_date = source.get("documentDate")
    event_date = source.get("eventDate")
    if not document_date and not event_date:
        return None
    if event_date is None:
        event_dates: list[str] = []
    elif isinstance(event_date, list):
        event_dates = [str(date) for date in event_date]
    else:
        event_dates = [str(event_date)]
    return TemporalContext(
        document_date=str(document_date) if document_date else None,
        event_dates=event_dates,
    )
