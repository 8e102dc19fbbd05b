"""Search phase configuration model."""

from pydantic import BaseModel, Field


class SearchConfig(BaseModel, frozen=True):
    limit: int = Field(default=10, ge=1)
    threshold: float = Field(default=0.3, ge=0.0, le=1.0)
