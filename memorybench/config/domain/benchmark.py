"""Benchmark dataset configuration model."""

from pathlib import Path

from pydantic import BaseModel, Field


class BenchmarkConfig(BaseModel, frozen=True):
    name: str = Field(min_length=1)
    path: Path
    haystack_dir: Path | None = None
    limit: int | None = Field(default=None, ge=1)
    categories: list[str] = Field(default_factory=list)
