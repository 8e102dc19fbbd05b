"""Execution configuration models."""

from pydantic import BaseModel, Field


class RetryConfig(BaseModel, frozen=True):
    max_attempts: int = Field(default=5, ge=1)
    initial_backoff_seconds: float = Field(default=1.0, ge=0)
    backoff_multiplier: float = Field(default=2.0, ge=1)
    max_backoff_seconds: float = Field(default=60.0, ge=0)


class ExecutionConfig(BaseModel, frozen=True):
    checkpoint_every: int = Field(default=10, ge=1)
    request_interval_seconds: float = Field(default=1.0, ge=0)
    retry: RetryConfig = Field(default_factory=RetryConfig)
