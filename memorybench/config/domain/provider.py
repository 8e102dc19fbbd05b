"""Memory provider configuration model."""

from pydantic import BaseModel, Field


class ProviderConfig(BaseModel, frozen=True):
    """Which provider to benchmark and how to reach it.

    api_key and base_url fall back to the provider's own environment
    variables and default endpoint when left unset.
    """

    name: str = Field(min_length=1)
    api_key: str | None = None
    base_url: str | None = None
    timeout_seconds: float = Field(default=60.0, gt=0)
