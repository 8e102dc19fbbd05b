"""Context budget configuration model."""

from pydantic import BaseModel, Field


class ContextConfig(BaseModel, frozen=True):
    max_context_tokens: int = Field(default=30_000, ge=1)
    chars_per_token: int = Field(default=4, ge=1)

    @property
    def budget_chars(self) -> int:
        return self.max_context_tokens * self.chars_per_token
