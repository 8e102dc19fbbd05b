"""ContextBudget — character budget for grounding text and the four-way split used on overflow."""

import math

from pydantic import BaseModel, Field

from memorybench.context.domain.errors import ContextOverflowError

OVERFLOW_PARTS = 4


class ContextBudget(BaseModel, frozen=True):
    """Approximates a token budget with a fixed characters-per-token ratio."""

    max_tokens: int = Field(default=30_000, ge=1)
    chars_per_token: int = Field(default=4, ge=1)

    @property
    def max_chars(self) -> int:
        return self.max_tokens * self.chars_per_token

    def fits(self, context: str) -> bool:
        return len(context) <= self.max_chars

    def ensure_within(self, context: str) -> None:
        """Raise ContextOverflowError when context is longer than max_chars."""
        if not self.fits(context):
            raise ContextOverflowError(length=len(context), budget=self.max_chars)


def split_context(context: str, parts: int = OVERFLOW_PARTS) -> list[str]:
    """Cut context into contiguous slices of ceil(len / parts) characters.

    The last slice may be shorter; empty trailing slices are not returned.
    """
    if not context:
        return []
    size = math.ceil(len(context) / parts)
    return [context[start : start + size] for start in range(0, len(context), size)]
