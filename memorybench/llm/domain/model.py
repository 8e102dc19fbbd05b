"""LanguageModel Protocol — structural interface for text completion backends."""

from typing import Protocol


class LanguageModel(Protocol):
    """One configured model that turns a prompt into text."""

    model: str

    async def generate(self, prompt: str) -> str:
        """Return the model's reply to prompt.

        Raises:
            ModelInvocationError: if the call fails; retriable when the
                backend was throttled or temporarily unavailable.
        """
        ...
