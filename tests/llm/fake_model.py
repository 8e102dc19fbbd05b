"""FakeLanguageModel — returns scripted replies and records prompts."""

from collections.abc import Callable

from memorybench.llm.infrastructure.errors import ModelInvocationError

type Reply = str | ModelInvocationError


class FakeLanguageModel:
    """Replies are consumed in order; a responder callable is used once they run out.

    A reply that is a ModelInvocationError is raised instead of returned.
    """

    def __init__(
        self,
        model: str = "fake-model",
        replies: list[Reply] | None = None,
        responder: Callable[[str], str] | None = None,
    ) -> None:
        self.model = model
        self._replies = list(replies or [])
        self._responder = responder
        self.prompts: list[str] = []

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self._replies:
            reply = self._replies.pop(0)
        elif self._responder is not None:
            reply = self._responder(prompt)
        else:
            raise AssertionError("FakeLanguageModel ran out of replies")
        if isinstance(reply, ModelInvocationError):
            raise reply
        return reply
