"""LiteLLMLanguageModel — LanguageModel implementation backed by LiteLLM."""

import time

import litellm

from memorybench.llm.domain.observer import ModelObserver
from memorybench.llm.infrastructure.errors import ModelInvocationError
from memorybench.retry.domain.wait import looks_rate_limited

litellm.suppress_debug_info = True

# Exceptions that signal a transient condition on the provider side.
_TRANSIENT_ERRORS: tuple[type[Exception], ...] = (
    litellm.RateLimitError,
    litellm.Timeout,
    litellm.APIConnectionError,
    litellm.ServiceUnavailableError,
    litellm.InternalServerError,
)


def is_transient(exc: Exception) -> bool:
    return isinstance(exc, _TRANSIENT_ERRORS) or looks_rate_limited(str(exc))


class LiteLLMLanguageModel:
    """Sends a single user message per call and returns the stripped reply.

    Satisfies the LanguageModel protocol structurally.
    """

    def __init__(self, model: str, temperature: float, observer: ModelObserver) -> None:
        self.model = model
        self._temperature = temperature
        self._observer = observer

    async def generate(self, prompt: str) -> str:
        """Return the completion for prompt.

        Raises:
            ModelInvocationError: if the call fails or the reply is empty.
                Retriable for rate limits, timeouts and server-side outages.
        """
        self._observer.model_call_started(model=self.model, prompt_chars=len(prompt))
        start = time.monotonic()
        try:
            response = await litellm.acompletion(
                model=self.model,
                temperature=self._temperature,
                messages=[{"role": "user", "content": prompt}],
            )
        except Exception as exc:
            reason = str(exc)
            retriable = is_transient(exc)
            self._observer.model_call_failed(
                model=self.model, reason=reason, retriable=retriable
            )
            raise ModelInvocationError(
                model=self.model, reason=reason, retriable=retriable
            ) from exc

        content = response.choices[0].message.content
        if not content:
            reason = "empty response"
            self._observer.model_call_failed(
                model=self.model, reason=reason, retriable=False
            )
            raise ModelInvocationError(model=self.model, reason=reason)

        text = content.strip()
        self._observer.model_call_completed(
            model=self.model,
            duration_ms=int((time.monotonic() - start) * 1000),
            response_chars=len(text),
        )
        return text
