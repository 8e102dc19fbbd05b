"""JudgeEngine — grades a candidate answer against ground truth with a language model."""

import asyncio

from memorybench.judge.domain.errors import JudgeInvocationError
from memorybench.judge.domain.observer import JudgeObserver
from memorybench.judge.domain.rubric import judge_prompt, rubric_for
from memorybench.judge.domain.verdict import Verdict, parse_verdict
from memorybench.llm.domain.model import LanguageModel
from memorybench.pacing.domain.pacer import Pacer
from memorybench.retry.application.retry import Sleep, run_with_retry
from memorybench.retry.domain.observer import RetryObserver
from memorybench.retry.domain.policy import Failed, RetryPolicy

_RAW_PREVIEW_CHARS = 120


class JudgeEngine:
    """Selects the rubric for a question's category, asks the model, parses the verdict.

    Parsing never fails. Only a model call that still fails after the retry
    policy raises, as JudgeInvocationError.
    """

    def __init__(
        self,
        model: LanguageModel,
        retry_policy: RetryPolicy,
        pacer: Pacer,
        observer: JudgeObserver,
        retry_observer: RetryObserver,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._model = model
        self._retry_policy = retry_policy
        self._pacer = pacer
        self._observer = observer
        self._retry_observer = retry_observer
        self._sleep = sleep

    @property
    def model_name(self) -> str:
        return self._model.model

    async def judge(
        self,
        question: str,
        ground_truth: str,
        answer: str,
        category: str | None,
        item_id: str = "",
    ) -> Verdict:
        """Return the verdict for answer.

        Raises:
            JudgeInvocationError: if the judge model cannot be called.
        """
        self._observer.judge_started(
            item_id=item_id, model=self._model.model, rubric=rubric_for(category).value
        )
        prompt = judge_prompt(question, ground_truth, answer, category)

        async def call() -> str:
            await self._pacer.wait()
            return await self._model.generate(prompt)

        outcome = await run_with_retry(
            operation=call,
            policy=self._retry_policy,
            observer=self._retry_observer,
            operation_name="judge answer",
            sleep=self._sleep,
        )
        if isinstance(outcome, Failed):
            reason = str(outcome.error)
            self._observer.judge_failed(item_id=item_id, reason=reason)
            raise JudgeInvocationError(reason=reason) from outcome.error

        verdict = parse_verdict(outcome.value)
        if verdict.method != "json":
            self._observer.judge_verdict_fallback(
                item_id=item_id,
                method=verdict.method,
                raw_preview=outcome.value[:_RAW_PREVIEW_CHARS],
            )
        self._observer.judge_completed(
            item_id=item_id, correct=verdict.correct, method=verdict.method
        )
        return verdict
