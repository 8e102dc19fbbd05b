"""AnsweringEngine — turns a question and its assembled context into a candidate answer."""

import asyncio

from memorybench.answering.domain.observer import AnsweringObserver
from memorybench.answering.domain.prompts import (
    ERROR_MARKER_PREFIX,
    NO_CONTEXT_ANSWER,
    NO_RELEVANT_INFORMATION,
    UNKNOWN_ANSWER,
    answer_prompt,
    extraction_prompt,
    synthesis_prompt,
)
from memorybench.context.domain.budget import ContextBudget, split_context
from memorybench.context.domain.errors import ContextOverflowError
from memorybench.llm.domain.model import LanguageModel
from memorybench.pacing.domain.pacer import Pacer
from memorybench.retry.application.retry import Sleep, run_with_retry
from memorybench.retry.domain.observer import RetryObserver
from memorybench.retry.domain.policy import Failed, RetryOutcome, RetryPolicy


class AnsweringEngine:
    """Generates answers with one model, never raising on model failure.

    When the context fits the budget a single call answers the question.
    Otherwise the context is split into parts, each part is asked for the
    relevant information, and the informative extracts are merged, costing at
    most parts + 1 calls. If a call still fails after the retry policy, the
    answer is an error-marker string that downstream grading counts as wrong.
    """

    def __init__(
        self,
        model: LanguageModel,
        budget: ContextBudget,
        retry_policy: RetryPolicy,
        pacer: Pacer,
        observer: AnsweringObserver,
        retry_observer: RetryObserver,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._model = model
        self._budget = budget
        self._retry_policy = retry_policy
        self._pacer = pacer
        self._observer = observer
        self._retry_observer = retry_observer
        self._sleep = sleep

    @property
    def model_name(self) -> str:
        return self._model.model

    async def answer(
        self,
        question: str,
        context: str,
        question_date: str | None = None,
        item_id: str = "",
    ) -> str:
        if not context.strip():
            return NO_CONTEXT_ANSWER

        try:
            self._budget.ensure_within(context)
        except ContextOverflowError as exc:
            return await self._answer_in_parts(
                question=question,
                context=context,
                question_date=question_date,
                item_id=item_id,
                overflow=exc,
            )

        outcome = await self._complete(
            prompt=answer_prompt(question, context, question_date),
            operation="generate answer",
        )
        if isinstance(outcome, Failed):
            return self._error_marker(item_id=item_id, failure=outcome)
        return outcome.value

    async def _answer_in_parts(
        self,
        question: str,
        context: str,
        question_date: str | None,
        item_id: str,
        overflow: ContextOverflowError,
    ) -> str:
        parts = split_context(context)
        self._observer.answering_overflow_detected(
            item_id=item_id,
            context_chars=overflow.length,
            budget_chars=overflow.budget,
            parts=len(parts),
        )

        extracts: list[str] = []
        for part_number, part in enumerate(parts, 1):
            outcome = await self._complete(
                prompt=extraction_prompt(
                    question, part, part_number, len(parts), question_date
                ),
                operation="extract relevant context",
            )
            if isinstance(outcome, Failed):
                return self._error_marker(item_id=item_id, failure=outcome)

            relevant = NO_RELEVANT_INFORMATION not in outcome.value
            self._observer.answering_part_extracted(
                item_id=item_id,
                part_number=part_number,
                total_parts=len(parts),
                relevant=relevant,
            )
            if relevant:
                extracts.append(outcome.value)

        if not extracts:
            return UNKNOWN_ANSWER
        if len(extracts) == 1:
            return extracts[0]

        self._observer.answering_synthesis_started(
            item_id=item_id, informative_parts=len(extracts)
        )
        outcome = await self._complete(
            prompt=synthesis_prompt(question, extracts, question_date),
            operation="synthesize answer",
        )
        if isinstance(outcome, Failed):
            return self._error_marker(item_id=item_id, failure=outcome)
        return outcome.value

    async def _complete(self, prompt: str, operation: str) -> RetryOutcome[str]:
        async def call() -> str:
            await self._pacer.wait()
            return await self._model.generate(prompt)

        return await run_with_retry(
            operation=call,
            policy=self._retry_policy,
            observer=self._retry_observer,
            operation_name=operation,
            sleep=self._sleep,
        )

    def _error_marker(self, item_id: str, failure: Failed) -> str:
        reason = str(failure.error)
        self._observer.answering_failed(item_id=item_id, reason=reason)
        return f"{ERROR_MARKER_PREFIX}{reason}"
