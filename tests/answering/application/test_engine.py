"""Tests for AnsweringEngine — single-call answers, overflow handling and failures."""

from memorybench.answering.application.engine import AnsweringEngine
from memorybench.answering.domain.prompts import (
    NO_CONTEXT_ANSWER,
    NO_RELEVANT_INFORMATION,
    UNKNOWN_ANSWER,
    is_error_answer,
)
from memorybench.context.domain.budget import ContextBudget
from memorybench.llm.infrastructure.errors import ModelInvocationError
from memorybench.retry.domain.policy import RetryPolicy
from tests.answering.fake_observer import FakeAnsweringObserver
from tests.llm.fake_model import FakeLanguageModel, Reply
from tests.pacing.fake_pacer import FakePacer
from tests.retry.fake_observer import FakeRetryObserver
from tests.retry.fake_sleep import FakeSleep

# 120,000 characters, matching the default 30k-token budget.
_BUDGET = ContextBudget(max_tokens=30_000, chars_per_token=4)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_engine(
    replies: list[Reply],
    budget: ContextBudget = _BUDGET,
    policy: RetryPolicy | None = None,
) -> tuple[AnsweringEngine, FakeLanguageModel, FakeAnsweringObserver, FakePacer]:
    model = FakeLanguageModel(model="gpt-4o", replies=replies)
    observer = FakeAnsweringObserver()
    pacer = FakePacer()
    engine = AnsweringEngine(
        model=model,
        budget=budget,
        retry_policy=policy or RetryPolicy(max_attempts=2),
        pacer=pacer,
        observer=observer,
        retry_observer=FakeRetryObserver(),
        sleep=FakeSleep(),
    )
    return engine, model, observer, pacer


def _fatal(reason: str = "invalid api key") -> ModelInvocationError:
    return ModelInvocationError(model="gpt-4o", reason=reason)


# ---------------------------------------------------------------------------
# Context that fits the budget
# ---------------------------------------------------------------------------


class TestAnswerWithinBudget:
    """A context within budget is answered with exactly one model call."""

    async def test_returns_model_reply(self) -> None:
        engine, model, _, pacer = _make_engine(["Paris"])

        answer = await engine.answer("Capital of France?", "Result 1:\nParis is the capital.")

        assert answer == "Paris"
        assert len(model.prompts) == 1
        assert pacer.waits == 1

    async def test_prompt_carries_question_context_and_date(self) -> None:
        engine, model, _, _ = _make_engine(["Paris"])

        await engine.answer("Where?", "Result 1:\nParis", question_date="2023/05/30 (Tue) 10:00")

        prompt = model.prompts[0]
        assert "Question: Where?" in prompt
        assert "Question Date: 2023/05/30 (Tue) 10:00" in prompt
        assert "Result 1:\nParis" in prompt

    async def test_empty_context_skips_the_model(self) -> None:
        engine, model, _, _ = _make_engine([])

        answer = await engine.answer("Where?", "   ")

        assert answer == NO_CONTEXT_ANSWER
        assert model.prompts == []

    async def test_model_name_comes_from_model(self) -> None:
        engine, _, _, _ = _make_engine([])

        assert engine.model_name == "gpt-4o"


# ---------------------------------------------------------------------------
# Context that overflows the budget
# ---------------------------------------------------------------------------


class TestAnswerOverflow:
    """Oversized contexts are split into four parts and extracted separately."""

    async def test_single_informative_part_is_returned_without_synthesis(self) -> None:
        replies: list[Reply] = [
            NO_RELEVANT_INFORMATION,
            "Alice adopted a cat in May.",
            NO_RELEVANT_INFORMATION,
            NO_RELEVANT_INFORMATION,
        ]
        engine, model, observer, _ = _make_engine(replies)

        answer = await engine.answer("When?", "x" * 200_000, item_id="q1")

        assert answer == "Alice adopted a cat in May."
        assert len(model.prompts) == 4
        assert observer.syntheses == []
        assert observer.overflows[0].parts == 4
        assert observer.overflows[0].context_chars == 200_000
        assert observer.overflows[0].budget_chars == 120_000
        assert [event.relevant for event in observer.parts] == [False, True, False, False]

    async def test_several_informative_parts_are_synthesized(self) -> None:
        replies: list[Reply] = [
            "Moved to Berlin in 2020.",
            NO_RELEVANT_INFORMATION,
            "Moved to Paris in 2022.",
            NO_RELEVANT_INFORMATION,
            "Paris",
        ]
        engine, model, observer, _ = _make_engine(replies)

        answer = await engine.answer("Where does Alice live?", "x" * 200_000)

        assert answer == "Paris"
        assert len(model.prompts) == 5
        assert observer.syntheses == [2]
        assert "Extract 1:\nMoved to Berlin in 2020." in model.prompts[4]
        assert "Extract 2:\nMoved to Paris in 2022." in model.prompts[4]

    async def test_no_informative_part_gives_unknown_answer(self) -> None:
        engine, model, _, _ = _make_engine([NO_RELEVANT_INFORMATION] * 4)

        answer = await engine.answer("When?", "x" * 200_000)

        assert answer == UNKNOWN_ANSWER
        assert len(model.prompts) == 4

    async def test_each_part_is_labelled_in_its_prompt(self) -> None:
        engine, model, _, _ = _make_engine([NO_RELEVANT_INFORMATION] * 4)

        await engine.answer("When?", "x" * 200_000)

        assert "Context (Part 3 of 4):" in model.prompts[2]


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------


class TestAnswerFailure:
    """A failed model call degrades to an error-marker answer instead of raising."""

    async def test_fatal_error_returns_error_marker(self) -> None:
        engine, _, observer, _ = _make_engine([_fatal()])

        answer = await engine.answer("Where?", "Result 1:\nParis", item_id="q1")

        assert is_error_answer(answer)
        assert "invalid api key" in answer
        assert len(observer.failures) == 1

    async def test_retriable_error_is_retried(self) -> None:
        transient = ModelInvocationError(model="gpt-4o", reason="overloaded", retriable=True)
        engine, model, _, pacer = _make_engine([transient, "Paris"])

        answer = await engine.answer("Where?", "Result 1:\nParis")

        assert answer == "Paris"
        assert len(model.prompts) == 2
        assert pacer.waits == 2

    async def test_failure_during_extraction_returns_error_marker(self) -> None:
        engine, model, _, _ = _make_engine([NO_RELEVANT_INFORMATION, _fatal()])

        answer = await engine.answer("When?", "x" * 200_000)

        assert is_error_answer(answer)
        assert len(model.prompts) == 2
