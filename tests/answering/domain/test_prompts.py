"""Tests for the answering prompt templates."""

from memorybench.answering.domain.prompts import (
    NO_RELEVANT_INFORMATION,
    answer_prompt,
    extraction_prompt,
    is_error_answer,
    synthesis_prompt,
)


class TestAnswerPrompt:
    def test_question_date_line_is_optional(self) -> None:
        assert "Question Date:" not in answer_prompt("Where?", "ctx", None)
        assert "Question Date: 2023/05/30" in answer_prompt("Where?", "ctx", "2023/05/30")


class TestExtractionPrompt:
    def test_names_the_sentinel(self) -> None:
        prompt = extraction_prompt("Where?", "part text", 2, 4, None)

        assert NO_RELEVANT_INFORMATION in prompt
        assert "Context (Part 2 of 4):\npart text" in prompt


class TestSynthesisPrompt:
    def test_numbers_the_extracts(self) -> None:
        prompt = synthesis_prompt("Where?", ["a", "b"], None)

        assert "Extract 1:\na\n\nExtract 2:\nb" in prompt


class TestIsErrorAnswer:
    def test_marker_prefix(self) -> None:
        assert is_error_answer("Error generating answer: Failed to call model x: boom")
        assert not is_error_answer("Paris")
