"""Tests for the lexical answer metrics."""

import pytest

from memorybench.metrics.domain.naming import evaluation_phase, report_filename
from memorybench.metrics.domain.text import (
    exact_match,
    f1_score,
    normalize_text,
    strict_exact_match,
)


class TestNormalizeText:
    def test_strips_case_punctuation_and_articles(self) -> None:
        assert normalize_text("The  Eiffel Tower, in Paris!") == "eiffel tower in paris"


class TestExactMatch:
    def test_ground_truth_contained_in_prediction(self) -> None:
        assert exact_match("She moved to Paris in 2022.", "Paris") is True

    def test_missing_ground_truth(self) -> None:
        assert exact_match("She moved to Rome.", "Paris") is False

    def test_empty_ground_truth_never_matches(self) -> None:
        assert exact_match("anything", "the") is False

    def test_strict_requires_equality(self) -> None:
        assert strict_exact_match("Paris.", "paris") is True
        assert strict_exact_match("Paris, France", "Paris") is False


class TestF1Score:
    def test_identical(self) -> None:
        assert f1_score("blue car", "Blue car") == pytest.approx(1.0)

    def test_partial_overlap(self) -> None:
        # precision 1/2, recall 1/1
        assert f1_score("red car", "car") == pytest.approx(2 / 3)

    def test_no_overlap(self) -> None:
        assert f1_score("red", "blue") == 0.0

    def test_empty_prediction(self) -> None:
        assert f1_score("", "blue") == 0.0


class TestNaming:
    def test_model_names_are_file_safe(self) -> None:
        assert report_filename("openai/gpt-4o", "ollama:llama3") == (
            "eval-answer_openai-gpt-4o-judge_ollama-llama3.json"
        )

    def test_evaluation_phase_per_pair(self) -> None:
        assert evaluation_phase("gpt-4o", "gpt-4o-mini") == "evaluate-answer_gpt-4o-judge_gpt-4o-mini"
