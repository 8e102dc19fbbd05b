"""Tests for context assembly and the overflow split."""

import pytest

from memorybench.context.domain.assembler import (
    CHUNKS_HEADER,
    RESULT_SEPARATOR,
    assemble_context,
    deduplicate_chunks,
    format_result,
)
from memorybench.context.domain.budget import ContextBudget, split_context
from memorybench.context.domain.errors import ContextOverflowError
from memorybench.provider.domain.search_result import Chunk, SearchResult, TemporalContext


class TestDeduplicateChunks:
    def test_identical_content_keeps_one_copy_at_lower_position(self) -> None:
        chunks = [Chunk(content="same", position=2), Chunk(content="same", position=5)]

        assert deduplicate_chunks(chunks) == [Chunk(content="same", position=2)]

    def test_duplicates_keep_first_occurrence_in_input_order(self) -> None:
        first = Chunk(content="same", position=5, score=0.9)
        later = Chunk(content="same", position=1, score=0.1)

        assert deduplicate_chunks([first, later]) == [first]

    def test_equal_positions_keep_first_occurrence(self) -> None:
        first = Chunk(content="same", position=1, score=0.9)
        second = Chunk(content="same", position=1, score=0.1)

        assert deduplicate_chunks([first, second]) == [first]

    def test_sorted_by_ascending_position(self) -> None:
        chunks = [
            Chunk(content="c", position=3),
            Chunk(content="a", position=1),
            Chunk(content="b", position=2),
        ]

        assert [chunk.content for chunk in deduplicate_chunks(chunks)] == ["a", "b", "c"]

    def test_content_comparison_is_exact(self) -> None:
        chunks = [Chunk(content="Same", position=0), Chunk(content="same", position=0)]

        assert len(deduplicate_chunks(chunks)) == 2


class TestFormatResult:
    def test_plain_result(self) -> None:
        result = SearchResult(id="1", content="Alice likes tea.")

        assert format_result(1, result) == "Result 1:\nAlice likes tea."

    def test_temporal_context_line(self) -> None:
        result = SearchResult(
            id="1",
            content="Alice moved.",
            temporal_context=TemporalContext(
                document_date="2023-05-08", event_dates=["2023-05-01", "2023-05-02"]
            ),
        )

        assert format_result(2, result).splitlines()[-1] == (
            "Temporal Context: documentDate: 2023-05-08 | eventDate: 2023-05-01, 2023-05-02"
        )


class TestAssembleContext:
    def test_empty_results_give_empty_context(self) -> None:
        assert assemble_context([]) == ""

    def test_results_without_chunks(self) -> None:
        results = [SearchResult(id="1", content="one"), SearchResult(id="2", content="two")]

        assert assemble_context(results) == f"Result 1:\none{RESULT_SEPARATOR}Result 2:\ntwo"

    def test_chunks_are_deduplicated_across_results(self) -> None:
        results = [
            SearchResult(id="1", content="m1", chunks=[Chunk(content="raw", position=4)]),
            SearchResult(
                id="2",
                content="m2",
                chunks=[Chunk(content="raw", position=1), Chunk(content="other", position=0)],
            ),
        ]

        context = assemble_context(results)

        _, chunk_section = context.split(CHUNKS_HEADER)
        assert chunk_section == f"other{RESULT_SEPARATOR}raw"


class TestContextBudget:
    def test_max_chars_uses_ratio(self) -> None:
        assert ContextBudget(max_tokens=30_000, chars_per_token=4).max_chars == 120_000

    def test_ensure_within_raises_on_overflow(self) -> None:
        budget = ContextBudget(max_tokens=10, chars_per_token=4)

        with pytest.raises(ContextOverflowError) as exc_info:
            budget.ensure_within("x" * 41)

        assert exc_info.value.length == 41
        assert exc_info.value.budget == 40

    def test_context_at_budget_fits(self) -> None:
        assert ContextBudget(max_tokens=10, chars_per_token=4).fits("x" * 40)


class TestSplitContext:
    def test_oversized_context_splits_into_four_equal_parts(self) -> None:
        context = "a" * 200_000

        parts = split_context(context)

        assert len(parts) == 4
        assert all(len(part) == 50_000 for part in parts)
        assert "".join(parts) == context

    def test_uneven_length_keeps_every_character(self) -> None:
        parts = split_context("abcdefghij")

        assert parts == ["abc", "def", "ghi", "j"]

    def test_empty_context(self) -> None:
        assert split_context("") == []
