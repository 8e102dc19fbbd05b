"""Tests for Checkpoint updates, should_skip and SaveCadence."""

import pytest

from memorybench.checkpoint.domain.cadence import SaveCadence
from memorybench.checkpoint.domain.checkpoint import Checkpoint, FailureEntry, should_skip
from memorybench.checkpoint.domain.errors import CheckpointRegressionError


def _make_checkpoint(phase: str = "search") -> Checkpoint:
    return Checkpoint.start(run_id="run-1", provider_name="fake", phase=phase)


# ---------------------------------------------------------------------------
# advance(): sequential phases
# ---------------------------------------------------------------------------


class TestAdvance:
    """advance() accepts exactly the next index and accumulates results."""

    def test_new_checkpoint_starts_before_first_index(self) -> None:
        checkpoint = _make_checkpoint()

        assert checkpoint.last_processed_index == -1
        assert checkpoint.next_index == 0
        assert checkpoint.is_complete(0)
        assert not checkpoint.is_complete(1)

    def test_advance_records_result_and_id(self) -> None:
        checkpoint = _make_checkpoint().advance(0, "q1", result={"itemId": "q1"})

        assert checkpoint.last_processed_index == 0
        assert checkpoint.processed_ids == ["q1"]
        assert checkpoint.accumulated_results == [{"itemId": "q1"}]

    def test_advance_returns_new_instance(self) -> None:
        original = _make_checkpoint()

        original.advance(0, "q1")

        assert original.last_processed_index == -1

    def test_advance_with_failure_still_moves_forward(self) -> None:
        checkpoint = _make_checkpoint().advance(0, "q1", failure="Failed to search")

        assert checkpoint.next_index == 1
        assert checkpoint.failures == [FailureEntry(item_id="q1", error="Failed to search")]

    def test_counters_accumulate(self) -> None:
        checkpoint = (
            _make_checkpoint("ingest")
            .advance(0, "c1", counters={"documents": 3})
            .advance(1, "c2", counters={"documents": 2})
        )

        assert checkpoint.counters == {"documents": 5}

    @pytest.mark.parametrize("index", [0, 2, 5])
    def test_out_of_order_index_raises(self, index: int) -> None:
        checkpoint = _make_checkpoint().advance(0, "q1")

        with pytest.raises(CheckpointRegressionError) as exc_info:
            checkpoint.advance(index, "qx")

        assert exc_info.value.last_processed_index == 0
        assert "expected index 1" in str(exc_info.value)


# ---------------------------------------------------------------------------
# mark_processed() / record_failure(): phases keyed by item id
# ---------------------------------------------------------------------------


class TestKeyedUpdates:
    """Keyed updates tolerate gaps but never lower last_processed_index."""

    def test_failure_leaves_item_unprocessed(self) -> None:
        checkpoint = _make_checkpoint("evaluate").record_failure(0, "q1", "Failed to judge")

        assert not should_skip(checkpoint, "q1")
        assert checkpoint.last_processed_index == 0
        assert checkpoint.failures[0].item_id == "q1"

    def test_processing_clears_earlier_failure(self) -> None:
        checkpoint = (
            _make_checkpoint("evaluate")
            .record_failure(0, "q1", "Failed to judge")
            .mark_processed(0, "q1", {"itemId": "q1"})
        )

        assert should_skip(checkpoint, "q1")
        assert checkpoint.failures == []

    def test_repeated_failure_keeps_latest_error(self) -> None:
        checkpoint = (
            _make_checkpoint("evaluate")
            .record_failure(0, "q1", "first")
            .record_failure(0, "q1", "second")
        )

        assert checkpoint.failures == [FailureEntry(item_id="q1", error="second")]

    def test_last_processed_index_never_decreases(self) -> None:
        checkpoint = (
            _make_checkpoint("evaluate")
            .mark_processed(4, "q5", {})
            .mark_processed(2, "q3", {})
            .record_failure(1, "q2", "x")
        )

        assert checkpoint.last_processed_index == 4


class TestShouldSkip:
    def test_no_checkpoint(self) -> None:
        assert should_skip(None, "q1") is False

    def test_processed_and_unprocessed_ids(self) -> None:
        checkpoint = _make_checkpoint().advance(0, "q1")

        assert should_skip(checkpoint, "q1") is True
        assert should_skip(checkpoint, "q2") is False


# ---------------------------------------------------------------------------
# SaveCadence
# ---------------------------------------------------------------------------


class TestSaveCadence:
    def test_signals_every_n_items(self) -> None:
        cadence = SaveCadence(every=3)

        assert [cadence.record() for _ in range(7)] == [
            False,
            False,
            True,
            False,
            False,
            True,
            False,
        ]
        assert cadence.pending == 1

    def test_every_one_saves_each_item(self) -> None:
        cadence = SaveCadence(every=1)

        assert cadence.record() and cadence.record()

    def test_flushed_resets_pending(self) -> None:
        cadence = SaveCadence(every=5)
        cadence.record()
        cadence.record()

        cadence.flushed()

        assert cadence.pending == 0

    def test_rejects_non_positive(self) -> None:
        with pytest.raises(ValueError):
            SaveCadence(every=0)
