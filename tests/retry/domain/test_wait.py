"""Tests for rate-limit heuristics over error text."""

import pytest

from memorybench.retry.domain.wait import looks_rate_limited, suggested_wait_seconds


class TestLooksRateLimited:
    @pytest.mark.parametrize(
        "message",
        [
            "Error code: 429 - Too Many Requests",
            "rate_limit_exceeded",
            "The model is overloaded",
        ],
    )
    def test_rate_limit_messages(self, message: str) -> None:
        assert looks_rate_limited(message)

    def test_ordinary_error_is_not_rate_limited(self) -> None:
        assert not looks_rate_limited("invalid api key")


class TestSuggestedWait:
    def test_try_again_in(self) -> None:
        assert suggested_wait_seconds("Please try again in 8.5s.") == 8.5

    def test_retry_after(self) -> None:
        assert suggested_wait_seconds("Retry after 3s") == 3.0

    def test_seconds_word(self) -> None:
        assert suggested_wait_seconds("wait for 20 seconds before retrying") == 20.0

    def test_no_hint(self) -> None:
        assert suggested_wait_seconds("connection refused") is None
