"""Error types raised by the judge domain."""

from memorybench.core.errors import MemoryBenchError


class JudgeParseError(MemoryBenchError):
    """Raised internally when judge output holds no parseable JSON verdict.

    parse_verdict always recovers from it through the text fallbacks.
    """

    def __init__(self, reason: str) -> None:
        super().__init__(f"Failed to parse judge verdict: {reason}")


class JudgeInvocationError(MemoryBenchError):
    """Raised when the judge model could not be called, even after retries."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Failed to judge answer: {reason}")
