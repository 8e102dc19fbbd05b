"""Error types raised by the context domain."""

from memorybench.core.errors import MemoryBenchError


class ContextOverflowError(MemoryBenchError):
    """Raised when assembled context is longer than the model's character budget.

    Callers are expected to catch it and switch to split-and-extract answering.
    """

    def __init__(self, length: int, budget: int) -> None:
        self.length = length
        self.budget = budget
        super().__init__(
            f"Failed to fit context into budget: {length} chars > {budget} chars"
        )
