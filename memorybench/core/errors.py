"""Base exception class for all memorybench-specific errors."""


class MemoryBenchError(Exception):
    """Base class for all memorybench errors."""

    def __init__(self, message: str, retriable: bool = False) -> None:
        super().__init__(message)
        self.retriable = retriable
